__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argus'
__license__ = 'MIT'
__version__ = "0.1.0"

from .arguments import *
from .converters import *
from .faults import *
from .namespace import *
from .parser import *
from .schema import *
from . import helper

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "helper",
)

# Load the exposed API of the declarations
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the converters
__all__ += converters.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the container, parser and schema
__all__ += namespace.__all__  # type: ignore[attr-defined]
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += schema.__all__  # type: ignore[attr-defined]
