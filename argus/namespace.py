"""
Parsed-value container.

A Namespace holds one slot per field declared in its Schema. It is created by
Schema.defaults() with every slot initialized (Optional → declared default,
Boolean → False, Required → the converter's zero) and filled in by the parser.

Access
- attribute style: namespace.threads
- item style: namespace["threads"]
- iteration yields field names in declaration order; asdict() returns a copy.

Public writes are rejected; only the parser assigns, through _assign(). copy.copy()
and copy.deepcopy() produce namespaces bound to the same schema.
"""
import copy


class Namespace:
    __slots__ = ("_schema", "_values")

    def __init__(self, schema, values, /):
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_values", dict(values))

    schema = property(lambda self: self._schema)

    def __getattr__(self, name, /):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"namespace has no field {name!r}") from None

    def __setattr__(self, name, value, /):
        raise AttributeError(f"namespace field {name!r} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"namespace field {name!r} cannot be deleted")

    def __getitem__(self, name, /):
        return self._values[name]

    def __contains__(self, name, /):
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other, /):
        if not isinstance(other, Namespace):
            return NotImplemented
        return self._schema is other._schema and self._values == other._values

    __hash__ = None

    # Copies stay bound to the same schema so the parser still accepts them.
    def __copy__(self):
        return type(self)(self._schema, self._values)

    def __deepcopy__(self, memo, /):
        return type(self)(self._schema, copy.deepcopy(self._values, memo))

    def __reduce__(self):
        return type(self), (self._schema, self._values)

    def asdict(self):
        """
        Return a shallow copy of the field values, in declaration order.
        """
        return dict(self._values)

    def _assign(self, name, value, /):
        if name not in self._values:
            raise KeyError(name)
        self._values[name] = value

    def __repr__(self):
        fields = ", ".join("%s=%r" % pair for pair in self._values.items())
        return f"namespace({fields})"

    def __rich_repr__(self):
        yield from self._values.items()


__all__ = (
    "Namespace",
)
