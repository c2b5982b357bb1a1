"""
Tagged unions with a runtime discriminant.

A tagged union class enumerates its arms as class attributes created with `variant()`.
Each arm object is at once the constructor for that arm, the predicate that tests a
value for it, and the typed accessor for its payload:

    class Fruit(TaggedUnion):
        Apple = variant(int)
        Orange = variant(int)
        Rotten = variant()

    fruit = Fruit.Apple(15)
    Fruit.Apple.matches(fruit)   # True
    Fruit.Apple.payload(fruit)   # 15

`Option` and `Result` are the two built-in containers.
"""

from typing import Any, Dict, Tuple

from inner.inner_adapter import IntoResult


class InnerVariant:
    """One named arm of a tagged union."""

    def __init__(self, *field_types: Any) -> None:
        """
        Declare an arm.

        Args:
            field_types: The type of each payload field.  Fields whose type is a class
                are checked with isinstance() on construction; anything else (e.g.
                typing constructs) is accepted unchecked.
        """
        self.field_types = field_types
        self.name = ""
        self.owner: type | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    @property
    def qualified_name(self) -> str:
        owner = self.owner.__name__ if self.owner is not None else "?"
        return f"{owner}.{self.name}"

    def __call__(self, *values: Any) -> "TaggedUnion":
        assert self.owner is not None, "Variant used before being attached to a TaggedUnion class"
        if len(values) != len(self.field_types):
            raise TypeError(
                f"{self.qualified_name} takes {len(self.field_types)} value(s), got {len(values)}"
            )

        for index, (value, field_type) in enumerate(zip(values, self.field_types)):
            if isinstance(field_type, type) and field_type is not object and not isinstance(value, field_type):
                raise TypeError(
                    f"{self.qualified_name} field {index} expects {field_type.__name__}, "
                    f"got {type(value).__name__}"
                )

        instance = object.__new__(self.owner)
        instance._tag = self.name
        instance._values = values
        return instance

    def matches(self, value: Any) -> bool:
        """Return True if value is an instance of this arm."""
        return isinstance(value, TaggedUnion) and value.variant is self

    def payload(self, value: "TaggedUnion") -> Any:
        """
        Return the payload of value, which must be an instance of this arm.

        Returns `()` for an arm without fields, the field itself for one field, and a
        tuple for several.

        Raises:
            ValueError: If value holds a different arm
        """
        if not self.matches(value):
            raise ValueError(f"{value!r} is not a {self.qualified_name}")

        return value.payload

    def __repr__(self) -> str:
        return f"<variant {self.qualified_name}>"


def variant(*field_types: Any) -> Any:
    """Declare an arm of a TaggedUnion subclass."""
    return InnerVariant(*field_types)


class TaggedUnion:
    """
    Base class for tagged unions.

    Instances are only created through their arms.  They are immutable, compare equal
    when they hold the same arm with equal values, and hash accordingly.
    """

    __slots__ = ("_tag", "_values")

    _variants: Dict[str, InnerVariant] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        variants = dict(getattr(cls, "_variants", {}))
        for name, attr in cls.__dict__.items():
            if isinstance(attr, InnerVariant):
                variants[name] = attr

        cls._variants = variants

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(f"Construct {type(self).__name__} values through one of its variants")

    @classmethod
    def variants(cls) -> Tuple[InnerVariant, ...]:
        """Return the arms of this union, in declaration order."""
        return tuple(cls._variants.values())

    @property
    def tag(self) -> str:
        """The runtime discriminant: the name of the arm this value holds."""
        return self._tag

    @property
    def variant(self) -> InnerVariant:
        return type(self)._variants[self._tag]

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    @property
    def payload(self) -> Any:
        if not self._values:
            return ()

        if len(self._values) == 1:
            return self._values[0]

        return self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaggedUnion):
            return NotImplemented

        return self.variant is other.variant and self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._tag, self._values))

    def __setattr__(self, name: str, value: Any) -> None:
        if name in TaggedUnion.__slots__ and not hasattr(self, name):
            object.__setattr__(self, name, value)
            return

        raise AttributeError(f"{type(self).__name__} values are immutable")

    def __repr__(self) -> str:
        values = ", ".join(repr(v) for v in self._values)
        return f"{type(self).__name__}.{self._tag}({values})"


class Option(TaggedUnion, IntoResult):
    """Built-in optional container: `Some(value)` or `Nothing()`."""

    __slots__ = ()

    Some = variant(object)
    Nothing = variant()

    def into_result(self) -> "Result":
        if self._tag == "Some":
            return Result.Ok(self._values[0])

        return Result.Err(())

    def is_some(self) -> bool:
        return self._tag == "Some"


class Result(TaggedUnion, IntoResult):
    """Built-in success/error container: `Ok(value)` or `Err(error)`."""

    __slots__ = ()

    Ok = variant(object)
    Err = variant(object)

    def into_result(self) -> "Result":
        return self

    def is_ok(self) -> bool:
        return self._tag == "Ok"

    @property
    def error(self) -> Any:
        """The error payload of an Err value."""
        return Result.Err.payload(self)


Some = Option.Some
Nothing = Option.Nothing
Ok = Result.Ok
Err = Result.Err
