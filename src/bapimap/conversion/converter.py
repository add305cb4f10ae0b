from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import override

from bapimap.utils.exceptions import ConversionError


class Converter(ABC):
    """A stateless, bidirectional value transform bound to a mapped field.

    The external representation is whatever the underlying call transport hands out (typically strings and numbers),
    the Python representation is whatever the annotated field declares. A field is bound to a converter with
    ``Annotated[..., Convert(MyConverter)]``. Converters are instantiated once per type and shared, so they
    must not keep per-call state.
    """

    @abstractmethod
    def convert_to_python(self, external_value: Any) -> Any:
        """Convert a value received from the external system to the field's Python type.

        Raises:
            ConversionError: if ``external_value`` can not be converted
        """

    @abstractmethod
    def convert_to_external(self, value: Any) -> Any:
        """Convert a field value to the representation expected by the external system.

        Raises:
            ConversionError: if ``value`` can not be converted
        """

    # stateless, so every instance of a converter type is interchangeable
    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BooleanConverter(Converter):
    """Maps the external flag convention (``"X"`` set, blank unset) to ``bool``."""

    TRUE_VALUE = "X"
    FALSE_VALUE = ""

    @override
    def convert_to_python(self, external_value: Any) -> bool:
        if not isinstance(external_value, str):
            raise ConversionError(f"{type(self).__name__} expects a character flag, got "
                                  f"{type(external_value).__qualname__}: {external_value!r}")
        return external_value.strip().upper() == self.TRUE_VALUE

    @override
    def convert_to_external(self, value: Any) -> str:
        if not isinstance(value, bool):
            raise ConversionError(f"{type(self).__name__} expects a bool, got {type(value).__qualname__}: {value!r}")
        return self.TRUE_VALUE if value else self.FALSE_VALUE


class CharConverter(Converter):
    """Single character fields, an empty external value maps to a blank."""

    @override
    def convert_to_python(self, external_value: Any) -> str:
        if not isinstance(external_value, str) or len(external_value) > 1:
            raise ConversionError(f"{type(self).__name__} expects at most one character, got {external_value!r}")
        return external_value or " "

    @override
    def convert_to_external(self, value: Any) -> str:
        if not isinstance(value, str) or len(value) != 1:
            raise ConversionError(f"{type(self).__name__} expects exactly one character, got {value!r}")
        return value


class NumberStringConverter(Converter):
    """Numeric character fields (digits, possibly zero padded) to ``int``."""

    @override
    def convert_to_python(self, external_value: Any) -> int:
        if not isinstance(external_value, str):
            raise ConversionError(f"{type(self).__name__} expects a numeric string, got {external_value!r}")
        stripped = external_value.strip()
        if not stripped:
            return 0
        try:
            return int(stripped)
        except ValueError as e:
            raise ConversionError(f"{external_value!r} is not a numeric string") from e

    @override
    def convert_to_external(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(f"{type(self).__name__} expects an int, got {type(value).__qualname__}: {value!r}")
        return str(value)
