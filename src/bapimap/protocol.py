from __future__ import annotations
from typing import Any, Protocol, TypeAlias, Union, runtime_checkable
from os import PathLike
from enum import auto, Enum


################################################################################
# bapimap helper types
################################################################################

StrOrPath: TypeAlias = Union[str, PathLike]

################################################################################
# bapimap Enhanced Enums
################################################################################


class AutoStrEnum(Enum):
    def _generate_next_value_(name, _start, _count, _last_values) -> str:  # type: ignore
        return name


# NOTE [Parameter Roles]:
# A role decides which side of an external call a field participates in. Roles are mutually exclusive per field.
class ParameterRole(AutoStrEnum):
    # IMPORT: the field value is sent to the external system before the call is executed
    imports = auto()
    # EXPORT: the field is filled from the values returned by the external system
    exports = auto()
    # TABLE: a repeating row collection that can be both sent and received
    tables = auto()


# The structural shape of a single mapped parameter, derived from its mapping kind.
class ParamType(AutoStrEnum):
    field = auto()
    structure = auto()
    table = auto()


################################################################################
# Conversion protocol
################################################################################


@runtime_checkable
class ConverterProtocol(Protocol):
    def convert_to_python(self, external_value: Any) -> Any: ...

    def convert_to_external(self, value: Any) -> Any: ...
