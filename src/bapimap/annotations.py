"""Declarative markers used to describe how a class maps onto an external call.

Classes are marked with the :func:`bapi` or :func:`bapi_structure` decorators and their fields carry
``typing.Annotated`` metadata::

    @bapi("BAPI_FLIGHT_GETLIST")
    class FlightList:
        airline: Annotated[str, Import(), Parameter("AIRLINE")] = ""
        flights: Annotated[List[Flight], Table(), Parameter("FLIGHT_LIST")] = field(default_factory=list)

Class-level metadata is stored on the decorated class itself (never inherited) so a subclass of a mapped class is only
mapped once it is decorated again.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Type, TypeVar, overload

from bapimap.protocol import ParameterRole
from bapimap.utils.exceptions import MappingError

_T = TypeVar("_T", bound=type)

BAPIMAP_CLS_METADATA_ATTR = "_bapimap_cls_metadata"


@dataclass(frozen=True)
class BapiClassMetadata:
    """Class-level mapping metadata attached by the class decorators.

    ``call_name`` is the external call identifier and is only set for :func:`bapi` classes.
    """

    call_name: Optional[str] = None
    structure: bool = False


def _attach(cls: type, metadata: BapiClassMetadata) -> type:
    if not isinstance(cls, type):
        raise TypeError(f"Mapping decorators can only be applied to classes, got {cls!r}")
    setattr(cls, BAPIMAP_CLS_METADATA_ATTR, metadata)
    return cls


def bapi(call_name: str) -> Callable[[_T], _T]:
    """Mark a class as the Python-side representation of the external call ``call_name``."""
    if not isinstance(call_name, str) or not call_name:
        raise TypeError("`bapi` requires a non-empty external call name")

    def decorator(cls: _T) -> _T:
        return _attach(cls, BapiClassMetadata(call_name=call_name))  # type: ignore[return-value]

    return decorator


@overload
def bapi_structure(cls: _T) -> _T: ...


@overload
def bapi_structure(cls: None = None) -> Callable[[_T], _T]: ...


def bapi_structure(cls=None):
    """Mark a class as a structure, usable with or without parentheses."""
    if cls is None:
        return lambda c: _attach(c, BapiClassMetadata(structure=True))
    return _attach(cls, BapiClassMetadata(structure=True))


def class_metadata(cls: Any) -> Optional[BapiClassMetadata]:
    if not isinstance(cls, type):
        return None
    return cls.__dict__.get(BAPIMAP_CLS_METADATA_ATTR)


def is_bapi(cls: Any) -> bool:
    metadata = class_metadata(cls)
    return metadata is not None and metadata.call_name is not None


def is_structure(cls: Any) -> bool:
    metadata = class_metadata(cls)
    return metadata is not None and metadata.structure


################################################################################
# Field markers
################################################################################


class FieldMarker:
    """Base class of everything the mapper recognizes inside ``Annotated`` metadata."""


@dataclass(frozen=True)
class RoleMarker(FieldMarker):
    role: ClassVar[ParameterRole]


@dataclass(frozen=True)
class Import(RoleMarker):
    role: ClassVar[ParameterRole] = ParameterRole.imports


@dataclass(frozen=True)
class Export(RoleMarker):
    role: ClassVar[ParameterRole] = ParameterRole.exports


@dataclass(frozen=True)
class Table(RoleMarker):
    role: ClassVar[ParameterRole] = ParameterRole.tables


@dataclass(frozen=True)
class Parameter(FieldMarker):
    """The external parameter name a field is bound to."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise TypeError("`Parameter` requires a non-empty external parameter name")


@dataclass(frozen=True)
class Convert(FieldMarker):
    """Bind a converter type to a field, converted values are applied at call time."""

    converter: Type[Any]


def normalize_marker(candidate: Any) -> Any:
    """Role markers may be given as bare classes (``Import``) or instances (``Import()``).

    Markers carrying a value (``Parameter``, ``Convert``) are only meaningful as instances, a bare class is rejected.
    """
    if isinstance(candidate, type) and issubclass(candidate, FieldMarker):
        if issubclass(candidate, RoleMarker) and candidate is not RoleMarker:
            return candidate()
        raise MappingError(f"`{candidate.__name__}` requires an argument, annotate the field with "
                           f"`{candidate.__name__}(...)` instead of the bare class")
    return candidate
