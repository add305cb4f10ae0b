"""Reflective access to the fields a class declares in its own body.

Nothing here knows about mapping semantics: this module reads and writes declared fields, inspects their generic type
arguments and constructs instances. Field discovery is per-level, callers that need inherited fields walk
:func:`class_hierarchy` and combine the results.
"""
from __future__ import annotations

import collections
import collections.abc
import inspect
import typing
from dataclasses import dataclass
from types import UnionType
from typing import Any, Annotated, Dict, Iterable, Optional, Tuple, Type, Union

from bapimap.annotations import FieldMarker, normalize_marker
from bapimap.utils.exceptions import (FieldAccessError, FieldNotFoundError, InstantiationError, InvalidAssignmentError,
                                      MappingError)


@dataclass(frozen=True)
class DeclaredField:
    """A field as declared in the body of ``owner``.

    ``type_hint`` is the resolved annotation with any ``Annotated`` wrapper (and an ``Optional`` wrapper) removed,
    ``markers`` holds the ``Annotated`` metadata in declaration order.
    """

    name: str
    owner: type
    type_hint: Any
    markers: Tuple[Any, ...] = ()

    @property
    def declared_type(self) -> Optional[type]:
        return as_class(self.type_hint)

    def markers_of(self, marker_type: Type[FieldMarker]) -> Tuple[Any, ...]:
        return tuple(m for m in self.markers if isinstance(m, marker_type))

    def marker(self, marker_type: Type[FieldMarker]) -> Optional[Any]:
        found = self.markers_of(marker_type)
        return found[0] if found else None


################################################################################
# Type hint helpers
################################################################################


def _unwrap_optional(hint: Any) -> Any:
    origin = typing.get_origin(hint)
    if origin is Union or origin is UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def split_annotated(hint: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Separate a (possibly ``Optional``) ``Annotated`` hint into its underlying type and its metadata."""
    markers: Tuple[Any, ...] = ()
    hint = _unwrap_optional(hint)
    while typing.get_origin(hint) is Annotated:
        markers = markers + tuple(normalize_marker(m) for m in hint.__metadata__)
        hint = _unwrap_optional(hint.__origin__)
    return hint, markers


def as_class(hint: Any) -> Optional[type]:
    """Return the runtime class underlying ``hint`` or ``None`` for type variables, ``Any`` and the like."""
    hint, _ = split_annotated(hint)
    if hint is Any:
        return None
    if isinstance(hint, type):
        return hint
    origin = typing.get_origin(hint)
    if isinstance(origin, type):
        return origin
    return None


def class_hierarchy(cls: type) -> Tuple[type, ...]:
    """The classes to inspect for fields, most-derived first, excluding ``object``."""
    return tuple(klass for klass in inspect.getmro(cls) if klass is not object)


################################################################################
# Field discovery
################################################################################


def _mangled(owner: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{owner.__name__.lstrip('_')}{name}"
    return name


def declared_fields(cls: type) -> Dict[str, DeclaredField]:
    """The fields annotated in the body of ``cls`` itself, in declaration order.

    ``ClassVar`` annotations are not fields and are skipped.
    """
    own = inspect.get_annotations(cls)
    if not own:
        return {}
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise MappingError(f"Unable to resolve the field annotations of {cls.__qualname__}: {e}", owner=cls) from e
    fields: Dict[str, DeclaredField] = {}
    for name in own:
        hint = hints.get(name, own[name])
        if typing.get_origin(hint) is typing.ClassVar:
            continue
        try:
            type_hint, markers = split_annotated(hint)
        except MappingError as e:
            e.fill_location(cls, name)
            raise
        fields[name] = DeclaredField(name=name, owner=cls, type_hint=type_hint, markers=markers)
    return fields


def declared_field(obj: Any, name: str, owner: Optional[type] = None) -> DeclaredField:
    """Look up the field ``name`` declared by ``owner`` (the runtime class of ``obj`` by default).

    Only the given class level is searched, superclasses are not consulted.
    """
    owner = owner if owner is not None else type(obj)
    fields = declared_fields(owner)
    for candidate in (name, _mangled(owner, name)):
        if candidate in fields:
            return fields[candidate]
    raise FieldNotFoundError(f"Field {owner.__qualname__}.{name} does not exist in class {owner.__qualname__}",
                             owner=owner, field_name=name)


def field_value(obj: Any, name: str, owner: Optional[type] = None) -> Any:
    """Read the current value of a declared field, bypassing any ``__getattr__``/property indirection."""
    fld = declared_field(obj, name, owner=owner)
    try:
        return object.__getattribute__(obj, fld.name)
    except AttributeError as e:
        raise FieldAccessError(f"Field {fld.owner.__qualname__}.{name} is not accessible: {e}", owner=fld.owner,
                               field_name=name) from e


def set_field_value(obj: Any, name: str, value: Any, owner: Optional[type] = None) -> None:
    """Assign ``value`` to a declared field in place, bypassing frozen dataclass and ``__setattr__`` guards.

    ``None`` is rejected: an absent external value leaves the field untouched rather than clearing it.
    """
    target_cls = owner if owner is not None else type(obj)
    if value is None:
        raise InvalidAssignmentError(f"Cannot set a None value on field {name} of {target_cls.__qualname__}",
                                     owner=target_cls, field_name=name)
    fld = declared_field(obj, name, owner=owner)
    try:
        object.__setattr__(obj, fld.name, value)
    except (AttributeError, TypeError) as e:
        raise FieldAccessError(f"Can not assign an object of type {type(value).__qualname__} to the field "
                               f"{fld.owner.__qualname__}.{name}", owner=fld.owner, field_name=name) from e


################################################################################
# Generic and array element types
################################################################################


def generic_element_type(field_or_hint: Union[DeclaredField, Any]) -> Optional[type]:
    """The single type argument of a generic container hint such as ``List[Row]``.

    Returns ``None`` if the hint is not generic or has zero or more than one type argument.
    """
    hint = field_or_hint.type_hint if isinstance(field_or_hint, DeclaredField) else split_annotated(field_or_hint)[0]
    if typing.get_origin(hint) is None:
        return None
    args = typing.get_args(hint)
    if len(args) != 1:
        return None
    return as_class(args[0])


def array_element_type(hint: Any) -> Optional[type]:
    """The element type of a homogeneous variadic tuple (``Tuple[Row, ...]``), the array shape in Python typing."""
    hint = hint.type_hint if isinstance(hint, DeclaredField) else split_annotated(hint)[0]
    if typing.get_origin(hint) is not tuple:
        return None
    args = typing.get_args(hint)
    if len(args) == 2 and args[1] is Ellipsis:
        return as_class(args[0])
    return None


_NON_COLLECTIONS = (str, bytes, bytearray, collections.abc.Mapping)


def collection_type(hint: Any) -> Optional[type]:
    """The concrete collection type to instantiate for ``hint``, or ``None`` if it is not a collection.

    Abstract set types resolve to ``set`` and any other abstract collection or iterable to ``list``.
    """
    cls = as_class(hint)
    if cls is None or not issubclass(cls, collections.abc.Iterable) or issubclass(cls, _NON_COLLECTIONS):
        return None
    if not inspect.isabstract(cls) and issubclass(cls, collections.abc.Collection):
        return cls
    if issubclass(cls, collections.abc.Set):
        return set
    return list


################################################################################
# Instantiation
################################################################################


def has_no_arg_constructor(cls: type) -> bool:
    """Whether the signature of ``cls`` allows calling it without arguments.

    Classes whose signature can not be inspected are assumed to be constructible.
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return True
    return all(p.default is not p.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
               for p in signature.parameters.values())


def new_instance(cls: type) -> Any:
    """Construct ``cls`` through its no-argument constructor."""
    if not isinstance(cls, type):
        raise InstantiationError(f"Can not create an instance of {cls!r}, it is not a class")
    try:
        return cls()
    except Exception as e:
        raise InstantiationError(f"Can not create an instance of type {cls.__qualname__}: {e}", owner=cls) from e


def new_collection_instance(coll_type: type, items: Iterable[Any] = ()) -> Any:
    try:
        return coll_type(items)
    except Exception as e:
        raise InstantiationError(f"Can not create a collection of type {coll_type.__qualname__}: {e}",
                                 owner=coll_type) from e
