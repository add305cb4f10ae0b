from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from bapimap.annotations import Convert, Parameter, RoleMarker, class_metadata, is_structure
from bapimap.conversion.cache import CONVERTER_CACHE, ConverterCache
from bapimap.mapping.model import (ClassMapping, FieldKind, ParameterMapping, StructureKind, StructureMapping,
                                   TableKind, TableMapping)
from bapimap.protocol import ParameterRole
from bapimap.reflection import (DeclaredField, array_element_type, as_class, class_hierarchy, collection_type,
                                declared_fields, generic_element_type, has_no_arg_constructor)
from bapimap.utils.exceptions import MappingError
from bapimap.utils.logging import mapping_debug, mapping_warn


# NOTE [Field Collection]:
# Every mapped class (root or structure) collects its fields by walking the class hierarchy outward, most-derived class
# first, and skipping any field name already recorded. A subclass redeclaring a field therefore replaces the parent's
# declaration while differently named inherited fields are all retained.
def collect_fields(cls: type) -> List[DeclaredField]:
    fields: Dict[str, DeclaredField] = {}
    for klass in class_hierarchy(cls):
        for name, fld in declared_fields(klass).items():
            if name not in fields:
                fields[name] = fld
    return list(fields.values())


def _check_instantiable(cls: type) -> None:
    if not has_no_arg_constructor(cls):
        raise MappingError(f"{cls.__qualname__} can not be instantiated without arguments, every constructor parameter "
                           "needs a default", owner=cls)


def _check_unique(params: Sequence[ParameterMapping], owner: type, what: str, strict: bool = True) -> None:
    seen: Dict[str, ParameterMapping] = {}
    for param in params:
        if param.external_name in seen:
            msg = (f"Duplicate {what} parameter name `{param.external_name}` in {owner.__qualname__} (fields "
                   f"`{seen[param.external_name].field_name}` and `{param.field_name}`)")
            if strict:
                raise MappingError(msg, owner=owner, field_name=param.field_name, parameter_name=param.external_name)
            mapping_warn(msg)
        seen[param.external_name] = param


class AnnotationMapper:
    """Builds the :class:`ClassMapping` of a ``@bapi`` annotated class.

    Building is deterministic and free of side effects beyond populating the converter cache, so repeated calls with
    the same class produce equal mappings. Structures referring back to a structure already being expanded on the same
    path raise a ``MappingError`` instead of recursing without bound.
    """

    def __init__(self, converter_cache: Optional[ConverterCache] = None) -> None:
        self.converter_cache = converter_cache if converter_cache is not None else CONVERTER_CACHE

    def map_class(self, cls: type) -> ClassMapping:
        metadata = class_metadata(cls)
        if metadata is None or metadata.call_name is None:
            raise MappingError(f"{getattr(cls, '__qualname__', cls)} is not a mapped class, it must be decorated "
                               "with `@bapi`", owner=cls if isinstance(cls, type) else None)
        mapping_debug(f"Building mapping for {cls.__qualname__} ({metadata.call_name})")
        _check_instantiable(cls)
        partitioned: Dict[ParameterRole, List[ParameterMapping]] = {role: [] for role in ParameterRole}
        path = (cls,)
        for fld in collect_fields(cls):
            role = self._role_of(fld)
            if role is None:
                if fld.marker(Parameter) is not None:
                    mapping_debug(f"Ignoring field {cls.__qualname__}.{fld.name}, it has no import/export/table role")
                continue
            external_name = self._external_name(fld, required=True)
            if role is ParameterRole.tables:
                partitioned[role].append(self._map_table(fld, external_name, path))
            else:
                partitioned[role].append(self._map_parameter(fld, external_name, path))
        for role, params in partitioned.items():
            _check_unique(params, cls, role.value)
        return ClassMapping(
            associated_type=cls,
            call_name=metadata.call_name,
            import_parameters=tuple(partitioned[ParameterRole.imports]),
            export_parameters=tuple(partitioned[ParameterRole.exports]),
            table_parameters=tuple(partitioned[ParameterRole.tables]),  # type: ignore[arg-type]
        )

    def map_structure(self, cls: type, path: Tuple[type, ...] = ()) -> StructureMapping:
        if not is_structure(cls):
            raise MappingError(f"{cls.__qualname__} is not a structure, it must be decorated with `@bapi_structure`",
                               owner=cls)
        if cls in path:
            cycle = " -> ".join(c.__qualname__ for c in path + (cls,))
            raise MappingError(f"Cyclic structure detected: {cycle}", owner=cls)
        path = path + (cls,)
        mapping_debug(f"Building structure mapping for {cls.__qualname__}")
        _check_instantiable(cls)
        params = []
        for fld in collect_fields(cls):
            if self._role_of(fld) is not None:
                raise MappingError(f"Structure field {cls.__qualname__}.{fld.name} can not carry an "
                                   "import/export/table role", owner=cls, field_name=fld.name)
            external_name = self._external_name(fld, required=False)
            if external_name is None:
                continue
            params.append(self._map_parameter(fld, external_name, path))
        _check_unique(params, cls, "structure", strict=False)
        return StructureMapping(associated_type=cls, parameters=tuple(params))

    def _role_of(self, fld: DeclaredField) -> Optional[ParameterRole]:
        roles = {m.role for m in fld.markers_of(RoleMarker)}
        if len(roles) > 1:
            raise MappingError(f"Conflicting role annotations on {fld.owner.__qualname__}.{fld.name}: "
                               f"{sorted(r.value for r in roles)}", owner=fld.owner, field_name=fld.name)
        return roles.pop() if roles else None

    def _external_name(self, fld: DeclaredField, required: bool) -> Optional[str]:
        params = fld.markers_of(Parameter)
        if len(params) > 1:
            raise MappingError(f"Field {fld.owner.__qualname__}.{fld.name} is bound to more than one parameter",
                               owner=fld.owner, field_name=fld.name)
        if not params:
            if required:
                raise MappingError(f"Field {fld.owner.__qualname__}.{fld.name} has a role but no `Parameter` name",
                                   owner=fld.owner, field_name=fld.name)
            return None
        return params[0].name

    def _converter_of(self, fld: DeclaredField, external_name: str) -> Optional[object]:
        converts = fld.markers_of(Convert)
        if not converts:
            return None
        if len(converts) > 1:
            raise MappingError(f"Field {fld.owner.__qualname__}.{fld.name} declares more than one converter",
                               owner=fld.owner, field_name=fld.name, parameter_name=external_name)
        converter_type = converts[0].converter
        if not isinstance(converter_type, type):
            raise MappingError(f"Field {fld.owner.__qualname__}.{fld.name} must name a converter type in `Convert`, "
                               f"got {converter_type!r}", owner=fld.owner, field_name=fld.name,
                               parameter_name=external_name)
        return self.converter_cache.get(converter_type)

    def _map_parameter(self, fld: DeclaredField, external_name: str, path: Tuple[type, ...]) -> ParameterMapping:
        converter = self._converter_of(fld, external_name)
        structure_type, array = fld.declared_type, False
        if not is_structure(structure_type):
            structure_type, array = array_element_type(fld.type_hint), True
        if is_structure(structure_type):
            if converter is not None:
                raise MappingError(f"Field {fld.owner.__qualname__}.{fld.name} is a structure and can not also "
                                   "declare a converter", owner=fld.owner, field_name=fld.name,
                                   parameter_name=external_name)
            kind = StructureKind(structure=self.map_structure(structure_type, path), array=array)  # type: ignore
            return ParameterMapping(external_name=external_name, field_name=fld.name, owner=fld.owner,
                                    field_type=fld.type_hint, associated_type=structure_type, kind=kind)
        return ParameterMapping(external_name=external_name, field_name=fld.name, owner=fld.owner,
                                field_type=fld.type_hint, associated_type=as_class(fld.type_hint) or fld.type_hint,
                                kind=FieldKind(converter=converter))

    def _map_table(self, fld: DeclaredField, external_name: str, path: Tuple[type, ...]) -> TableMapping:
        if fld.markers_of(Convert):
            raise MappingError(f"Table field {fld.owner.__qualname__}.{fld.name} can not declare a converter",
                               owner=fld.owner, field_name=fld.name, parameter_name=external_name)
        element_type = array_element_type(fld.type_hint)
        if element_type is not None:
            coll_type: Optional[type] = tuple
        else:
            coll_type = collection_type(fld.type_hint)
            # fixed-length tuples are records, not row collections
            if coll_type is None or issubclass(coll_type, tuple):
                raise MappingError(f"Table field {fld.owner.__qualname__}.{fld.name} must be a collection or a "
                                   f"homogeneous tuple, got {fld.type_hint!r}", owner=fld.owner, field_name=fld.name,
                                   parameter_name=external_name)
            element_type = generic_element_type(fld)
        if element_type is None or not is_structure(element_type):
            raise MappingError(f"Table element of {fld.owner.__qualname__}.{fld.name} must be a mapped structure, "
                               f"got {element_type!r}", owner=fld.owner, field_name=fld.name,
                               parameter_name=external_name)
        component = self.map_structure(element_type, path)
        return TableMapping(external_name=external_name, field_name=fld.name, owner=fld.owner,
                            field_type=fld.type_hint, associated_type=element_type,
                            kind=TableKind(collection_type=coll_type, component=component))  # type: ignore[arg-type]


def build_mapping(cls: type) -> ClassMapping:
    """Build the mapping of ``cls`` with a default mapper, see :class:`AnnotationMapper`."""
    return AnnotationMapper().map_class(cls)
