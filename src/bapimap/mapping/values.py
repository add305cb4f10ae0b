from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from bapimap.mapping.model import ClassMapping, ParameterMapping, StructureKind, StructureMapping, TableKind
from bapimap.reflection import field_value, new_collection_instance, new_instance, set_field_value
from bapimap.utils.exceptions import ConversionError


@dataclass
class FunctionValues:
    """The name-keyed value space of a single external call.

    Structures are nested dicts keyed by external parameter name, tables are lists of such dicts.
    """

    imports: Dict[str, Any] = field(default_factory=dict)
    exports: Dict[str, Any] = field(default_factory=dict)
    tables: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)


class ValueMapper:
    """Applies a :class:`ClassMapping` to move values between annotated objects and :class:`FunctionValues`."""

    def to_external(self, obj: Any, mapping: ClassMapping) -> FunctionValues:
        """Collect the import and table parameters of ``obj``. Fields holding ``None`` are not sent."""
        values = FunctionValues()
        for param in mapping.import_parameters:
            self._collect(obj, param, values.imports)
        for table in mapping.table_parameters:
            self._collect(obj, table, values.tables)
        return values

    def from_external(self, values: FunctionValues, mapping: ClassMapping, target: Optional[Any] = None) -> Any:
        """Fill the export and table parameters of ``target`` (a new instance by default) from ``values``.

        Parameters missing from ``values`` or holding ``None`` leave the corresponding field untouched.
        """
        target = target if target is not None else new_instance(mapping.associated_type)
        for param in mapping.export_parameters:
            self._assign(target, param, values.exports)
        for table in mapping.table_parameters:
            self._assign(target, table, values.tables)
        return target

    def _collect(self, obj: Any, param: ParameterMapping, into: Dict[str, Any]) -> None:
        value = field_value(obj, param.field_name, owner=param.owner)
        if value is None:
            return
        kind = param.kind
        if isinstance(kind, TableKind):
            into[param.external_name] = [self._structure_to_external(row, kind.component) for row in value]
        elif isinstance(kind, StructureKind):
            if kind.array:
                into[param.external_name] = [self._structure_to_external(v, kind.structure) for v in value]
            else:
                into[param.external_name] = self._structure_to_external(value, kind.structure)
        elif kind.converter is not None:
            try:
                into[param.external_name] = kind.converter.convert_to_external(value)
            except ConversionError as e:
                e.fill_location(param.owner, param.field_name, param.external_name)
                raise
        else:
            into[param.external_name] = value

    def _structure_to_external(self, obj: Any, structure: StructureMapping) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for param in structure.parameters:
            self._collect(obj, param, values)
        return values

    def _assign(self, target: Any, param: ParameterMapping, source: Mapping[str, Any]) -> None:
        external_value = source.get(param.external_name)
        if external_value is None:
            return
        value = self._to_python(param, external_value)
        if value is not None:
            set_field_value(target, param.field_name, value, owner=param.owner)

    def _to_python(self, param: ParameterMapping, external_value: Any) -> Any:
        kind = param.kind
        if isinstance(kind, TableKind):
            rows = [self._structure_from_external(row, kind.component) for row in external_value]
            return new_collection_instance(kind.collection_type, rows)
        if isinstance(kind, StructureKind):
            if kind.array:
                return tuple(self._structure_from_external(v, kind.structure) for v in external_value)
            return self._structure_from_external(external_value, kind.structure)
        if kind.converter is not None:
            try:
                return kind.converter.convert_to_python(external_value)
            except ConversionError as e:
                e.fill_location(param.owner, param.field_name, param.external_name)
                raise
        return external_value

    def _structure_from_external(self, values: Any, structure: StructureMapping) -> Any:
        if not isinstance(values, Mapping):
            raise ConversionError(f"Expected a mapping of parameter values for structure "
                                  f"{structure.associated_type.__qualname__}, got {type(values).__qualname__}",
                                  owner=structure.associated_type)
        obj = new_instance(structure.associated_type)
        for param in structure.parameters:
            self._assign(obj, param, values)
        return obj
