"""Immutable description of how an annotated class maps onto an external call.

Instances are produced by :class:`~bapimap.mapping.mapper.AnnotationMapper` and never mutated afterwards, so a single
:class:`ClassMapping` can be shared by any number of concurrent callers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

from tabulate import tabulate

from bapimap.protocol import ParamType, ParameterRole


################################################################################
# Parameter kinds
################################################################################


@dataclass(frozen=True)
class FieldKind:
    """A plain value, optionally passed through a converter."""

    converter: Optional[Any] = None


@dataclass(frozen=True)
class StructureKind:
    """A composite value described by a nested structure.

    ``array`` is set when the field holds a homogeneous tuple of structures rather than a single one.
    """

    structure: StructureMapping
    array: bool = False


@dataclass(frozen=True)
class TableKind:
    """A repeating row collection, re-instantiated as ``collection_type`` on the receiving side."""

    collection_type: type
    component: StructureMapping


MappingKind = Union[FieldKind, StructureKind, TableKind]


################################################################################
# Mapping model
################################################################################


@dataclass(frozen=True)
class ParameterMapping:
    """One field bound to one named external parameter."""

    external_name: str
    field_name: str
    owner: type
    field_type: Any
    associated_type: Any
    kind: MappingKind = FieldKind()

    @property
    def param_type(self) -> ParamType:
        if isinstance(self.kind, TableKind):
            return ParamType.table
        if isinstance(self.kind, StructureKind):
            return ParamType.structure
        return ParamType.field

    @property
    def converter(self) -> Optional[Any]:
        return self.kind.converter if isinstance(self.kind, FieldKind) else None

    @property
    def structure(self) -> Optional[StructureMapping]:
        if isinstance(self.kind, StructureKind):
            return self.kind.structure
        if isinstance(self.kind, TableKind):
            return self.kind.component
        return None


@dataclass(frozen=True)
class TableMapping(ParameterMapping):
    """A table parameter, ``associated_type`` is the row (element) type."""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TableKind):
            raise TypeError(f"A TableMapping requires a TableKind, got {type(self.kind).__name__}")

    @property
    def collection_type(self) -> type:
        return self.kind.collection_type  # type: ignore[union-attr]

    @property
    def component_parameter(self) -> StructureMapping:
        return self.kind.component  # type: ignore[union-attr]


def _lookup(params: Tuple[ParameterMapping, ...], name: str, what: str) -> ParameterMapping:
    for param in params:
        if param.external_name == name:
            return param
    available = ", ".join(p.external_name for p in params) or "<none>"
    raise KeyError(f"No {what} named `{name}`. Available: {available}")


@dataclass(frozen=True)
class StructureMapping:
    """A composite external parameter: the structure type and its child parameters, inherited ones included."""

    associated_type: type
    parameters: Tuple[ParameterMapping, ...] = ()

    def parameter(self, external_name: str) -> ParameterMapping:
        return _lookup(self.parameters, external_name, f"structure parameter of {self.associated_type.__qualname__}")

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(p.external_name for p in self.parameters)

    def __iter__(self) -> Iterator[ParameterMapping]:
        return iter(self.parameters)

    def __len__(self) -> int:
        return len(self.parameters)


@dataclass(frozen=True)
class ClassMapping:
    """Root mapping of one ``@bapi`` class: the external call name and its parameters partitioned by role."""

    associated_type: type
    call_name: str
    import_parameters: Tuple[ParameterMapping, ...] = ()
    export_parameters: Tuple[ParameterMapping, ...] = ()
    table_parameters: Tuple[TableMapping, ...] = ()

    def import_parameter(self, external_name: str) -> ParameterMapping:
        return _lookup(self.import_parameters, external_name, f"import parameter of {self.call_name}")

    def export_parameter(self, external_name: str) -> ParameterMapping:
        return _lookup(self.export_parameters, external_name, f"export parameter of {self.call_name}")

    def table_parameter(self, external_name: str) -> TableMapping:
        return _lookup(self.table_parameters, external_name, f"table parameter of {self.call_name}")  # type: ignore

    def parameters_by_role(self) -> Tuple[Tuple[ParameterRole, Tuple[ParameterMapping, ...]], ...]:
        return ((ParameterRole.imports, self.import_parameters),
                (ParameterRole.exports, self.export_parameters),
                (ParameterRole.tables, self.table_parameters))

    def describe(self) -> str:
        """A tabulated summary of every parameter, nested structure parameters indented below their parent."""
        rows = []

        def add_rows(role: str, param: ParameterMapping, depth: int = 0) -> None:
            converter = param.converter
            rows.append((role if depth == 0 else "", ". " * depth + param.external_name, param.field_name,
                         getattr(param.associated_type, "__qualname__", str(param.associated_type)),
                         param.param_type.value, type(converter).__name__ if converter is not None else ""))
            if param.structure is not None:
                for child in param.structure.parameters:
                    add_rows(role, child, depth + 1)

        for role, params in self.parameters_by_role():
            for param in params:
                add_rows(role.value, param)
        header = f"{self.call_name} -> {self.associated_type.__qualname__}"
        table = tabulate(rows, headers=["Role", "Parameter", "Field", "Type", "Kind", "Converter"])
        return f"{header}\n{table}"
