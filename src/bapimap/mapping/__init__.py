from bapimap.mapping.model import (ClassMapping, ParameterMapping, StructureMapping, TableMapping, FieldKind,
                                   StructureKind, TableKind, MappingKind)
from bapimap.mapping.mapper import AnnotationMapper, build_mapping, collect_fields
from bapimap.mapping.registry import MappingRegistry, MAPPING_REGISTRY, get_mapping
from bapimap.mapping.values import FunctionValues, ValueMapper

__all__ = [
    # model
    "ClassMapping",
    "ParameterMapping",
    "StructureMapping",
    "TableMapping",
    "FieldKind",
    "StructureKind",
    "TableKind",
    "MappingKind",

    # mapper
    "AnnotationMapper",
    "build_mapping",
    "collect_fields",

    # registry
    "MappingRegistry",
    "MAPPING_REGISTRY",
    "get_mapping",

    # values
    "FunctionValues",
    "ValueMapper",
]
