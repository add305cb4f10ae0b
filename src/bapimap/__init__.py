"""
bapimap
=====================

The bapimap package maps annotated Python classes onto name-keyed external business API calls.
"""

from bapimap.__about__ import __version__ as version  # noqa: F401
from bapimap.protocol import ParamType, ParameterRole
from bapimap.annotations import bapi, bapi_structure, Import, Export, Table, Parameter, Convert
from bapimap.conversion import Converter, BooleanConverter, CharConverter, NumberStringConverter
from bapimap.mapping import (ClassMapping, ParameterMapping, StructureMapping, TableMapping, AnnotationMapper,
                             build_mapping, get_mapping, MAPPING_REGISTRY, FunctionValues, ValueMapper)
from bapimap.config import BapimapConfig, AnnotationConfiguration
from bapimap.utils.exceptions import (MisconfigurationException, BapimapException, MappingError, FieldNotFoundError,
                                      FieldAccessError, InvalidAssignmentError, InstantiationError, ConversionError)

__all__ = [
    "ParamType",
    "ParameterRole",
    "bapi",
    "bapi_structure",
    "Import",
    "Export",
    "Table",
    "Parameter",
    "Convert",
    "Converter",
    "BooleanConverter",
    "CharConverter",
    "NumberStringConverter",
    "ClassMapping",
    "ParameterMapping",
    "StructureMapping",
    "TableMapping",
    "AnnotationMapper",
    "build_mapping",
    "get_mapping",
    "MAPPING_REGISTRY",
    "FunctionValues",
    "ValueMapper",
    "BapimapConfig",
    "AnnotationConfiguration",
    "MisconfigurationException",
    "BapimapException",
    "MappingError",
    "FieldNotFoundError",
    "FieldAccessError",
    "InvalidAssignmentError",
    "InstantiationError",
    "ConversionError",
]
