from bapimap.utils.exceptions import (
    MisconfigurationException, BapimapException, MappingError, FieldNotFoundError, FieldAccessError,
    InvalidAssignmentError, InstantiationError, ConversionError)
from bapimap.utils.logging import (mapping_debug, mapping_info, mapping_warn, mapping_deprecation,
                                   once_per_message)
from bapimap.utils.import_utils import _import_class, resolve_classes

__all__ = [
    # exceptions
    "MisconfigurationException",
    "BapimapException",
    "MappingError",
    "FieldNotFoundError",
    "FieldAccessError",
    "InvalidAssignmentError",
    "InstantiationError",
    "ConversionError",

    # import_utils
    "_import_class",
    "resolve_classes",

    # logging
    "mapping_debug",
    "mapping_info",
    "mapping_warn",
    "mapping_deprecation",
    "once_per_message",
]
