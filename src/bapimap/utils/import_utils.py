import importlib
from typing import Any, List, Sequence, Union

from bapimap.utils.exceptions import MisconfigurationException


def _import_class(class_path: str) -> Any:
    class_module, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(class_module)
    return getattr(module, class_name)


def resolve_classes(classes_or_paths: Sequence[Union[type, str]]) -> List[type]:
    """Resolve a sequence of types and/or dotted ``module.ClassName`` paths to types.

    Args:
        classes_or_paths: types are passed through unchanged, strings are imported.

    Returns:
        The resolved types, in input order.
    """
    resolved = []
    for cls_or_path in classes_or_paths:
        if isinstance(cls_or_path, type):
            resolved.append(cls_or_path)
            continue
        if not isinstance(cls_or_path, str) or "." not in cls_or_path:
            raise MisconfigurationException(
                f"Annotated classes must be types or fully-qualified class paths, got: {cls_or_path!r}"
            )
        try:
            resolved_cls = _import_class(cls_or_path)
        except (AttributeError, ImportError) as e:
            raise MisconfigurationException(f"Unable to import annotated class {cls_or_path}: {e}") from e
        if not isinstance(resolved_cls, type):
            raise MisconfigurationException(f"{cls_or_path} does not resolve to a class")
        resolved.append(resolved_cls)
    return resolved
