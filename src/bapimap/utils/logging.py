import logging
import warnings
from functools import wraps
from typing import Any, Callable, Optional, Set, TypeVar, Union
from typing_extensions import ParamSpec


log = logging.getLogger("bapimap")

T = TypeVar("T")
P = ParamSpec("P")

# messages already emitted through a `once_per_message` wrapped function
_EMITTED: Set[str] = set()


def once_per_message(fn: Callable[P, T]) -> Callable[P, Optional[T]]:
    """Wrap a logging function so that an identical first positional message is only emitted once per process.

    Mapping metadata is built once per class but may be rebuilt by independent mappers (e.g. in tests), which would
    otherwise repeat the same advisory messages.
    """

    @wraps(fn)
    def wrapped_fn(*args: P.args, **kwargs: P.kwargs) -> Optional[T]:
        key = str(args[0]) if args else ""
        if key in _EMITTED:
            return None
        _EMITTED.add(key)
        return fn(*args, **kwargs)

    return wrapped_fn


def _debug(*args: Any, stacklevel: int = 2, **kwargs: Any) -> None:
    kwargs["stacklevel"] = stacklevel
    log.debug(*args, **kwargs)


def mapping_debug(*args: Any, stacklevel: int = 3, **kwargs: Any) -> None:
    """Emit debug-level messages from the mapping machinery."""
    _debug(*args, stacklevel=stacklevel, **kwargs)


def _info(*args: Any, stacklevel: int = 2, **kwargs: Any) -> None:
    kwargs["stacklevel"] = stacklevel
    log.info(*args, **kwargs)


def mapping_info(*args: Any, stacklevel: int = 3, **kwargs: Any) -> None:
    """Emit info-level messages from the mapping machinery."""
    _info(*args, stacklevel=stacklevel, **kwargs)


def _warn(message: Union[str, Warning], stacklevel: int = 2, **kwargs: Any) -> None:
    warnings.warn(message, stacklevel=stacklevel, **kwargs)


@once_per_message
def mapping_warn(message: Union[str, Warning], stacklevel: int = 5, **kwargs: Any) -> None:
    """Emit a warning once per distinct message.

    ``stacklevel`` counts from ``_warn`` and includes this function and its ``once_per_message`` wrapper, so the default
    of 5 attributes the warning to the caller of the function that invoked ``mapping_warn``. Callers further removed
    from user code pass a larger value.
    """
    _warn(message, stacklevel=stacklevel, **kwargs)


mapping_deprecation_category = DeprecationWarning


def mapping_deprecation(message: Union[str, Warning], stacklevel: int = 6, **kwargs: Any) -> None:
    """Emit a deprecation warning once per distinct message.

    One frame deeper than :func:`mapping_warn`, the default again attributes the warning to the caller of the function
    that invoked ``mapping_deprecation``.
    """
    category = kwargs.pop("category", mapping_deprecation_category)
    mapping_warn(message, stacklevel=stacklevel, category=category, **kwargs)
