from __future__ import annotations

import threading
from typing import Any, Dict

from bapimap.protocol import ConverterProtocol
from bapimap.reflection import new_instance
from bapimap.utils.exceptions import MappingError


class ConverterCache:
    """Holds one shared converter instance per converter type.

    Converter types are instantiated lazily through their no-argument constructor the first time they are requested.
    """

    def __init__(self) -> None:
        self._converters: Dict[type, Any] = {}
        self._lock = threading.RLock()

    def get(self, converter_type: type) -> Any:
        converter = self._converters.get(converter_type)
        if converter is None:
            with self._lock:
                converter = self._converters.get(converter_type)
                if converter is None:
                    converter = new_instance(converter_type)
                    if not isinstance(converter, ConverterProtocol):
                        raise MappingError(f"{converter_type.__qualname__} is not a converter, it must provide "
                                           "`convert_to_python` and `convert_to_external`", owner=converter_type)
                    self._converters[converter_type] = converter
        return converter

    def __contains__(self, converter_type: object) -> bool:
        return converter_type in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def clear(self) -> None:
        with self._lock:
            self._converters.clear()

    def __repr__(self) -> str:
        return f"ConverterCache(converters={[t.__name__ for t in self._converters]})"


CONVERTER_CACHE = ConverterCache()
