"""Process-wide cache of built class mappings.

Mappings are built lazily the first time a class is requested and are never rebuilt afterwards: building is
deterministic and the set of mapped classes is static for the lifetime of a process. Population happens under a lock
(compute-once per class) while lookups of already built mappings are lock-free.
"""

from __future__ import annotations

import threading
from pprint import pformat
from typing import Dict, Iterator, List, Optional

from tabulate import tabulate

from bapimap.mapping.mapper import AnnotationMapper
from bapimap.mapping.model import ClassMapping
from bapimap.utils.logging import mapping_info


class MappingRegistry:
    def __init__(self, mapper: Optional[AnnotationMapper] = None) -> None:
        self.mapper = mapper if mapper is not None else AnnotationMapper()
        self._mappings: Dict[type, ClassMapping] = {}
        self._lock = threading.RLock()

    def get(self, cls: type) -> ClassMapping:
        mapping = self._mappings.get(cls)
        if mapping is None:
            with self._lock:
                mapping = self._mappings.get(cls)
                if mapping is None:
                    mapping = self.mapper.map_class(cls)
                    self._mappings[cls] = mapping
                    mapping_info(f"Registered mapping for {cls.__qualname__} ({mapping.call_name})")
        return mapping

    def register(self, *classes: type) -> List[ClassMapping]:
        return [self.get(cls) for cls in classes]

    def available_mappings(self) -> str:
        entries = sorted(
            (m.call_name, f"{cls.__module__}.{cls.__qualname__}", len(m.import_parameters), len(m.export_parameters),
             len(m.table_parameters))
            for cls, m in self._mappings.items()
        )
        return tabulate(entries, headers=["Call", "Class", "Imports", "Exports", "Tables"])

    def clear(self) -> None:
        """Drop all built mappings, only intended for test isolation."""
        with self._lock:
            self._mappings.clear()

    def __contains__(self, cls: object) -> bool:
        return cls in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[type]:
        return iter(list(self._mappings))

    def __str__(self) -> str:
        return f"Registered Mappings: {pformat([c.__qualname__ for c in self._mappings])}"


MAPPING_REGISTRY = MappingRegistry()


def get_mapping(cls: type) -> ClassMapping:
    return MAPPING_REGISTRY.get(cls)
