from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from bapimap.mapping.model import ClassMapping
from bapimap.mapping.registry import MAPPING_REGISTRY, MappingRegistry
from bapimap.protocol import StrOrPath
from bapimap.utils.exceptions import MisconfigurationException
from bapimap.utils.import_utils import resolve_classes
from bapimap.utils.logging import mapping_deprecation

# superseded by `BapimapConfig.session_factory_name`, still honored when set via `properties`
LEGACY_SESSION_FACTORY_NAME_KEY = "bapimap.session_factory_name"


@dataclass(kw_only=True)
class BapimapSerializableCfg(yaml.YAMLObject):
    ...


def bapimap_cfg_representer(dumper: yaml.Dumper, data: BapimapSerializableCfg) -> Any:
    serializable = {}
    for k, v in data.__dict__.items():
        if isinstance(v, list):
            v = [f"{c.__module__}.{c.__qualname__}" if isinstance(c, type) else c for c in v]
        serializable[k] = v
    return dumper.represent_dict(serializable)


yaml.add_multi_representer(BapimapSerializableCfg, bapimap_cfg_representer)


# NOTE [Configuration Scope]:
# The configuration only names the session factory and the annotated classes it serves. Transport specific settings
# (connection parameters and the like) are passed through untouched in `properties` for the transport layer to read.
@dataclass(kw_only=True)
class BapimapConfig(BapimapSerializableCfg):
    session_factory_name: str = ""
    annotated_classes: List[Union[str, type]] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # the generated dataclass `__init__` sits between this hook and the code constructing the config
        if LEGACY_SESSION_FACTORY_NAME_KEY in self.properties:
            mapping_deprecation(f"Setting `{LEGACY_SESSION_FACTORY_NAME_KEY}` in `properties` is deprecated, set "
                                "`session_factory_name` instead.", stacklevel=7)
            legacy_name = self.properties.pop(LEGACY_SESSION_FACTORY_NAME_KEY)
            self.session_factory_name = self.session_factory_name or legacy_name

    def validate(self) -> None:
        if not self.session_factory_name:
            raise MisconfigurationException("A session factory name must be specified in `session_factory_name`")

    @classmethod
    def load_yaml(cls, path: StrOrPath) -> BapimapConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Could not find configuration file path: {path}")
        with open(path, encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
        if not isinstance(data, dict):
            raise MisconfigurationException(f"Configuration file {path} must contain a mapping, got {type(data)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise MisconfigurationException(f"Invalid configuration in {path}: {e}") from e

    def dump_yaml(self) -> str:
        return yaml.dump(self, sort_keys=False)


class AnnotationConfiguration:
    """Collects annotated classes and properties and builds their mappings."""

    def __init__(self, cfg: Optional[BapimapConfig] = None, registry: MappingRegistry = MAPPING_REGISTRY) -> None:
        self.cfg = cfg if cfg is not None else BapimapConfig()
        self.registry = registry

    def add_annotated_class(self, cls: Union[str, type]) -> AnnotationConfiguration:
        self.cfg.annotated_classes.append(cls)
        return self

    def set_property(self, key: str, value: str) -> AnnotationConfiguration:
        self.cfg.properties[key] = value
        return self

    def build_mappings(self) -> Dict[type, ClassMapping]:
        self.cfg.validate()
        return {cls: self.registry.get(cls) for cls in resolve_classes(self.cfg.annotated_classes)}
