# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Inspect the mappings bapimap builds for annotated classes."""
from typing import Optional, List

from jsonargparse import CLI

from bapimap.config import AnnotationConfiguration, BapimapConfig
from bapimap.mapping.registry import MAPPING_REGISTRY
from bapimap.utils.import_utils import resolve_classes


def describe(class_path: str) -> str:
    """Print the mapping of a single annotated class.

    Args:
        class_path: fully-qualified path of a ``@bapi`` decorated class, e.g. ``my_pkg.calls.FlightList``
    """
    (cls,) = resolve_classes([class_path])
    return MAPPING_REGISTRY.get(cls).describe()


def load_config(config_path: str) -> str:
    """Build every mapping listed in a YAML configuration and print a summary.

    Args:
        config_path: path to a YAML file with ``session_factory_name`` and ``annotated_classes`` keys
    """
    configuration = AnnotationConfiguration(BapimapConfig.load_yaml(config_path))
    mappings = configuration.build_mappings()
    summary = configuration.registry.available_mappings()
    return f"{configuration.cfg.session_factory_name}: {len(mappings)} mapped classes\n{summary}"


def cli_main(args: Optional[List[str]] = None) -> None:
    print(CLI([describe, load_config], args=args))


if __name__ == "__main__":
    cli_main()
