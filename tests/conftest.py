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
import pytest

from bapimap.conversion import ConverterCache
from bapimap.mapping import AnnotationMapper, MappingRegistry, ValueMapper
from bapimap.utils import logging as bapimap_logging


@pytest.fixture(autouse=True)
def reset_emitted_messages():
    # messages routed through `once_per_message` are process-wide, reset them so each test observes its own warnings
    bapimap_logging._EMITTED.clear()
    yield
    bapimap_logging._EMITTED.clear()


@pytest.fixture
def converter_cache():
    return ConverterCache()


@pytest.fixture
def mapper(converter_cache):
    return AnnotationMapper(converter_cache=converter_cache)


@pytest.fixture
def registry(mapper):
    return MappingRegistry(mapper=mapper)


@pytest.fixture
def value_mapper():
    return ValueMapper()
