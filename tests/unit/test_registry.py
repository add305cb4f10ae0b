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
import logging
import threading
from unittest import mock

import pytest

from bapimap.mapping import MAPPING_REGISTRY, MappingRegistry, get_mapping
from bapimap.utils.exceptions import MappingError
from tests.fixtures_model import ChildCall, Commit, FlightList, NoParameters, Unmapped


class TestClassMappingRegistry:

    def test_get_builds_once(self, registry):
        with mock.patch.object(registry.mapper, "map_class", wraps=registry.mapper.map_class) as map_class:
            first = registry.get(Commit)
            second = registry.get(Commit)
        assert first is second
        assert map_class.call_count == 1
        assert Commit in registry
        assert FlightList not in registry

    def test_get_logs_registration(self, registry, caplog):
        caplog.set_level(logging.INFO, logger="bapimap")
        registry.get(FlightList)
        assert "Registered mapping for FlightList (BAPI_FLIGHT_GETLIST)" in caplog.text
        caplog.clear()
        registry.get(FlightList)
        assert "Registered mapping" not in caplog.text

    def test_failed_build_is_not_cached(self, registry):
        with pytest.raises(MappingError, match="is not a mapped class"):
            registry.get(Unmapped)
        assert Unmapped not in registry
        assert len(registry) == 0

    def test_register_and_listing(self, registry):
        mappings = registry.register(FlightList, Commit, NoParameters)
        assert [m.call_name for m in mappings] == ["BAPI_FLIGHT_GETLIST", "BAPI_TRANSACTION_COMMIT", "EMPTY"]
        assert len(registry) == 3
        assert list(registry) == [FlightList, Commit, NoParameters]
        listing = registry.available_mappings()
        lines = listing.splitlines()
        assert lines[0].split() == ["Call", "Class", "Imports", "Exports", "Tables"]
        # sorted by call name
        assert lines[2].split() == ["BAPI_FLIGHT_GETLIST", "tests.fixtures_model.FlightList", "5", "3", "2"]
        assert lines[3].split() == ["BAPI_TRANSACTION_COMMIT", "tests.fixtures_model.Commit", "1", "0", "0"]
        assert str(registry) == "Registered Mappings: ['FlightList', 'Commit', 'NoParameters']"
        registry.clear()
        assert len(registry) == 0
        assert registry.get(Commit) == mappings[1]

    def test_concurrent_get(self, registry):
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(registry.get(ChildCall))

        with mock.patch.object(registry.mapper, "map_class", wraps=registry.mapper.map_class) as map_class:
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        assert map_class.call_count == 1
        assert all(r is results[0] for r in results)

    def test_default_registry(self):
        assert isinstance(MAPPING_REGISTRY, MappingRegistry)
        mapping = get_mapping(Commit)
        assert mapping is MAPPING_REGISTRY.get(Commit)
        assert mapping.call_name == "BAPI_TRANSACTION_COMMIT"
