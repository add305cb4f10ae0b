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
import threading

import pytest

from bapimap.conversion import BooleanConverter, CharConverter, Converter, ConverterCache, NumberStringConverter
from bapimap.protocol import ConverterProtocol
from bapimap.utils.exceptions import ConversionError, InstantiationError, MappingError


class UpperCaseConverter(Converter):
    def convert_to_python(self, external_value):
        return external_value.lower()

    def convert_to_external(self, value):
        return value.upper()


class ConfiguredConverter(Converter):
    def __init__(self, width):
        self.width = width

    def convert_to_python(self, external_value):
        return external_value

    def convert_to_external(self, value):
        return value


class TestClassConverters:

    @pytest.mark.parametrize(
        "external, expected",
        [("X", True), ("x", True), (" X ", True), ("", False), (" ", False), ("N", False)],
        ids=["flag", "lower_flag", "padded_flag", "blank", "space", "other_char"],
    )
    def test_boolean_to_python(self, external, expected):
        assert BooleanConverter().convert_to_python(external) is expected

    def test_boolean_to_external(self):
        converter = BooleanConverter()
        assert converter.convert_to_external(True) == "X"
        assert converter.convert_to_external(False) == ""
        with pytest.raises(ConversionError, match="BooleanConverter expects a bool, got int: 1"):
            converter.convert_to_external(1)
        with pytest.raises(ConversionError, match="expects a character flag"):
            converter.convert_to_python(None)

    def test_char(self):
        converter = CharConverter()
        assert converter.convert_to_python("A") == "A"
        assert converter.convert_to_python("") == " "
        assert converter.convert_to_external("B") == "B"
        with pytest.raises(ConversionError, match="at most one character"):
            converter.convert_to_python("AB")
        for invalid in ("", "AB", 1):
            with pytest.raises(ConversionError, match="exactly one character"):
                converter.convert_to_external(invalid)

    @pytest.mark.parametrize(
        "external, expected", [("0042", 42), (" 7 ", 7), ("", 0), ("   ", 0), ("-3", -3)],
        ids=["zero_padded", "space_padded", "empty", "blank", "negative"],
    )
    def test_number_string_to_python(self, external, expected):
        assert NumberStringConverter().convert_to_python(external) == expected

    def test_number_string_errors(self):
        converter = NumberStringConverter()
        assert converter.convert_to_external(17) == "17"
        with pytest.raises(ConversionError, match="'12a' is not a numeric string") as excinfo:
            converter.convert_to_python("12a")
        assert isinstance(excinfo.value.__cause__, ValueError)
        with pytest.raises(ConversionError, match="expects a numeric string"):
            converter.convert_to_python(12)
        for invalid in (True, 1.5, "12"):
            with pytest.raises(ConversionError, match="expects an int"):
                converter.convert_to_external(invalid)

    def test_converter_identity(self):
        assert BooleanConverter() == BooleanConverter()
        assert BooleanConverter() != CharConverter()
        assert hash(NumberStringConverter()) == hash(NumberStringConverter())
        assert repr(CharConverter()) == "CharConverter()"
        assert isinstance(UpperCaseConverter(), ConverterProtocol)
        with pytest.raises(TypeError):
            Converter()


class TestClassConverterCache:

    def test_shared_instance(self, converter_cache):
        first = converter_cache.get(BooleanConverter)
        assert first is converter_cache.get(BooleanConverter)
        assert isinstance(first, BooleanConverter)
        assert BooleanConverter in converter_cache
        assert CharConverter not in converter_cache
        converter_cache.get(UpperCaseConverter)
        assert len(converter_cache) == 2
        assert "UpperCaseConverter" in repr(converter_cache)
        converter_cache.clear()
        assert len(converter_cache) == 0
        assert converter_cache.get(BooleanConverter) is not first

    def test_invalid_converter_types(self, converter_cache):
        with pytest.raises(MappingError, match="str is not a converter"):
            converter_cache.get(str)
        with pytest.raises(InstantiationError, match="Can not create an instance of type ConfiguredConverter"):
            converter_cache.get(ConfiguredConverter)
        assert len(converter_cache) == 0

    def test_concurrent_get(self):
        cache = ConverterCache()
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(cache.get(UpperCaseConverter))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert len(cache) == 1
