from bapimap.conversion.converter import Converter, BooleanConverter, CharConverter, NumberStringConverter
from bapimap.conversion.cache import ConverterCache, CONVERTER_CACHE

__all__ = [
    "Converter",
    "BooleanConverter",
    "CharConverter",
    "NumberStringConverter",
    "ConverterCache",
    "CONVERTER_CACHE",
]
