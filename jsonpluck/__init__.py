"""
jsonpluck - Pull the items of one array out of a JSON stream as it arrives.
"""

from .errors import ConfigError, DecodeError, JsonPluckError, StreamClosedError, TokenizeError
from .extractor import ExtractionState, StreamingArrayExtractor
from .handler import ExtractorHandler, ItemCollector
from .paths import is_first_array_element, normalize_path
from .stream import aiter_items, extract, iter_file, iter_items
from .tokenizer import BoundaryEvent, DepthTokenizer

__all__ = [
    'StreamingArrayExtractor',
    'ExtractionState',
    'ExtractorHandler',
    'ItemCollector',
    'DepthTokenizer',
    'BoundaryEvent',
    'normalize_path',
    'is_first_array_element',
    'iter_items',
    'aiter_items',
    'iter_file',
    'extract',
    'JsonPluckError',
    'ConfigError',
    'TokenizeError',
    'DecodeError',
    'StreamClosedError',
]
__version__ = '0.1.0'
