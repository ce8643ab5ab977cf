"""
Configuration for the extractor.

Options may be given as a mapping, or as a bare path (dotted string, list
or tuple) as shorthand for {"path": ...}.
"""

from collections.abc import Mapping
from typing import Any, TypedDict

from .errors import ConfigError
from .paths import StructuralPath, normalize_path


class ExtractorConfig(TypedDict):
    path: StructuralPath       # () is the root value
    parse_items: bool          # decode items and remainder with json
    retain_remainder: bool     # rebuild the document without the array's elements


DEFAULTS = {
    'path': None,
    'parse_items': True,
    'retain_remainder': False,
}


def normalize_options(options: Any = None) -> ExtractorConfig:
    """
    Build an ExtractorConfig from options or path shorthand.

    Raises:
        ConfigError: On unknown keys, non-bool flags or a malformed path.
    """
    if options is None:
        options = {}
    elif isinstance(options, (str, list, tuple)):
        options = {'path': options}
    elif not isinstance(options, Mapping):
        raise ConfigError(f"Options must be a mapping or a path, got {type(options).__name__}")

    unknown = sorted(set(options) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(map(str, unknown))}")

    merged = dict(DEFAULTS, **options)

    for flag in ('parse_items', 'retain_remainder'):
        if not isinstance(merged[flag], bool):
            raise ConfigError(f"Option {flag!r} must be a bool, got {merged[flag]!r}")

    return ExtractorConfig(
        path=normalize_path(merged['path']),
        parse_items=merged['parse_items'],
        retain_remainder=merged['retain_remainder'],
    )
