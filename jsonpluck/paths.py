"""
Paths - Normalize and compare structural paths.

A structural path is a tuple of components, each either a field name (str)
or an array index (int), locating a value relative to the document root.
The empty tuple is the root itself.
"""

from typing import Any, Sequence, Tuple, Union

from .errors import ConfigError

Component = Union[str, int]
StructuralPath = Tuple[Component, ...]


def _is_index(component: Any) -> bool:
    return isinstance(component, int) and not isinstance(component, bool) and component >= 0


def normalize_path(value: Any) -> StructuralPath:
    """
    Normalize a target path given as a dotted string or a sequence.

    Dotted components made only of ASCII digits become integer indices, so
    "a.2.b" and ["a", 2, "b"] are the same path. A field literally named "2"
    can only be addressed with the sequence form.

    Raises:
        ConfigError: If value is neither a string nor a list/tuple, or a
            sequence component is neither a string nor a non-negative int.
    """
    if value is None:
        return ()

    if isinstance(value, str):
        if not value:
            return ()
        return tuple(
            int(part) if part.isascii() and part.isdigit() else part
            for part in value.split('.')
        )

    if isinstance(value, (list, tuple)):
        for component in value:
            if not isinstance(component, str) and not _is_index(component):
                raise ConfigError(
                    f"Path components must be field names or non-negative indices, got {component!r}"
                )
        return tuple(value)

    raise ConfigError(f"Path must be a dotted string or a list of components, got {type(value).__name__}")


def is_first_array_element(path: Sequence[Component], target_path: Sequence[Component]) -> bool:
    """
    Check whether path addresses element 0 of the array at target_path.

    Only the element's own path is inspected; the array's opening bracket
    does not need to have been seen.
    """
    if len(path) != len(target_path) + 1:
        return False

    last = path[-1]
    if not _is_index(last) or last != 0:
        return False

    for component, expected in zip(path, target_path):
        if type(component) is not type(expected) or component != expected:
            return False

    return True


def format_path(path: Sequence[Component]) -> str:
    """Render a path as a dotted string for messages."""
    if not path:
        return '<root>'
    return '.'.join(str(component) for component in path)
