"""
Tracker - Manages all state the tokenizer carries between characters.

This class tracks:
- Bracket stack ({} and [] nesting)
- Path stack (the current field name or index inside each open container)
- The buffer used for field names and primitive values
- The absolute position of the current chunk in the input
"""

from typing import List, Optional

from .paths import Component, StructuralPath


class Tracker:
    """
    Manages nesting and path state during tokenizing.

    The bracket_stack tracks nesting of {} and [].
    The path_stack holds, for each open container, the component of the
    value currently being read inside it: the field name for objects and
    the element index for arrays.
    """

    def __init__(self):
        self._bracket_stack: List[str] = []
        self._path_stack: List[Optional[Component]] = []

        self._buffer: str = ""
        self._unicode_count: int = 0

        self._chunk_start: int = 0
        self._bytes_seen: int = 0

    # ========================================================================
    # BRACKET AND PATH TRACKING
    # ========================================================================

    @property
    def bracket_stack(self) -> List[str]:
        """Get the bracket stack (for direct access)."""
        return self._bracket_stack

    @property
    def path_stack(self) -> List[Optional[Component]]:
        """Get the path stack (for direct access)."""
        return self._path_stack

    def push_container(self, bracket: str) -> None:
        """Open a container; arrays start at index 0, objects wait for a field name."""
        self._bracket_stack.append(bracket)
        self._path_stack.append(0 if bracket == '[' else None)

    def pop_container(self) -> str:
        """Close the innermost container and return its bracket."""
        self._path_stack.pop()
        return self._bracket_stack.pop()

    def peek_bracket(self) -> str:
        """Return the top bracket without popping."""
        return self._bracket_stack[-1] if self._bracket_stack else ''

    def has_brackets(self) -> bool:
        return bool(self._bracket_stack)

    def in_array(self) -> bool:
        """Check if we're currently inside an array."""
        return self.peek_bracket() == '['

    def in_object(self) -> bool:
        """Check if we're currently inside an object."""
        return self.peek_bracket() == '{'

    @property
    def depth(self) -> int:
        """Path length of a value read at the current position."""
        return len(self._bracket_stack)

    def set_field_name(self, name: str) -> None:
        self._path_stack[-1] = name

    def next_index(self) -> None:
        self._path_stack[-1] += 1

    def get_path(self) -> StructuralPath:
        """Get the path of the value at the current position."""
        return tuple(self._path_stack)

    # ========================================================================
    # BUFFERS
    # ========================================================================

    @property
    def buffer(self) -> str:
        """Get the field name / primitive buffer."""
        return self._buffer

    @buffer.setter
    def buffer(self, value: str) -> None:
        self._buffer = value

    def append_to_buffer(self, char: str) -> None:
        self._buffer += char

    def clear_buffer(self) -> None:
        self._buffer = ""

    @property
    def unicode_count(self) -> int:
        """Number of hex digits read so far in a \\uXXXX escape."""
        return self._unicode_count

    @unicode_count.setter
    def unicode_count(self, value: int) -> None:
        self._unicode_count = value

    # ========================================================================
    # POSITION TRACKING
    # ========================================================================

    @property
    def bytes_seen(self) -> int:
        return self._bytes_seen

    def start_chunk(self, size: int) -> None:
        """Record that a new chunk of size bytes is about to be scanned."""
        self._chunk_start = self._bytes_seen
        self._bytes_seen += size

    def position(self, offset: int) -> int:
        """Convert an offset in the current chunk to an absolute byte position."""
        return self._chunk_start + offset

    def __repr__(self) -> str:
        return f"Tracker({self._bytes_seen} bytes, {len(self._bracket_stack)} brackets)"
