"""
Remainder Reconstructor - Rebuilds the document with the target array emptied.

Fragments are ranges of registered chunks plus injected literals. While
collecting, each chunk contributes a single range; collecting pauses at the
array's first element and resumes just past the array's closing bracket.
"""

import logging
from typing import List, Optional, Tuple, Union

from .chunks import ChunkArena, ChunkHandle

logger = logging.getLogger(__name__)

# Closes the array whose '[' is already part of the collected prefix.
EMPTY_ARRAY_CLOSE = b']'

Fragment = Union[bytes, Tuple[ChunkHandle, int, int]]


class RemainderReconstructor:
    """Accumulates every byte of the input except the target array's elements."""

    def __init__(self, arena: ChunkArena):
        self.arena = arena
        self._fragments: List[Fragment] = []
        self._collecting = True
        self._chunk: Optional[ChunkHandle] = None
        self._mark = 0

    @property
    def collecting(self) -> bool:
        return self._collecting

    @property
    def fragments(self) -> List[Fragment]:
        return self._fragments

    def begin_chunk(self, handle: ChunkHandle) -> None:
        self._chunk = handle
        self._mark = 0

    def suspend(self, offset: int) -> None:
        """The array's first element starts at offset: keep the prefix, elide what follows."""
        self._add_range(self._mark, offset)
        self._fragments.append(EMPTY_ARRAY_CLOSE)
        self._collecting = False

    def resume(self, offset: int) -> None:
        """The array closed just before offset: collect again from there."""
        self._collecting = True
        self._mark = offset

    def finish_chunk(self) -> None:
        """Collect the rest of the current chunk if collecting."""
        if self._collecting:
            self._add_range(self._mark, len(self._chunk))
        self._chunk = None

    def _add_range(self, start: int, stop: int) -> None:
        if stop <= start:
            return
        self.arena.claim(self._chunk)
        self._fragments.append((self._chunk, start, stop))

    def build(self, total_received: int) -> Optional[bytes]:
        """
        Join the fragments and release their chunks.

        Returns None when no input was ever received.
        """
        parts = []
        for fragment in self._fragments:
            if isinstance(fragment, bytes):
                parts.append(fragment)
            else:
                handle, start, stop = fragment
                parts.append(handle.data[start:stop])
                self.arena.release(handle)
        self._fragments = []

        if total_received == 0:
            return None

        remainder = b''.join(parts)
        logger.debug("Built remainder of %d bytes", len(remainder))
        return remainder
