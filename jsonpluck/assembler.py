"""
Chunk Assembler - Reconstructs an item whose bytes span several chunks.

At most one item is in flight at a time. Between its opening and closing
boundaries the backlog holds a claim on every chunk that contains part of
it, and nothing else.
"""

from typing import List, Optional

from .chunks import ChunkArena, ChunkHandle


class ItemBacklog:
    """Bytes of the item currently being accumulated."""

    __slots__ = ('start', 'chunks')

    def __init__(self, start: int, first: ChunkHandle):
        self.start = start
        self.chunks: List[ChunkHandle] = [first]

    def __repr__(self) -> str:
        return f"ItemBacklog(start={self.start}, chunks={len(self.chunks)})"


class ChunkAssembler:
    """Owns the item backlog and the arena claims that back it."""

    def __init__(self, arena: ChunkArena):
        self.arena = arena
        self._backlog: Optional[ItemBacklog] = None

    @property
    def backlog(self) -> Optional[ItemBacklog]:
        return self._backlog

    @property
    def in_progress(self) -> bool:
        return self._backlog is not None

    def open(self, handle: ChunkHandle, offset: int) -> None:
        """Start an item at offset in the chunk behind handle."""
        if self._backlog is not None:
            raise RuntimeError("An item is already being assembled")
        self.arena.claim(handle)
        self._backlog = ItemBacklog(offset, handle)

    def extend(self, handle: ChunkHandle) -> None:
        """Record that the whole chunk behind handle belongs to the open item."""
        if self._backlog.chunks[-1] is handle:
            return
        self.arena.claim(handle)
        self._backlog.chunks.append(handle)

    def close(self, handle: ChunkHandle, offset: int) -> bytes:
        """Finish the item just before offset in the chunk behind handle and return its bytes."""
        backlog = self._backlog
        chunks = backlog.chunks

        if len(chunks) == 1 and chunks[0] is handle:
            # Starting and ending in same chunk
            item = handle.data[backlog.start:offset]
        else:
            parts = [chunks[0].data[backlog.start:]]
            parts.extend(chunk.data for chunk in chunks[1:])
            parts.append(handle.data[:offset])
            item = b''.join(parts)

        self.discard()
        return item

    def discard(self) -> None:
        """Drop the backlog and release its claims."""
        if self._backlog is None:
            return
        for chunk in self._backlog.chunks:
            self.arena.release(chunk)
        self._backlog = None
