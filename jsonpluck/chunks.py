"""
Chunks - Reference-counted storage for input chunks.

Every chunk written to the extractor is registered here. The extractor
holds a claim while the chunk is being processed; the item backlog and the
remainder take their own claims on chunks whose bytes they still need. A
chunk leaves the arena as soon as its last claim is released.
"""

from typing import Dict, Optional


class ChunkHandle:
    """A registered chunk and the number of claims held on it."""

    __slots__ = ('seq', 'data', 'refs')

    def __init__(self, seq: int, data: bytes):
        self.seq = seq
        self.data: Optional[bytes] = data
        self.refs = 1

    @property
    def released(self) -> bool:
        return self.refs == 0

    def __len__(self) -> int:
        return len(self.data) if self.data is not None else 0

    def __repr__(self) -> str:
        return f"ChunkHandle(#{self.seq}, {len(self)} bytes, refs={self.refs})"


class ChunkArena:
    """Tracks every chunk that is still claimed by some component."""

    def __init__(self):
        self._handles: Dict[int, ChunkHandle] = {}
        self._next_seq = 0

    def register(self, data: bytes) -> ChunkHandle:
        """Add a chunk; the caller owns the initial claim."""
        handle = ChunkHandle(self._next_seq, data)
        self._next_seq += 1
        self._handles[handle.seq] = handle
        return handle

    def claim(self, handle: ChunkHandle) -> None:
        if handle.released:
            raise RuntimeError(f"Cannot claim released chunk #{handle.seq}")
        handle.refs += 1

    def release(self, handle: ChunkHandle) -> None:
        if handle.released:
            raise RuntimeError(f"Chunk #{handle.seq} released more times than claimed")
        handle.refs -= 1
        if handle.refs == 0:
            del self._handles[handle.seq]
            handle.data = None

    @property
    def live(self) -> int:
        """Number of chunks currently retained."""
        return len(self._handles)

    @property
    def live_bytes(self) -> int:
        return sum(len(handle) for handle in self._handles.values())

    def __repr__(self) -> str:
        return f"ChunkArena({self.live} chunks, {self.live_bytes} bytes)"
