"""
Depth-Bounded Tokenizer - Reports value boundaries at a single nesting depth.

Scan JSON incrementally using an explicit state machine where each state
is an object with a handle() method that processes characters. Only the
boundaries of values whose path length equals the configured depth are
reported, which keeps the caller's bookkeeping independent of how large or
deeply nested the rest of the document is.
"""

from typing import List, NamedTuple, Optional

from .errors import ConfigError, TokenizeError
from .paths import StructuralPath
from .states import ParserState, RootState
from .tracker import Tracker


class BoundaryEvent(NamedTuple):
    """A value at the tokenizer's depth starts or ends at offset in the current chunk."""
    path: StructuralPath
    offset: int


class DepthTokenizer:
    """
    Find value boundaries at a fixed depth in a chunked JSON document.

    For every value whose path has `depth` components, feed() reports one
    event at its first byte and one event one past its last byte. For every
    container whose members sit at `depth`, it also reports one event with
    the container's own (shorter) path one past its closing bracket.

    Bytes are scanned one at a time; multi-byte UTF-8 sequences only occur
    inside strings, where only '"' and '\\' are significant.
    """

    def __init__(self, depth: int):
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
            raise ConfigError(f"Tokenizer depth must be a positive integer, got {depth!r}")

        self.depth = depth
        self.tracker = Tracker()

        self._state: ParserState = None
        self._previous_state: ParserState = None
        self._events: List[BoundaryEvent] = []

        self._state = RootState(self)

    @property
    def state(self) -> ParserState:
        """Current tokenizer state object."""
        return self._state

    @property
    def state_name(self) -> str:
        """Name of current state for debugging."""
        return self._state.name if self._state else "None"

    @property
    def bytes_seen(self) -> int:
        return self.tracker.bytes_seen

    # ========================================================================
    # CORE METHODS
    # ========================================================================

    def transition(self, new_state: ParserState) -> None:
        """Transition to a new state."""
        self._previous_state = self._state
        self._state = new_state

    def boundary(self, path: StructuralPath, offset: int) -> None:
        """Record a boundary event for the chunk being fed."""
        self._events.append(BoundaryEvent(path, offset))

    def error(self, message: str, offset: Optional[int] = None) -> TokenizeError:
        """Build a TokenizeError positioned at offset in the current chunk."""
        if offset is None:
            return TokenizeError(message, self.tracker.bytes_seen)
        return TokenizeError(message, self.tracker.position(offset))

    def feed(self, chunk: bytes) -> List[BoundaryEvent]:
        """
        Scan the next chunk and return its boundary events in document order.

        Raises:
            TokenizeError: If the chunk makes the document malformed. Events
                found before the malformed byte are kept on its `events`.
        """
        self._events = []
        if not chunk:
            return self._events

        self.tracker.start_chunk(len(chunk))

        # latin-1 maps every byte to exactly one character, so offsets line up.
        try:
            for offset, char in enumerate(chunk.decode('latin-1')):
                self._state.handle(char, offset)
        except TokenizeError as exc:
            exc.events = self._events
            raise

        return self._events

    def close(self) -> None:
        """
        Signal end of input.

        Raises:
            TokenizeError: If the document is incomplete. Empty input is not
                an error.
        """
        if self.tracker.bytes_seen == 0:
            return
        self._state.finish()
