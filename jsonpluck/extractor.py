"""
Streaming Array Extractor - Emits the elements of one array in a chunked JSON document.

The tokenizer reports where values at the array's element depth begin and
end; this class decides which of those boundaries belong to the target
array, reassembles each element from the chunks it spans, and notices when
the array is exhausted so that the rest of the input can be skipped.
"""

import json as json_module
import logging
from enum import Enum
from typing import Any, Optional, Union

from .assembler import ChunkAssembler
from .chunks import ChunkArena, ChunkHandle
from .config import normalize_options
from .errors import ConfigError, DecodeError, StreamClosedError, TokenizeError
from .handler import ExtractorHandler
from .paths import format_path, is_first_array_element, normalize_path
from .remainder import RemainderReconstructor
from .tokenizer import BoundaryEvent, DepthTokenizer

logger = logging.getLogger(__name__)


class ExtractionState(Enum):
    """Where the extractor is relative to the target array."""

    NOT_STARTED = 'not_started'
    BETWEEN_ITEMS = 'between_items'
    IN_ITEM = 'in_item'
    EXHAUSTED = 'exhausted'
    DEPTH_MISMATCH = 'depth_mismatch'

    @property
    def in_array(self) -> bool:
        return self in (ExtractionState.BETWEEN_ITEMS, ExtractionState.IN_ITEM)

    @property
    def ended(self) -> bool:
        return self in (ExtractionState.EXHAUSTED, ExtractionState.DEPTH_MISMATCH)


class StreamingArrayExtractor:
    """
    Extract array elements from a JSON document written in arbitrary chunks.

    Items are passed to handler.on_item() from inside write() as soon as
    their last byte arrives. Once the array is exhausted and the remainder
    is not retained, write() returns False and drops the chunk.

    Example:
        >>> from jsonpluck import ItemCollector
        >>> collector = ItemCollector()
        >>> extractor = StreamingArrayExtractor('results', handler=collector)
        >>> extractor.write(b'{"count": 2, "results": [{"id"')
        True
        >>> extractor.write(b': 1}, {"id": 2}]}')
        True
        >>> extractor.end()
        >>> collector.items
        [{'id': 1}, {'id': 2}]
    """

    def __init__(self, path: Union[str, list, tuple, None] = None, parse_items: bool = True,
                 retain_remainder: bool = False, handler: ExtractorHandler = None):
        for flag, value in (('parse_items', parse_items), ('retain_remainder', retain_remainder)):
            if not isinstance(value, bool):
                raise ConfigError(f"Option {flag!r} must be a bool, got {value!r}")

        self.handler = handler or ExtractorHandler()

        self._path = normalize_path(path)
        self._depth = len(self._path) + 1
        self._parse_items = parse_items
        self._retain_remainder = retain_remainder

        self._state = ExtractionState.NOT_STARTED
        self._accepting = True
        self._closed = False
        self._items_emitted = 0
        self._bytes_received = 0

        self._tokenizer = DepthTokenizer(self._depth)
        self._arena = ChunkArena()
        self._assembler = ChunkAssembler(self._arena)
        self._remainder = RemainderReconstructor(self._arena) if retain_remainder else None
        self._current: Optional[ChunkHandle] = None

    @classmethod
    def from_options(cls, options: Any = None, handler: ExtractorHandler = None) -> 'StreamingArrayExtractor':
        """Build an extractor from an options mapping or a bare path."""
        config = normalize_options(options)
        return cls(
            config['path'],
            parse_items=config['parse_items'],
            retain_remainder=config['retain_remainder'],
            handler=handler,
        )

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def path(self):
        """Normalized path of the target array."""
        return self._path

    @property
    def depth(self) -> int:
        """Path length of the target array's elements."""
        return self._depth

    @property
    def parse_items(self) -> bool:
        return self._parse_items

    @property
    def retain_remainder(self) -> bool:
        return self._retain_remainder

    @property
    def state(self) -> ExtractionState:
        return self._state

    @property
    def accepting(self) -> bool:
        """False once no further input is needed or the stream has closed."""
        return self._accepting and not self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def items_emitted(self) -> int:
        return self._items_emitted

    @property
    def bytes_received(self) -> int:
        return self._bytes_received

    @property
    def arena(self) -> ChunkArena:
        return self._arena

    # ========================================================================
    # INPUT
    # ========================================================================

    def write(self, chunk: Union[bytes, bytearray, str]) -> bool:
        """
        Process the next chunk of the document.

        Returns:
            True if the chunk was consumed, False if it was rejected because
            extraction already finished and the remainder is not retained.

        Raises:
            TokenizeError: If the input is not well-formed JSON.
            DecodeError: If an item fails to decode.
            StreamClosedError: If the extractor has ended or failed.
        """
        if self._closed:
            raise StreamClosedError("Cannot write after the extractor has closed")

        if not self._accepting:
            logger.debug("Rejected %d byte chunk: extraction of %s already finished",
                         len(chunk), format_path(self._path))
            return False

        if isinstance(chunk, str):
            chunk = chunk.encode('utf-8')
        else:
            chunk = bytes(chunk)

        if not chunk:
            return True

        self._bytes_received += len(chunk)
        self._current = self._arena.register(chunk)
        if self._remainder is not None:
            self._remainder.begin_chunk(self._current)

        error = None
        try:
            events = self._tokenizer.feed(chunk)
        except TokenizeError as exc:
            # Items completed before the malformed byte are still delivered.
            events, error = exc.events, exc

        try:
            for event in events:
                self._split(event)
        except Exception:
            self._fail()
            raise

        # Once extraction has stopped early, the bad byte belongs to input
        # that would have been rejected anyway.
        if error is not None and self._accepting:
            self._fail()
            raise error

        if self._assembler.in_progress:
            self._assembler.extend(self._current)
        if self._remainder is not None:
            self._remainder.finish_chunk()

        # Drop our own claim; whatever the backlog or remainder still needs stays.
        self._arena.release(self._current)
        self._current = None
        return True

    def end(self) -> Any:
        """
        Signal that the input is complete.

        Returns:
            The remainder when it is retained (decoded, raw bytes, or None
            for empty input), otherwise None.

        Raises:
            TokenizeError: If the document stopped before it was complete.
            DecodeError: If the remainder fails to decode.
            StreamClosedError: If end() was already called or the extractor failed.
        """
        if self._closed:
            raise StreamClosedError("The extractor has already closed")

        # Skipped when input stopped early on purpose: the tail was never seen.
        if self._accepting:
            try:
                self._tokenizer.close()
            except TokenizeError:
                self._fail()
                raise

        self._closed = True
        self._assembler.discard()

        remainder = None
        if self._remainder is not None:
            raw = self._remainder.build(self._bytes_received)
            if raw is not None:
                remainder = self._decode(raw, 'remainder')
            self.handler.on_remainder(remainder)

        logger.debug("Extraction of %s ended in state %s after %d items",
                     format_path(self._path), self._state.name, self._items_emitted)
        self.handler.on_end(self._state)
        return remainder

    # ========================================================================
    # BOUNDARY EVENTS
    # ========================================================================

    def _split(self, event: BoundaryEvent) -> None:
        path, offset = event

        if self._state.ended:
            return

        if self._state is ExtractionState.NOT_STARTED:
            # Something else at the same depth, not our array
            if not is_first_array_element(path, self._path):
                return
            self._start_array(offset)

        if len(path) != self._depth:
            self._end_array(path, offset)
        elif self._state is ExtractionState.BETWEEN_ITEMS:
            self._assembler.open(self._current, offset)
            self._state = ExtractionState.IN_ITEM
        else:
            raw = self._assembler.close(self._current, offset)
            self._state = ExtractionState.BETWEEN_ITEMS
            self._emit(raw)

    def _start_array(self, offset: int) -> None:
        logger.debug("Found array at %s", format_path(self._path))
        if self._remainder is not None:
            self._remainder.suspend(offset)
        self._state = ExtractionState.BETWEEN_ITEMS

    def _end_array(self, path, offset: int) -> None:
        if tuple(path) == self._path:
            self._state = ExtractionState.EXHAUSTED
        else:
            self._state = ExtractionState.DEPTH_MISMATCH

        self._assembler.discard()
        logger.debug("Array at %s ended (%s) after %d items",
                     format_path(self._path), self._state.name, self._items_emitted)

        if self._remainder is not None:
            self._remainder.resume(offset)
        else:
            self._accepting = False

    def _emit(self, raw: bytes) -> None:
        item = self._decode(raw, 'item')
        self._items_emitted += 1
        self.handler.on_item(item)

    def _decode(self, raw: bytes, what: str) -> Any:
        if not self._parse_items:
            return raw
        try:
            return json_module.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"Could not decode {what}: {exc}", raw) from exc

    def _fail(self) -> None:
        self._closed = True
        self._assembler.discard()
        self._current = None

    def __repr__(self) -> str:
        return (f"StreamingArrayExtractor(path={format_path(self._path)!r}, "
                f"state={self._state.name}, items={self._items_emitted})")
