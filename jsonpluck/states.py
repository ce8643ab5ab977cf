"""
Tokenizer State Classes - Each state handles characters and determines transitions.

The tokenizer only needs to know where values begin and end, so value
strings are scanned but not collected; only field names (which become path
components) and primitives (which must be validated) are buffered.
"""

import json as json_module
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import DepthTokenizer


WHITESPACE = ' \t\n\r'
PRIMITIVE_END = WHITESPACE + ',]}'
PRIMITIVE_START = '-0123456789tfn'
VALUE_START = '{["' + PRIMITIVE_START
LITERALS = ('true', 'false', 'null')
NUMBER_RE = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?\Z')
HEX_DIGITS = '0123456789abcdefABCDEF'
SIMPLE_ESCAPES = '"\\/bfnrt'


# ========================================================================
# SHARED HELPER FUNCTIONS
# ========================================================================

def begin_value(parser: 'DepthTokenizer', char: str, offset: int) -> None:
    """Start a value at offset - used by every state that expects a value."""
    tracker = parser.tracker

    if char not in VALUE_START:
        raise parser.error(f"Unexpected character {char!r}", offset)

    if tracker.depth == parser.depth:
        parser.boundary(tracker.get_path(), offset)

    if char == '{':
        tracker.push_container('{')
        parser.transition(InObjectWaitState(parser, first=True))
    elif char == '[':
        tracker.push_container('[')
        parser.transition(InArrayWaitState(parser, first=True))
    elif char == '"':
        parser.transition(StringState(parser))
    else:
        tracker.buffer = char
        parser.transition(PrimitiveState(parser))


def end_value(parser: 'DepthTokenizer', end_offset: int) -> None:
    """Finish the value at the current position; end_offset is one past its last byte."""
    tracker = parser.tracker

    if tracker.depth == parser.depth:
        parser.boundary(tracker.get_path(), end_offset)

    if tracker.has_brackets():
        parser.transition(AfterValueState(parser))
    else:
        parser.transition(DoneState(parser))


def close_container(parser: 'DepthTokenizer', char: str, offset: int) -> None:
    """Handle a closing } or ] - used by the wait states and after a value."""
    tracker = parser.tracker
    expected = '}' if tracker.in_object() else ']'
    if char != expected:
        raise parser.error(f"Mismatched {char!r}, expected {expected!r}", offset)

    tracker.pop_container()

    # Members of this container sit at the reported depth: surface its close.
    if tracker.depth + 1 == parser.depth:
        parser.boundary(tracker.get_path(), offset + 1)

    end_value(parser, offset + 1)


# ========================================================================
# BASE STATE CLASS
# ========================================================================

class ParserState:
    """Base class for tokenizer states."""

    # Whether characters seen inside an escape belong in the tracker buffer.
    buffered = False

    def __init__(self, parser: 'DepthTokenizer'):
        self.parser = parser
        self.tracker = parser.tracker

    @property
    def name(self) -> str:
        return type(self).__name__

    def handle(self, char: str, offset: int) -> None:
        """Handle a character. Subclasses must implement."""
        raise NotImplementedError

    def finish(self) -> None:
        """Called at end of input while this state is active."""
        raise self.parser.error("Unexpected end of input")


# ========================================================================
# STRUCTURAL STATES
# ========================================================================

class RootState(ParserState):
    """Before the root value."""

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        begin_value(self.parser, char, offset)


class DoneState(ParserState):
    """After the root value; only whitespace may follow."""

    def handle(self, char: str, offset: int) -> None:
        if char not in WHITESPACE:
            raise self.parser.error(f"Unexpected data {char!r} after the root value", offset)

    def finish(self) -> None:
        pass


class InObjectWaitState(ParserState):
    """Inside an object, waiting for a field name (or '}' right after '{')."""

    def __init__(self, parser: 'DepthTokenizer', first: bool = False):
        super().__init__(parser)
        self.first = first

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        if char == '"':
            self.tracker.clear_buffer()
            self.parser.transition(FieldNameState(self.parser))
        elif char == '}' and self.first:
            close_container(self.parser, char, offset)
        else:
            raise self.parser.error(f"Expected a field name, got {char!r}", offset)


class FieldNameState(ParserState):
    """Parsing a field name (before colon)."""

    buffered = True

    def handle(self, char: str, offset: int) -> None:
        if char == '\\':
            self.tracker.append_to_buffer(char)
            self.parser.transition(EscapeState(self.parser, self))
        elif char == '"':
            self._handle_end_quote(offset)
        elif ord(char) < 0x20:
            raise self.parser.error("Control character in field name", offset)
        else:
            self.tracker.append_to_buffer(char)

    def _handle_end_quote(self, offset: int) -> None:
        # The buffer holds raw bytes (one char per byte) with escapes intact.
        raw = self.tracker.buffer
        try:
            name = json_module.loads('"' + raw.encode('latin-1').decode('utf-8') + '"')
        except ValueError as exc:
            raise self.parser.error("Invalid field name", offset) from exc
        self.tracker.clear_buffer()
        self.tracker.set_field_name(name)
        self.parser.transition(AfterFieldNameState(self.parser))


class AfterFieldNameState(ParserState):
    """Just finished field name, expecting colon."""

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        if char != ':':
            raise self.parser.error(f"Expected ':', got {char!r}", offset)
        self.parser.transition(AfterColonState(self.parser))


class AfterColonState(ParserState):
    """Just saw colon, expecting value."""

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        begin_value(self.parser, char, offset)


class InArrayWaitState(ParserState):
    """Inside an array, waiting for a value (or ']' right after '[')."""

    def __init__(self, parser: 'DepthTokenizer', first: bool = False):
        super().__init__(parser)
        self.first = first

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        if char == ']' and self.first:
            close_container(self.parser, char, offset)
        else:
            begin_value(self.parser, char, offset)


class AfterValueState(ParserState):
    """A value inside a container just ended; expecting ',' or a closer."""

    def handle(self, char: str, offset: int) -> None:
        if char in WHITESPACE:
            return
        if char == ',':
            self._handle_comma()
        elif char == '}' or char == ']':
            close_container(self.parser, char, offset)
        else:
            raise self.parser.error(f"Expected ',' or a closing bracket, got {char!r}", offset)

    def _handle_comma(self) -> None:
        if self.tracker.in_array():
            self.tracker.next_index()
            self.parser.transition(InArrayWaitState(self.parser))
        else:
            self.parser.transition(InObjectWaitState(self.parser))


# ========================================================================
# VALUE STATES
# ========================================================================

class StringState(ParserState):
    """Inside a string value."""

    def handle(self, char: str, offset: int) -> None:
        if char == '\\':
            self.parser.transition(EscapeState(self.parser, self))
        elif char == '"':
            end_value(self.parser, offset + 1)
        elif ord(char) < 0x20:
            raise self.parser.error("Control character in string", offset)


class EscapeState(ParserState):
    """Processing escape sequence \\X; returns to the string it came from."""

    def __init__(self, parser: 'DepthTokenizer', source: ParserState):
        super().__init__(parser)
        self.source = source

    def handle(self, char: str, offset: int) -> None:
        if self.source.buffered:
            self.tracker.append_to_buffer(char)

        if char == 'u':
            self.tracker.unicode_count = 0
            self.parser.transition(UnicodeEscapeState(self.parser, self.source))
        elif char in SIMPLE_ESCAPES:
            self.parser.transition(self.source)
        else:
            raise self.parser.error(f"Invalid escape '\\{char}'", offset)


class UnicodeEscapeState(ParserState):
    """Processing unicode escape \\uXXXX."""

    def __init__(self, parser: 'DepthTokenizer', source: ParserState):
        super().__init__(parser)
        self.source = source

    def handle(self, char: str, offset: int) -> None:
        if char not in HEX_DIGITS:
            raise self.parser.error(f"Invalid unicode escape digit {char!r}", offset)

        if self.source.buffered:
            self.tracker.append_to_buffer(char)

        self.tracker.unicode_count += 1
        if self.tracker.unicode_count == 4:
            self.parser.transition(self.source)


class PrimitiveState(ParserState):
    """Parsing a number, boolean, or null."""

    def handle(self, char: str, offset: int) -> None:
        if char in PRIMITIVE_END:
            self._handle_value_end(offset)
            # The delimiter belongs to the enclosing structure.
            self.parser.state.handle(char, offset)
        else:
            self.tracker.append_to_buffer(char)

    def finish(self) -> None:
        # Only a root primitive can still be open at end of input.
        if self.tracker.has_brackets():
            super().finish()
        self._validate(None)
        self.tracker.clear_buffer()
        self.parser.transition(DoneState(self.parser))

    def _handle_value_end(self, offset: int) -> None:
        self._validate(offset)
        self.tracker.clear_buffer()
        end_value(self.parser, offset)

    def _validate(self, offset) -> None:
        raw = self.tracker.buffer
        if raw in LITERALS or NUMBER_RE.match(raw):
            return
        raise self.parser.error(f"Invalid literal {raw!r}", offset)
