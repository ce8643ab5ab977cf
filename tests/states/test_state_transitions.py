"""
State Transition Tests - Verify tokenizer and extractor state machine transitions.
"""

from jsonpluck import BoundaryEvent, DepthTokenizer, ExtractionState, ItemCollector, StreamingArrayExtractor
from jsonpluck.states import (
    AfterColonState,
    AfterFieldNameState,
    AfterValueState,
    DoneState,
    EscapeState,
    FieldNameState,
    InArrayWaitState,
    InObjectWaitState,
    PrimitiveState,
    RootState,
    StringState,
    UnicodeEscapeState,
)


def tokenize(text, depth=1):
    tokenizer = DepthTokenizer(depth)
    tokenizer.feed(text.encode("utf-8"))
    return tokenizer


class TestTokenizerTransitions:
    """Test transitions between tokenizer states."""

    def test_initial_state(self):
        tokenizer = DepthTokenizer(1)
        assert isinstance(tokenizer.state, RootState)
        assert tokenizer.state_name == "RootState"

    def test_root_ignores_whitespace(self):
        assert isinstance(tokenize(" \t\n").state, RootState)

    def test_root_to_object(self):
        tokenizer = tokenize("{")
        assert isinstance(tokenizer.state, InObjectWaitState)
        assert tokenizer.tracker.bracket_stack == ["{"]

    def test_root_to_array(self):
        tokenizer = tokenize("[")
        assert isinstance(tokenizer.state, InArrayWaitState)
        assert tokenizer.tracker.path_stack == [0]

    def test_field_name(self):
        assert isinstance(tokenize('{"ab').state, FieldNameState)

    def test_after_field_name(self):
        tokenizer = tokenize('{"ab"')
        assert isinstance(tokenizer.state, AfterFieldNameState)
        assert tokenizer.tracker.path_stack == ["ab"]

    def test_after_colon(self):
        assert isinstance(tokenize('{"ab" :').state, AfterColonState)

    def test_string_value(self):
        assert isinstance(tokenize('["x').state, StringState)

    def test_escape(self):
        assert isinstance(tokenize('["\\').state, EscapeState)
        assert isinstance(tokenize('["\\n').state, StringState)

    def test_unicode_escape(self):
        assert isinstance(tokenize('["\\u00').state, UnicodeEscapeState)
        assert isinstance(tokenize('["\\u00e9').state, StringState)

    def test_escape_in_field_name_returns_to_field_name(self):
        tokenizer = tokenize('{"a\\"b')
        assert isinstance(tokenizer.state, FieldNameState)
        assert tokenizer.tracker.buffer == 'a\\"b'

    def test_primitive(self):
        tokenizer = tokenize("[12")
        assert isinstance(tokenizer.state, PrimitiveState)
        assert tokenizer.tracker.buffer == "12"

    def test_primitive_delimiter_is_redispatched(self):
        tokenizer = tokenize("[12,")
        assert isinstance(tokenizer.state, InArrayWaitState)
        assert tokenizer.tracker.path_stack == [1]

    def test_after_value(self):
        assert isinstance(tokenize('["a"').state, AfterValueState)
        assert isinstance(tokenize('{"a":{}').state, AfterValueState)

    def test_comma_in_object(self):
        assert isinstance(tokenize('{"a":1,').state, InObjectWaitState)

    def test_done(self):
        tokenizer = tokenize("[1] ")
        assert isinstance(tokenizer.state, DoneState)
        assert tokenizer.tracker.bracket_stack == []


def write_all(extractor, text):
    extractor.write(text.encode("utf-8"))
    return extractor.state


class TestExtractionTransitions:
    """Test transitions of the extraction state."""

    def test_initial_state(self):
        extractor = StreamingArrayExtractor()
        assert extractor.state is ExtractionState.NOT_STARTED
        assert not extractor.state.in_array
        assert not extractor.state.ended

    def test_in_item(self):
        assert write_all(StreamingArrayExtractor(), "[1") is ExtractionState.IN_ITEM

    def test_between_items(self):
        state = write_all(StreamingArrayExtractor(), "[1,")
        assert state is ExtractionState.BETWEEN_ITEMS
        assert state.in_array

    def test_unrelated_values_keep_not_started(self):
        extractor = StreamingArrayExtractor("a.b")
        assert write_all(extractor, '{"a":{"c":[1,2],') is ExtractionState.NOT_STARTED

    def test_exhausted(self):
        state = write_all(StreamingArrayExtractor("a"), '{"a":[1]')
        assert state is ExtractionState.EXHAUSTED
        assert state.ended

    def test_object_instead_of_array_never_starts(self):
        extractor = StreamingArrayExtractor(["a", "b"])
        assert write_all(extractor, '{"a":{"b":{"0":1}}}') is ExtractionState.NOT_STARTED

    def test_depth_mismatch_from_unexpected_boundary(self):
        # The tokenizer never reports a foreign depth inside the array, so the
        # events are fed to _split directly to reach DEPTH_MISMATCH.
        collector = ItemCollector()
        extractor = StreamingArrayExtractor("a", handler=collector)
        extractor._current = extractor.arena.register(b'{"a":[1,2')

        extractor._split(BoundaryEvent(("a", 0), 6))
        extractor._split(BoundaryEvent(("a", 0), 7))
        extractor._split(BoundaryEvent(("z",), 8))

        assert extractor.state is ExtractionState.DEPTH_MISMATCH
        assert not extractor.accepting
        assert collector.items == [1]

    def test_ended_ignores_further_events(self):
        collector = ItemCollector()
        extractor = StreamingArrayExtractor(retain_remainder=True, handler=collector)
        extractor.write(b"[1]")
        extractor._current = extractor.arena.register(b"[2]")
        extractor._split(BoundaryEvent((0,), 1))
        extractor._split(BoundaryEvent((0,), 2))

        assert extractor.state is ExtractionState.EXHAUSTED
        assert collector.items == [1]
