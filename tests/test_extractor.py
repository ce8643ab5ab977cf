"""Test item extraction on complete documents."""

import json

import pytest

from jsonpluck import ExtractionState, ExtractorHandler, ItemCollector, StreamingArrayExtractor


def run(doc, path=None, **options):
    collector = ItemCollector()
    extractor = StreamingArrayExtractor(path, handler=collector, **options)
    extractor.write(doc.encode("utf-8") if isinstance(doc, str) else doc)
    remainder = extractor.end()
    return collector.items, remainder


def test_root_array():
    items, _ = run("[1,2,3]")
    assert items == [1, 2, 3]


def test_nested_path_through_array_index():
    items, _ = run('{"a":[{}, {"b":[1,2,3]}]}', ["a", 1, "b"])
    assert items == [1, 2, 3]


def test_siblings_at_same_depth_never_leak():
    items, _ = run('{"a":{"c":[6,6,6],"b":[0,"safe",0],"d":[6,6,6]}}', ["a", "b"])
    assert items == [0, "safe", 0]


def test_remainder_with_nested_target():
    items, remainder = run('{"a":[0,0,{"b":[1,2,3]}]}', ["a", 2, "b"], retain_remainder=True)
    assert items == [1, 2, 3]
    assert remainder == {"a": [0, 0, {"b": []}]}


def test_object_instead_of_array_yields_nothing():
    items, _ = run('{"a":{"b":{"0":1}}}', ["a", "b"])
    assert items == []


def test_dotted_path():
    items, _ = run('{"data":{"pages":[{"results":["x","y"]}]}}', "data.pages.0.results")
    assert items == ["x", "y"]


def test_items_of_every_type():
    data = [{"id": 1, "tags": ["a", "b"]}, [1, [2, [3]]], "str", 1.5e3, -2, True, False, None, {}, []]
    items, _ = run(json.dumps(data))
    assert items == data


def test_raw_items():
    items, _ = run('[ 1 , "two" , {"three": 3} ]', parse_items=False)
    assert items == [b"1", b'"two"', b'{"three": 3}']


def test_empty_target_array():
    items, remainder = run('{"a":[],"b":1}', "a", retain_remainder=True)
    assert items == []
    assert remainder == {"a": [], "b": 1}


def test_first_match_wins_on_duplicate_keys():
    items, _ = run('{"a":[1,2],"a":[3,4]}', "a")
    assert items == [1, 2]


def test_sibling_array_with_matching_shape():
    """Element 0 of a sibling array must not be taken for the target's first element."""
    items, _ = run("[[9,9],[1,2],[8]]", "1")
    assert items == [1, 2]


def test_numeric_field_name_is_not_an_index():
    items, _ = run('{"a":{"0":[5]},"b":[7]}', ["a", 0])
    assert items == []


def test_unicode_items():
    data = {"results": ["héllo", "日本語", "emoji \U0001f600", "esc \"q\" \\ é"]}
    items, _ = run(json.dumps(data, ensure_ascii=False), "results")
    assert items == data["results"]


def test_str_chunks_are_encoded():
    collector = ItemCollector()
    extractor = StreamingArrayExtractor("a", handler=collector)
    extractor.write('{"a":["é",')
    extractor.write('"ü"]}')
    extractor.end()
    assert collector.items == ["é", "ü"]


def test_items_arrive_during_write():
    seen = []

    class RecordingHandler(ExtractorHandler):
        def on_item(self, item):
            seen.append(item)

    extractor = StreamingArrayExtractor(handler=RecordingHandler())
    extractor.write(b'[{"n":1},')
    assert seen == [{"n": 1}]
    extractor.write(b'{"n":2}')
    assert seen == [{"n": 1}, {"n": 2}]
    extractor.write(b"]")
    extractor.end()
    assert extractor.items_emitted == 2


def test_on_end_receives_final_state():
    collector = ItemCollector()
    extractor = StreamingArrayExtractor("a", handler=collector)
    extractor.write(b'{"b":1}')
    extractor.end()
    assert collector.final_state is ExtractionState.NOT_STARTED


def test_end_without_remainder_returns_none():
    items, remainder = run("[1]")
    assert remainder is None


@pytest.mark.parametrize("path,doc,expected", [
    ((), "[[1,2],[3]]", [[1, 2], [3]]),
    ((0,), "[[1,2],[3]]", [1, 2]),
    ((1,), "[[1,2],[3]]", [3]),
    (("x", "y", "z"), '{"x":{"y":{"z":[true]}}}', [True]),
])
def test_nesting_depths(path, doc, expected):
    items, _ = run(doc, path)
    assert items == expected
