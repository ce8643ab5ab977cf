"""
Stream adapters - Drive an extractor from an iterable of chunks.

These stop pulling from the source as soon as the extractor needs no more
input, so a producer is never read past the end of the array unless the
remainder was asked for.
"""

from typing import Any, AsyncIterable, AsyncIterator, BinaryIO, Iterable, Iterator, List, Optional, Tuple

from .extractor import StreamingArrayExtractor
from .handler import ItemCollector


def iter_items(chunks: Iterable, path=None, parse_items: bool = True) -> Iterator[Any]:
    """Yield the target array's items as the chunks that complete them are read."""
    collector = ItemCollector()
    extractor = StreamingArrayExtractor(path, parse_items=parse_items, handler=collector)

    for chunk in chunks:
        extractor.write(chunk)
        yield from collector.drain()
        if not extractor.accepting:
            break

    extractor.end()
    yield from collector.drain()


async def aiter_items(chunks: AsyncIterable, path=None, parse_items: bool = True) -> AsyncIterator[Any]:
    """Async version of iter_items() for an async iterable of chunks."""
    collector = ItemCollector()
    extractor = StreamingArrayExtractor(path, parse_items=parse_items, handler=collector)

    async for chunk in chunks:
        extractor.write(chunk)
        for item in collector.drain():
            yield item
        if not extractor.accepting:
            break

    extractor.end()
    for item in collector.drain():
        yield item


def extract(chunks: Iterable, path=None, parse_items: bool = True,
            retain_remainder: bool = False) -> Tuple[List[Any], Optional[Any]]:
    """
    Consume chunks and return (items, remainder).

    The remainder is None unless retain_remainder is set and some input was
    received.
    """
    collector = ItemCollector()
    extractor = StreamingArrayExtractor(
        path,
        parse_items=parse_items,
        retain_remainder=retain_remainder,
        handler=collector,
    )

    for chunk in chunks:
        if not extractor.write(chunk):
            break

    remainder = extractor.end()
    return collector.items, remainder


def iter_file(fileobj: BinaryIO, path=None, parse_items: bool = True,
              chunk_size: int = 65536) -> Iterator[Any]:
    """Yield the target array's items from a binary file object."""
    chunks = iter(lambda: fileobj.read(chunk_size), b'')
    yield from iter_items(chunks, path, parse_items=parse_items)
