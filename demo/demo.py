"""
Stream a paginated API response through the extractor a few bytes at a time.

    python demo/demo.py --path results --chunk-size 7 --log-level DEBUG
"""

import argparse
import json
import logging
import sys
import time

sys.path.insert(0, '..')

from jsonpluck import ExtractorHandler, StreamingArrayExtractor

logger = logging.getLogger(__name__)

response = json.dumps({
    "count": 3,
    "next": None,
    "results": [
        {"id": 1, "title": "Streaming JSON", "tags": ["json", "stream"]},
        {"id": 2, "title": "Chunk boundaries", "tags": []},
        {"id": 3, "title": "Early termination", "tags": ["io"]},
    ],
    "meta": {"took_ms": 12},
}, indent=2).encode('utf-8')


class PrintHandler(ExtractorHandler):
    def on_item(self, item):
        if isinstance(item, dict):
            print(f"- #{item.get('id')} {item.get('title')}")
        else:
            print(f"- {item!r}")

    def on_remainder(self, remainder):
        print(f"\nRemainder: {json.dumps(remainder)}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract array items from a streamed JSON response.")
    parser.add_argument("--path", default="results", help="Dotted path to the array")
    parser.add_argument("--chunk-size", type=int, default=4)
    parser.add_argument("--remainder", action="store_true", help="Also rebuild the rest of the document")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    extractor = StreamingArrayExtractor(args.path, retain_remainder=args.remainder, handler=PrintHandler())

    sent = 0
    for i in range(0, len(response), args.chunk_size):
        if not extractor.write(response[i:i + args.chunk_size]):
            break
        sent = i + args.chunk_size
        time.sleep(0.01)

    extractor.end()
    logger.info("Read %d of %d bytes, %d items", min(sent, len(response)), len(response),
                extractor.items_emitted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
