"""
Extractor Handler - Base handler class for extraction events.

Clients should subclass this and override the methods they need.
"""

from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from .extractor import ExtractionState


class ExtractorHandler:
    """
    Base handler class for extraction events.
    Clients should subclass this and override the methods they need.
    """

    def on_item(self, item: Any) -> None:
        """
        Called once per array element, in document order, as soon as it is complete.

        Args:
            item: The decoded value, or its raw bytes when item parsing is off.
        """
        pass

    def on_remainder(self, remainder: Any) -> None:
        """
        Called once after input ends when the remainder is retained.

        Args:
            remainder: The document with the array emptied (decoded or raw
                bytes), or None when no input was received.
        """
        pass

    def on_end(self, state: 'ExtractionState') -> None:
        """Called when input ends, with the final extraction state."""
        pass


class ItemCollector(ExtractorHandler):
    """Handler that keeps every item and the remainder in memory."""

    def __init__(self):
        self.items: List[Any] = []
        self.remainders: List[Any] = []
        self.final_state = None

    def on_item(self, item: Any) -> None:
        self.items.append(item)

    def on_remainder(self, remainder: Any) -> None:
        self.remainders.append(remainder)

    def on_end(self, state: 'ExtractionState') -> None:
        self.final_state = state

    def drain(self) -> List[Any]:
        """Return the items collected so far and forget them."""
        items, self.items = self.items, []
        return items
