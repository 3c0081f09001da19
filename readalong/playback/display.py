"""
Keeps the two-page display spread in step with the reading cursor.
"""

import logging
from typing import Callable, Optional, Union

from .models import DisplaySpread

logger = logging.getLogger(__name__)


def left_page_for(page: int) -> int:
    """Odd page that anchors the spread showing *page*."""
    return page - 1 if page % 2 == 0 else page


class DisplaySynchronizer:
    """
    Two-page spread state.

    The cursor drives it through :meth:`follow`; the user drives it
    through the manual moves, which also report the new left page to
    ``on_manual_turn`` so its text can be queued for narration.
    """

    def __init__(
        self,
        total_pages: int = 0,
        on_manual_turn: Optional[Callable[[int], None]] = None,
    ):
        self.on_manual_turn = on_manual_turn
        self._total_pages = 0
        self._left_page = 1
        self.reset(total_pages)

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def spread(self) -> DisplaySpread:
        right = self._left_page + 1
        return DisplaySpread(
            left_page=self._left_page,
            right_page=right if right <= self._total_pages else None,
        )

    def reset(self, total_pages: int) -> None:
        self._total_pages = max(0, total_pages)
        self._left_page = 1

    def follow(self, reading_page: int) -> bool:
        """
        Show *reading_page*, re-anchoring the spread only if it is not
        already visible.

        Returns:
            ``True`` if the spread moved.
        """
        if not 1 <= reading_page <= self._total_pages:
            return False
        if self.spread.shows(reading_page):
            return False
        self._left_page = left_page_for(reading_page)
        logger.debug("Display follows page %d: %s", reading_page, self.spread)
        return True

    def next_spread(self) -> bool:
        return self._turn_to(min(self._left_page + 2, self._total_pages))

    def previous_spread(self) -> bool:
        return self._turn_to(max(self._left_page - 2, 1))

    def go_to_page(self, value: Union[int, str]) -> bool:
        """
        Jump to the spread containing page *value* (an int or a numeric
        string).  Non-numeric or out-of-range input is ignored.
        """
        try:
            page = int(str(value).strip())
        except ValueError:
            logger.debug("Ignoring non-numeric page %r", value)
            return False
        if not 1 <= page <= self._total_pages:
            logger.debug("Ignoring page %d outside 1..%d", page, self._total_pages)
            return False
        return self._turn_to(page)

    def _turn_to(self, page: int) -> bool:
        if self._total_pages < 1:
            return False
        left = left_page_for(page)
        if left == self._left_page:
            return False
        self._left_page = left
        if self.on_manual_turn is not None:
            self.on_manual_turn(left)
        return True

    def __repr__(self) -> str:
        s = self.spread
        return f"DisplaySynchronizer({s.left_page}-{s.right_page}/{self._total_pages})"
