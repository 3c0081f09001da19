"""
Groups positioned fragments into visual lines by vertical clustering.
"""

from typing import List, Sequence

from core.page.models import PositionedFragment

from .models import Line


def _reading_order_key(fragment: PositionedFragment):
    """Top-to-bottom (larger y first), then left-to-right."""
    return (-fragment.y, fragment.x)


def group_into_lines(
    fragments: Sequence[PositionedFragment],
    tolerance: float = 5.0,
) -> List[Line]:
    """
    Cluster fragments into lines.

    Fragments are visited top-to-bottom, left-to-right.  A new line
    starts when a fragment's ``y`` differs from the previous fragment's
    by more than *tolerance*; the comparison always uses the most
    recently added fragment, so slowly drifting baselines stay on one
    line.  Each finished line is re-sorted by ``x``.

    Args:
        fragments: Fragments for a single page, in any order.
        tolerance: Max vertical distance within one line.

    Returns:
        Lines in top-to-bottom order.
    """
    lines: List[Line] = []
    current: List[PositionedFragment] = []
    current_y = None

    for fragment in sorted(fragments, key=_reading_order_key):
        if current_y is None or abs(fragment.y - current_y) <= tolerance:
            current.append(fragment)
        else:
            lines.append(Line(sorted(current, key=lambda f: f.x)))
            current = [fragment]
        current_y = fragment.y

    if current:
        lines.append(Line(sorted(current, key=lambda f: f.x)))

    return lines
