from __future__ import annotations
from typing import List, Sequence, Tuple

from ..errors import ValidationError
from ..types import Range


def validate_widths(widths: Sequence[int]) -> List[int]:
    """Return ``widths`` as a list of ints, rejecting empty or non-positive entries."""
    checked: List[int] = []
    for position, width in enumerate(widths, start=1):
        if isinstance(width, bool) or not isinstance(width, int):
            raise ValidationError(f"Width #{position} must be an integer, got {width!r}")
        if width < 1:
            raise ValidationError(f"Width #{position} must be positive, got {width}")
        checked.append(width)
    if not checked:
        raise ValidationError("At least one column width is required")
    return checked


def validate_ranges(ranges: Sequence[Sequence[int]]) -> List[Range]:
    """
    Normalize and check a range set.

    Each range is a 1-based inclusive ``(lo, hi)`` pair. Ranges must satisfy
    ``1 <= lo <= hi`` and be strictly increasing without overlap.

    :raises ValidationError: On the first range that breaks a rule.
    """
    checked: List[Range] = []
    previous_hi = 0
    for position, candidate in enumerate(ranges, start=1):
        try:
            lo, hi = candidate
        except (TypeError, ValueError):
            raise ValidationError(f"Range #{position} must be a (start, end) pair, got {candidate!r}")
        if any(isinstance(bound, bool) or not isinstance(bound, int) for bound in (lo, hi)):
            raise ValidationError(f"Range #{position} bounds must be integers, got {candidate!r}")
        if lo < 1:
            raise ValidationError(f"Range #{position} starts at {lo}; positions start at 1")
        if hi < lo:
            raise ValidationError(f"Range #{position} has end {hi} < start {lo}")
        if lo <= previous_hi:
            raise ValidationError(
                f"Range #{position} ({lo}-{hi}) overlaps or precedes the previous range ending at {previous_hi}")
        checked.append((lo, hi))
        previous_hi = hi
    return checked


def ranges_to_widths(ranges: Sequence[Sequence[int]]) -> Tuple[List[int], List[bool]]:
    """
    Convert a range set into a contiguous width vector plus a keep mask.

    Positions between two requested ranges (or before the first one) become an
    extra column flagged ``False`` in the mask, so the widths tile the line from
    position 1 to the end of the last range.

    Example:
        ``[(1, 1), (3, 3), (4, 5)]`` -> ``([1, 1, 1, 2], [True, False, True, True])``

    :param ranges: 1-based inclusive ``(lo, hi)`` pairs.
    :returns: ``(widths, keep)`` of equal length.
    :raises ValidationError: If the ranges are malformed, unsorted or overlapping.
    """
    widths: List[int] = []
    keep: List[bool] = []
    previous_hi = 0
    for lo, hi in validate_ranges(ranges):
        if lo > previous_hi + 1:
            widths.append(lo - previous_hi - 1)
            keep.append(False)
        widths.append(hi - lo + 1)
        keep.append(True)
        previous_hi = hi
    return widths, keep
