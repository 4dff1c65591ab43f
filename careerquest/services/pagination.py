"""1-based inclusive pagination helpers shared by catalog list endpoints"""
import math
from typing import Tuple

from careerquest.errors import ValidationError

DEFAULT_PAGE_SIZE = 20


def validate_bounds(start: int, end: int) -> None:
    if start < 1:
        raise ValidationError("start must be 1 or greater")
    if end < start:
        raise ValidationError("end must not be less than start")


def page_count(total: int, size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed to show ``total`` items, ``size`` per page"""
    if size < 1:
        raise ValidationError("page size must be 1 or greater")
    if total <= 0:
        return 0
    return math.ceil(total / size)


def page_bounds(page: int, size: int = DEFAULT_PAGE_SIZE) -> Tuple[int, int]:
    """(start, end) for a 1-based page number"""
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    start = (page - 1) * size + 1
    return start, start + size - 1
