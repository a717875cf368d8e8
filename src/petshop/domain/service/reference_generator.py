"""Domain service: product reference generation.

A reference reads as ``<CATE><yyyymmddHHMMSS><nnn>``: the category
prefix, the creation timestamp and the last three digits of the running
product count.  Uniqueness is not guaranteed here; the repository
rejects duplicates and the create handler retries with a new sequence.
"""

from __future__ import annotations

from datetime import datetime

PREFIX_LENGTH = 4
PREFIX_PAD = "X"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
SEQUENCE_DIGITS = 3


def generate(category: str, now: datetime, current_product_count: int) -> str:
    prefix = category.strip()[:PREFIX_LENGTH].upper().ljust(PREFIX_LENGTH, PREFIX_PAD)
    sequence = current_product_count % 10**SEQUENCE_DIGITS
    return f"{prefix}{now.strftime(TIMESTAMP_FORMAT)}{sequence:0{SEQUENCE_DIGITS}d}"
