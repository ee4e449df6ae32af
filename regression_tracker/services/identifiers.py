"""
Identifier and timestamp helpers shared by every manager.
"""

import random
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


def generate_id(prefix: str) -> str:
    """
    Build an id of the form ``<prefix>_<epoch millis>_<random suffix>``.

    Unique within a running process for all practical purposes; not a
    cryptographic guarantee.

    Example:
        >>> generate_id("folder")  # doctest: +SKIP
        'folder_1718031112345_k3j9x0q2a'
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
    return f"{prefix}_{millis}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Return the current time, stepped past ``previous`` if the clock has not moved."""
    now = utc_now()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now
