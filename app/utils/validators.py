"""Input validation shared by the ingest and lookup paths."""
import re
from typing import Any, Optional

from app.core.exceptions import InvalidInputException
from app.models.artist import ARTIST_NAME_MAX_LENGTH

# 2 letter country code, 3 alphanumeric registrant, 7 digit year + designation
ISRC_PATTERN = re.compile(r"[A-Z]{2}[A-Z0-9]{3}[0-9]{7}", re.IGNORECASE | re.ASCII)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 20


def is_valid_isrc(candidate: Any) -> bool:
    """True if the candidate is a string shaped like an ISRC."""
    return isinstance(candidate, str) and ISRC_PATTERN.fullmatch(candidate) is not None


def validate_isrc(candidate: Any) -> str:
    if not is_valid_isrc(candidate):
        raise InvalidInputException("Invalid ISRC")
    return candidate


def validate_artist_name(candidate: Any) -> str:
    """Artist search term must be a non-empty string of at most 200 chars."""
    if not candidate or not isinstance(candidate, str) or len(candidate) > ARTIST_NAME_MAX_LENGTH:
        raise InvalidInputException("Invalid Artist")
    return candidate


def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a query value ("5", " 7", "12abc").

    Returns None when there is no leading integer.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def normalize_limit(value: Any) -> int:
    """Page length in [1, 20]; anything else falls back to 10."""
    limit = parse_int(value)
    if not limit or limit < 1 or limit > MAX_PAGE_LIMIT:
        return DEFAULT_PAGE_LIMIT
    return limit


def normalize_page(value: Any) -> int:
    """1-indexed page number; absent or below 1 means the first page."""
    page = parse_int(value)
    if not page or page < 1:
        return 1
    return page
