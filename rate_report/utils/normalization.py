"""Normalization helpers for rate categories, zones and sheet titles.

Category keys are always built from raw values; these helpers only produce the
display values stored on a category and the titles shown in the workbook.
"""

import re
from typing import Optional


_NUMBER_RE = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$')
_WORD_START_RE = re.compile(r'\b\w', flags=re.ASCII)


def normalize_locale(locale: str) -> str:
    """Lowercase a locale for display and ordering."""
    return locale.lower()


def normalize_speed(speed: str) -> str:
    """Normalize a shipping speed for display and ordering.

    - Lowercase
    - Drop the "intl" marker, so "StandardIntl" reads as "standard"
    - Split "nextday" into "next day"

    Only the first occurrence of each marker is rewritten.
    """
    s = speed.lower()
    s = s.replace("intl", "", 1)
    s = s.replace("nextday", "next day", 1)
    return s


def init_cap(text: str) -> str:
    """Uppercase the first character of every word.

    Letters after the first are left as they are: "next day rates" becomes
    "Next Day Rates".
    """
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), text)


def parse_zone_number(zone: str) -> Optional[float]:
    """Return the numeric value of a zone identifier, or None if it isn't a number.

    Handles: "1", "10", " 4 ", "2.5", "1e2". Alphabetic zones like "A" or "PR"
    return None, as do "", "0x1A", "nan" and "Infinity": only plain decimal
    literals count as numbers.
    """
    if zone is None or not _NUMBER_RE.match(zone):
        return None
    return float(zone)
