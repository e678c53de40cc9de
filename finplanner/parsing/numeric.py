"""
Numeric Normalizer

Sheet cells arrive as display text: "$2,000.00", "1,250", "50%".
These helpers turn them into floats.

DESIGN DECISION: Normalization is total. Anything that is not a number
after stripping decoration becomes 0.0 and the caller carries on; a
spreadsheet full of blank cells and typos must still load. Callers that
want to report bad cells use `try_parse_number`, which tells "blank"
and "garbage" apart without changing the value stored.
"""

import math
import re
from typing import Optional

_DECORATION = str.maketrans("", "", "$,%")

# Plain ASCII decimal, optional sign and exponent. Rejects "1_000" and
# non-ASCII digits that float() would otherwise accept.
_PLAIN_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def try_parse_number(cell: Optional[str]) -> Optional[float]:
    """
    Parse a cell, returning None when non-empty text is not numeric.

    Blank or missing cells return 0.0, they are not an error.
    """
    if cell is None:
        return 0.0
    text = str(cell).translate(_DECORATION).strip()
    if not text:
        return 0.0
    if not _PLAIN_DECIMAL.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def parse_number(cell: Optional[str]) -> float:
    """Strip `$`, `,` and `%` and parse; never fails, bad input is 0.0."""
    value = try_parse_number(cell)
    return 0.0 if value is None else value


def parse_percent(cell: Optional[str]) -> float:
    """Parse a percentage cell onto a 0-1 scale ("50%" -> 0.5)."""
    return parse_number(cell) / 100


def is_blank(cell: Optional[str]) -> bool:
    return cell is None or not str(cell).strip()
