import math
import re
from typing import Iterable

from services.exceptions import ParseError

DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_decimal(text: str) -> float:
    """Parses a user's number, accepting either '.' or ',' as the decimal separator."""
    clean_text = text.strip().replace(",", ".")
    if not DECIMAL_PATTERN.fullmatch(clean_text):
        raise ParseError(text)
    value = float(clean_text)
    # exponents such as 1e999 overflow to inf
    if not math.isfinite(value):
        raise ParseError(text)
    return value


def is_skip_token(text: str, tokens: Iterable[str]) -> bool:
    """Checks whether the text is one of the 'no value' answers, ignoring case."""
    clean_text = text.strip().casefold()
    return any(clean_text == token.strip().casefold() for token in tokens)
