import math
import numbers
from decimal import Decimal
import pandas as pd
from datetime import date, datetime
from dateutil import parser
from typing import Any

MAX_SAFE_INTEGER = 2**53 - 1

_NULL_STRINGS = {"", "nan", "null", "none", "na", "n/a"}

def normalise_null(value: Any) -> Any | None:
    if value is None:
        return None

    # pandas / numpy NaN and NaT
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass

    if isinstance(value, str):
        s = value.strip()
        if s.lower() in _NULL_STRINGS:
            return None
        return s

    return value


def _is_safe(num: int) -> bool:
    return -MAX_SAFE_INTEGER <= num <= MAX_SAFE_INTEGER


def strict_parse_int(value: Any) -> int | None:
    """
    Interpret ``value`` as an integer only if it is a safe, non-fractional,
    in-range integer. Anything else (nulls, booleans, fractions, junk text,
    values beyond 2**53 - 1) yields None rather than an error.
    """
    value = normalise_null(value)
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Integral):
        num = int(value)
        return num if _is_safe(num) else None

    # Decimal is not registered as numbers.Real
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            return None
        num = int(value)
        return num if _is_safe(num) else None

    if isinstance(value, numbers.Real):
        f = float(value)
        if not math.isfinite(f) or not f.is_integer():
            return None
        num = int(f)
        return num if _is_safe(num) else None

    if isinstance(value, str):
        # int() and float() accept digit separators
        if "_" in value:
            return None
        try:
            num = int(value)
        except ValueError:
            try:
                f = float(value)
            except ValueError:
                return None
            if not math.isfinite(f) or not f.is_integer():
                return None
            num = int(f)
        return num if _is_safe(num) else None

    return None


def parse_timestamp(value: Any) -> datetime | None:
    """
    Best-effort submission timestamp parsing. ISO strings first, then
    dateutil with day-first ordering (dd/mm/yyyy sheets).
    """
    value = normalise_null(value)
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
        try:
            return parser.parse(value, dayfirst=True, fuzzy=False)
        except (ValueError, OverflowError):
            return None
    return None
