from .parsing import normalise_null, strict_parse_int, parse_timestamp, MAX_SAFE_INTEGER
from .files import infer_encoding, infer_delim
from .sessions import session_guard

__all__ = [
    "normalise_null",
    "strict_parse_int",
    "parse_timestamp",
    "MAX_SAFE_INTEGER",
    "infer_encoding",
    "infer_delim",
    "session_guard",
]
