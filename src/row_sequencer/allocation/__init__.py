from .allocator import Allocator
from .results import Submission, AttemptResult, AttemptStatus

__all__ = [
    "Allocator",
    "Submission",
    "AttemptResult",
    "AttemptStatus",
]
