from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Submission:
    """
    An accepted external submission whose target row needs an id.
    """
    row: int
    payload: Any = None


class AttemptStatus(Enum):
    SUCCESS = "SUCCESS"
    RECOVERABLE = "RECOVERABLE"
    FATAL = "FATAL"


@dataclass(frozen=True)
class AttemptResult:
    """
    Outcome of a single allocation attempt; drives the retry loop.
    """
    status: AttemptStatus
    value: int | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, value: int) -> "AttemptResult":
        return cls(AttemptStatus.SUCCESS, value=value)

    @classmethod
    def recoverable(cls, error: BaseException) -> "AttemptResult":
        return cls(AttemptStatus.RECOVERABLE, error=error)

    @classmethod
    def fatal(cls, error: BaseException) -> "AttemptResult":
        return cls(AttemptStatus.FATAL, error=error)
