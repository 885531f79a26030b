"""
Exception taxonomy for id allocation and reconciliation.

Unparseable counter values are never raised; see
``row_sequencer.helpers.parsing.strict_parse_int``.
"""

class SequencerError(Exception):
    """Base class for all row_sequencer errors."""


class ConfigurationError(SequencerError, ValueError):
    """Invalid configuration, or a store missing the designated id column."""


class InvalidSubmission(SequencerError):
    """A submission referencing the header row or a row that does not exist."""

    def __init__(self, row: object, last_row: int | None = None):
        self.row = row
        self.last_row = last_row
        detail = f" (last row is {last_row})" if last_row is not None else ""
        super().__init__(f"Submission references invalid row {row!r}{detail}")


class LockTimeoutError(SequencerError, TimeoutError):
    """A named lock could not be acquired within its timeout."""

    def __init__(self, lock_name: str, timeout: float):
        self.lock_name = lock_name
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for '{lock_name}' lock")


class StorageWriteFailure(SequencerError):
    """A write to the tabular store or a counter tier failed."""
