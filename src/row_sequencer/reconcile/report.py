from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RowCorrection:
    row: int
    previous: Any
    corrected: int


@dataclass
class ReconciliationReport:
    """
    Outcome of one reconciliation run. Keeps a bounded sample of corrections.
    """
    start_id: int
    rows_scanned: int = 0
    rows_corrected: int = 0
    batches_written: int = 0
    final_id: int | None = None
    examples: list[RowCorrection] = field(default_factory=list)
    example_limit: int = 10

    def record(self, *, row: int, previous: Any, corrected: int):
        self.rows_corrected += 1
        if len(self.examples) < self.example_limit:
            self.examples.append(RowCorrection(row=row, previous=previous, corrected=corrected))

    def is_clean(self) -> bool:
        return self.rows_corrected == 0

    def summary(self) -> str:
        final = self.final_id if self.final_id is not None else "-"
        return (
            f"Reconciled {self.rows_scanned} row(s) in {self.batches_written} batch(es): "
            f"{self.rows_corrected} corrected, final id {final}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_id": self.start_id,
            "rows_scanned": self.rows_scanned,
            "rows_corrected": self.rows_corrected,
            "batches_written": self.batches_written,
            "final_id": self.final_id,
            "examples": [
                {"row": c.row, "previous": c.previous, "corrected": c.corrected}
                for c in self.examples
            ],
        }
