from .reconciler import Reconciler
from .report import ReconciliationReport, RowCorrection

__all__ = [
    "Reconciler",
    "ReconciliationReport",
    "RowCorrection",
]
