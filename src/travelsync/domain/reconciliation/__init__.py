"""Provenance-tracked reconciliation of canonical profile families.

Flow per (profile, family):
1) project canonical entities onto rows keyed by their natural key
2) soft-delete the scope's rows whose key is no longer reported
3) upsert reported rows, resurrecting soft-deleted ones
"""

from __future__ import annotations

from .contracts import FamilyRow, ReconciliationScope, UpsertOutcome
from .engine import FamilyReconciler, ReconciliationError, reconcile_family
from .keys import natural_key, project_rows, row_values, rows_by_family
from .results import BatchSummary, FamilyResult, ProfileResult

__all__ = [
    "BatchSummary",
    "FamilyReconciler",
    "FamilyResult",
    "FamilyRow",
    "ProfileResult",
    "ReconciliationError",
    "ReconciliationScope",
    "UpsertOutcome",
    "natural_key",
    "project_rows",
    "reconcile_family",
    "row_values",
    "rows_by_family",
]
