"""Reconciliation engine: diff indexer truth against the on-chain cache."""

from __future__ import annotations

from .cache_reader import CacheReader
from .cycle import ReconciliationCycle
from .reconciler import NameObservation, ReconcileResult, Reconciler, compute_diff, partition
from .submitter import BatchSubmitter, build_batches

__all__ = [
    "BatchSubmitter",
    "CacheReader",
    "NameObservation",
    "ReconcileResult",
    "ReconciliationCycle",
    "Reconciler",
    "build_batches",
    "compute_diff",
    "partition",
]
