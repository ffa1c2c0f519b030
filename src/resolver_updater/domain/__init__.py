"""Domain layer of the resolver updater."""

from __future__ import annotations

from .identifiers import derive_content_identifier
from .retry import RetryGovernor, is_transient_error
from .scheduler import PollScheduler, SchedulerState
from .types import (
    ZERO_ADDRESS,
    BatchOutcome,
    ContentIdentifier,
    CycleReport,
    DiffEntry,
    OwnerAddress,
    OwnerRecord,
    SubmissionBatch,
    SubmissionReceipt,
    TrackedName,
    addresses_equal,
    normalize_address,
)

__all__ = [
    "ZERO_ADDRESS",
    "BatchOutcome",
    "ContentIdentifier",
    "CycleReport",
    "DiffEntry",
    "OwnerAddress",
    "OwnerRecord",
    "PollScheduler",
    "RetryGovernor",
    "SchedulerState",
    "SubmissionBatch",
    "SubmissionReceipt",
    "TrackedName",
    "addresses_equal",
    "derive_content_identifier",
    "is_transient_error",
    "normalize_address",
]
