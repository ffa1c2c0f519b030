"""Value types shared by the reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

TrackedName = NewType("TrackedName", str)
ContentIdentifier = NewType("ContentIdentifier", str)
OwnerAddress = NewType("OwnerAddress", str)

ZERO_ADDRESS = OwnerAddress("0x0000000000000000000000000000000000000000")


def normalize_address(address: str) -> OwnerAddress:
    """Return the canonical (lowercase, trimmed) form of an address.

    Addresses are case-insensitive; every comparison in the engine goes through
    this function so checksummed and lowercase spellings never diverge.
    """

    return OwnerAddress(address.strip().lower())


def addresses_equal(left: str, right: str) -> bool:
    return normalize_address(left) == normalize_address(right)


def short_address(address: str, width: int = 10) -> str:
    return f"{address[:width]}..."


@dataclass(slots=True, frozen=True)
class OwnerRecord:
    """Owner of one content record as observed by a single source."""

    identifier: ContentIdentifier
    owner: OwnerAddress | None

    @property
    def present(self) -> bool:
        return self.owner is not None


@dataclass(slots=True, frozen=True)
class DiffEntry:
    """A single correction to apply to the on-chain cache."""

    name: TrackedName
    desired_owner: OwnerAddress
    cached_owner: OwnerAddress = ZERO_ADDRESS


@dataclass(slots=True, frozen=True)
class SubmissionBatch:
    """Diff entries committed together in one transaction."""

    entries: tuple[DiffEntry, ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("SubmissionBatch requires at least one entry")

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    @property
    def owners(self) -> list[str]:
        return [entry.desired_owner for entry in self.entries]


@dataclass(slots=True, frozen=True)
class SubmissionReceipt:
    """Inclusion proof returned by the store once a transaction is mined."""

    transaction_hash: str
    block_number: int


@dataclass(slots=True, frozen=True)
class BatchOutcome:
    batch: SubmissionBatch
    receipt: SubmissionReceipt | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.receipt is not None and self.error is None


@dataclass(slots=True)
class CycleReport:
    """Summary of one reconciliation cycle."""

    checked: int = 0
    without_truth: list[TrackedName] = field(default_factory=list)
    diff: list[DiffEntry] = field(default_factory=list)
    outcomes: list[BatchOutcome] = field(default_factory=list)
    dry_run: bool = False

    @property
    def up_to_date(self) -> bool:
        return not self.diff

    @property
    def failed_entries(self) -> list[DiffEntry]:
        return [
            entry
            for outcome in self.outcomes
            if not outcome.succeeded
            for entry in outcome.batch.entries
        ]

    @property
    def submitted_entries(self) -> list[DiffEntry]:
        return [
            entry
            for outcome in self.outcomes
            if outcome.succeeded
            for entry in outcome.batch.entries
        ]
