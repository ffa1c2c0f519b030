"""Polling defaults for the reconciliation loop."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import env_float, optional_env_var

DEFAULT_POLL_INTERVAL_SECONDS = 30.0
DEFAULT_NAMES_FILE = "tracked-names.json"
DEFAULT_GROUP_DELAY_SECONDS = 0.05


@dataclass(frozen=True, slots=True)
class PollConfig:
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    names_file: Path = Path(DEFAULT_NAMES_FILE)
    group_delay_seconds: float = DEFAULT_GROUP_DELAY_SECONDS


def get_poll_config() -> PollConfig:
    return PollConfig(
        interval_seconds=env_float(
            "POLL_INTERVAL", DEFAULT_POLL_INTERVAL_SECONDS, minimum=0.1
        ),
        names_file=Path(optional_env_var("NAMES_FILE", DEFAULT_NAMES_FILE)).expanduser(),
    )
