"""Loading of the tracked-name list."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, cast

from .errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


def load_tracked_names(path: Path) -> tuple[str, ...]:
    """Read a flat JSON array of names from ``path``.

    Blank or non-string entries make the whole file invalid. Duplicates are
    dropped, keeping the first occurrence so discovery order stays stable.
    """

    if not path.is_file():
        raise ConfigurationError(
            f"Names file not found: {path} "
            '(create it with a JSON array of names, e.g. ["snepsid", "chainhost"])'
        )
    try:
        payload: object = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Names file {path} is not readable JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise ConfigurationError(f"Names file {path} must contain a JSON array of strings")

    names: list[str] = []
    seen: set[str] = set()
    for index, item in enumerate(cast(list[object], payload)):
        if not isinstance(item, str) or not item.strip():
            raise ConfigurationError(
                f"Names file {path}: entry {index} must be a non-empty string, got {item!r}"
            )
        if item in seen:
            log.warning("Ignoring duplicate tracked name %r in %s", item, path)
            continue
        seen.add(item)
        names.append(item)
    return tuple(names)


class TrackedNamesFile:
    """Tracked names backed by a JSON file that is re-read every cycle.

    The first load is strict and raises :class:`ConfigurationError`. Later
    reloads keep the last good list when the file turns invalid, so an edit in
    progress never stops the polling loop.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._names = load_tracked_names(path)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __call__(self) -> tuple[str, ...]:
        try:
            names = load_tracked_names(self.path)
        except ConfigurationError as exc:
            log.warning("Keeping %d previously loaded names: %s", len(self._names), exc)
            return self._names
        if names != self._names:
            log.info("Tracked names reloaded from %s: %d names", self.path, len(names))
        self._names = names
        return names
