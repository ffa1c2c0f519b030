from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from resolver_updater import app as app_module
from resolver_updater.app import UpdaterSettings, load_settings, run_updater
from resolver_updater.config import (
    ConfigurationError,
    IndexerConfig,
    PollConfig,
    ResilienceConfig,
    ResolverConfig,
)
from tests.helpers.fakes import ALICE_OWNER, FakeOwnerSource, FakeResolverStore, owner_address


class _ClosingSource(FakeOwnerSource):
    closed = False

    async def __aenter__(self) -> _ClosingSource:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.closed = True


class _ClosingStore(FakeResolverStore):
    closed = False

    async def __aenter__(self) -> _ClosingStore:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.closed = True


def _settings(names_file: Path) -> UpdaterSettings:
    return UpdaterSettings(
        indexer=IndexerConfig(resilience=ResilienceConfig()),
        resolver=ResolverConfig(
            rpc_url="http://localhost:8545",
            contract_address=owner_address(1),
            private_key="unused",
            retry_delay_seconds=0.0,
        ),
        poll=PollConfig(interval_seconds=1.0, names_file=names_file, group_delay_seconds=0.0),
    )


def test_run_updater_once_reconciles_and_closes_clients(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    names_file = tmp_path / "tracked-names.json"
    names_file.write_text('["alice", "bob"]', encoding="utf-8")
    source = _ClosingSource({"alice": ALICE_OWNER})
    store = _ClosingStore()
    monkeypatch.setattr(
        app_module.EthscriptionsOwnerSource, "from_config", classmethod(lambda _cls, _c: source)
    )
    monkeypatch.setattr(
        app_module.Web3ResolverStore, "from_config", classmethod(lambda _cls, _c: store)
    )

    report = asyncio.run(run_updater(_settings(names_file), once=True))

    assert report is not None
    assert report.checked == 2
    assert [entry.name for entry in report.submitted_entries] == ["alice"]
    assert store.owners == {"alice": ALICE_OWNER}
    assert source.closed
    assert store.closed


def test_run_updater_fails_fast_without_names_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        asyncio.run(run_updater(_settings(tmp_path / "missing.json"), once=True))


def test_load_settings_applies_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESOLVER_ADDRESS", owner_address(1))
    monkeypatch.setenv("PRIVATE_KEY", "0xsecret")
    monkeypatch.setenv("POLL_INTERVAL", "30")

    settings = load_settings(names_file=Path("custom.json"), interval_seconds=7.5)

    assert settings.poll.names_file == Path("custom.json")
    assert settings.poll.interval_seconds == 7.5
    assert settings.resolver.contract_address == owner_address(1)


def test_build_cycle_times_sends_but_not_receipt_waits(tmp_path: Path) -> None:
    settings = _settings(tmp_path / "tracked-names.json")

    cycle = app_module.build_cycle(
        names=list,
        source=FakeOwnerSource(),
        store=FakeResolverStore(),
        resolver_config=settings.resolver,
        poll_config=settings.poll,
    )

    assert cycle.submitter.governor.timeout == settings.resolver.request_timeout_seconds
    assert cycle.submitter.receipt_governor is not None
    assert cycle.submitter.receipt_governor.timeout is None
