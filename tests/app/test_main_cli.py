from __future__ import annotations

from pathlib import Path

import pytest

from resolver_updater import main as main_module
from resolver_updater.app import UpdaterSettings
from resolver_updater.config import ConfigurationError


def _patch(
    monkeypatch: pytest.MonkeyPatch,
    captured: dict[str, object],
    *,
    run_error: Exception | None = None,
) -> None:
    sentinel = object.__new__(UpdaterSettings)

    def fake_load_settings(**kwargs: object) -> UpdaterSettings:
        captured["settings_kwargs"] = kwargs
        return sentinel

    def fake_run(settings: UpdaterSettings, **kwargs: object) -> None:
        captured["settings"] = settings
        captured.update(kwargs)
        if run_error is not None:
            raise run_error

    monkeypatch.setattr(main_module, "load_settings", fake_load_settings)
    monkeypatch.setattr(main_module, "run_resolver_updater", fake_run)


def test_main_cli_defaults_poll_forever(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    _patch(monkeypatch, captured)

    main_module.main([])

    assert captured["once"] is False
    assert captured["dry_run"] is False
    assert captured["settings_kwargs"] == {"names_file": None, "interval_seconds": None}


def test_main_cli_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    _patch(monkeypatch, captured)

    main_module.main(
        ["--once", "--dry-run", "--names-file", "names.json", "--interval", "5", "--verbose"]
    )

    assert captured["once"] is True
    assert captured["dry_run"] is True
    assert captured["settings_kwargs"] == {
        "names_file": Path("names.json"),
        "interval_seconds": 5.0,
    }


def test_main_cli_rejects_non_positive_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch(monkeypatch, {})

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--interval", "0"])

    assert excinfo.value.code == 2


def test_main_cli_configuration_error_exits_before_polling(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, object] = {}
    _patch(monkeypatch, captured, run_error=ConfigurationError("Names file not found"))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--once"])

    assert excinfo.value.code == 2


def test_main_cli_unexpected_error_exits_with_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch(monkeypatch, {}, run_error=KeyError("boom"))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 1


def test_main_cli_missing_environment_exits_with_usage_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for name in ("RESOLVER_ADDRESS", "PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main_module, "run_resolver_updater", lambda *_a, **_k: None)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--once"])

    assert excinfo.value.code == 2
