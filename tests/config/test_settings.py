"""Tests for RegistrySettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from custreg.config.settings import RegistrySettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CUSTREG_CONFIG",
        "CUSTREG_VERBOSE",
        "CUSTREG_REPOSITORY__LOCK_TIMEOUT",
        "CUSTREG_IDS__SEED",
        "CUSTREG_LOGGING__LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.repository.lock_timeout == 5.0
        assert settings.ids.seed is None
        assert settings.logging.level == "warning"
        assert settings.log_level == "warning"
        assert settings.log_format_json is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = RegistrySettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        toml = tmp_path / "custreg.toml"
        toml.write_text("[repository]\nlock_timeout = 0.5\n[ids]\nseed = 42\n")
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.repository.lock_timeout == 0.5
        assert settings.ids.seed == 42
        assert settings.config_path == toml

    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("[ids]\nseed = 7\n")
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.ids.seed == 7
        assert settings.repository.lock_timeout == 5.0

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("")
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.repository.lock_timeout == 5.0

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "etc" / "registry.toml"
        custom.parent.mkdir()
        custom.write_text("[repository]\nlock_timeout = 2.0\n")
        settings = RegistrySettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.repository.lock_timeout == 2.0
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            RegistrySettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("[repository\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            RegistrySettings.from_cli(start=tmp_path)

    def test_unknown_keys_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("config_path = \"y\"\n[vault]\nname = \"x\"\n")
        with pytest.raises(click.ClickException, match="config_path, vault"):
            RegistrySettings.from_cli(start=tmp_path)

    def test_logging_section(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text(
            "[logging]\nlevel = \"info\"\nformat = \"json\"\n"
        )
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.log_level == "info"
        assert settings.log_format_json is True
        assert RegistrySettings.from_cli(start=tmp_path, verbose=True).log_level == "debug"

    def test_rejects_non_positive_timeout(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("[repository]\nlock_timeout = 0\n")
        with pytest.raises(Exception):
            RegistrySettings.from_cli(start=tmp_path)


class TestPriority:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = RegistrySettings.from_cli(
            start=tmp_path, json_output=True, quiet=True, verbose=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("verbose = true\n")
        settings = RegistrySettings.from_cli(start=tmp_path, verbose=False)
        assert settings.verbose is False

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "custreg.toml").write_text("[repository]\nlock_timeout = 2.0\n")
        monkeypatch.setenv("CUSTREG_REPOSITORY__LOCK_TIMEOUT", "0.25")
        settings = RegistrySettings.from_cli(start=tmp_path)
        assert settings.repository.lock_timeout == 0.25

    def test_section_overrides_merge_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "custreg.toml").write_text("[ids]\nseed = 3\n[repository]\nlock_timeout = 2.0\n")
        settings = RegistrySettings.from_cli(start=tmp_path, lock_timeout=0.1)
        assert settings.repository.lock_timeout == 0.1
        assert settings.ids.seed == 3
        assert RegistrySettings.from_cli(start=tmp_path, id_seed=11).ids.seed == 11
