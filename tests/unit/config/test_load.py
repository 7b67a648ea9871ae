from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from docgen.config import safe_load_config

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestSafeLoadConfig:
    def test_returns_config_without_error(self, fs: "FakeFilesystem") -> None:
        path = Path("/docgen.toml")
        fs.create_file(path, contents='[templates]\nprefix = "forms"\n')

        config, error = safe_load_config(config_path=path, include_env=False)

        assert error is None
        assert config.templates.prefix == "forms"

    def test_missing_explicit_path_exits(
        self, fs: "FakeFilesystem", capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=Path("/missing.toml"))

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_config_falls_back_to_defaults(
        self,
        fs: "FakeFilesystem",
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.delenv("DOCGEN_STRICT_CONFIG", raising=False)
        path = Path("/docgen.toml")
        fs.create_file(path, contents='[logging]\nlevel = "chatty"\n')

        config, error = safe_load_config(config_path=path, include_env=False)

        assert error is not None
        assert "logging.level" in error
        assert config.logging.level.value == "info"
        assert "Warning:" in capsys.readouterr().err

    def test_strict_mode_exits_on_error(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DOCGEN_STRICT_CONFIG", "1")
        path = Path("/docgen.toml")
        fs.create_file(path, contents="not = [valid")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=path, include_env=False)

        assert exc_info.value.code == 1
