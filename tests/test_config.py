from pathlib import Path

import pytest

from html2pdf.config import AppConfig, load_config
from html2pdf.errors import ConfigError
from html2pdf.settings import get_settings


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.toml")
    assert config == AppConfig()


def test_load_config_reads_sections(tmp_path: Path) -> None:
    path = tmp_path / "html2pdf.toml"
    path.write_text(
        """
[runtime]
log_file = "logs/runs.jsonl"

[render]
media_type = "screen"
presentational_hints = true

[fonts]
specs = ["Body,400,fonts/body.ttf", "Body,700,fonts/body-bold.ttf"]
""",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.runtime.log_file == Path("logs/runs.jsonl")
    assert config.render.media_type == "screen"
    assert config.render.presentational_hints is True
    assert config.fonts == ("Body,400,fonts/body.ttf", "Body,700,fonts/body-bold.ttf")


def test_invalid_toml_is_config_error(tmp_path: Path) -> None:
    path = tmp_path / "html2pdf.toml"
    path.write_text("[render\nmedia_type = ", encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_config(path)
    assert exc.value.code == "INVALID_CONFIG"


def test_env_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('[render]\nmedia_type = "screen"\n', encoding="utf-8")
    monkeypatch.setenv("HTML2PDF_CONFIG_PATH", str(path))
    monkeypatch.setenv("HTML2PDF_LOG_FILE", str(tmp_path / "env.jsonl"))
    get_settings.cache_clear()
    config = load_config()
    assert config.render.media_type == "screen"
    assert config.runtime.log_file == tmp_path / "env.jsonl"
