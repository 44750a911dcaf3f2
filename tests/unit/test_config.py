"""Tests for YAML print configuration loading."""

from pathlib import Path

import pytest
import yaml

from writable_table import Justification, PrintConfig, ValidationError
from writable_table.config import CONFIG_ENV_VAR, load_print_config, resolve_config_path


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "print.yaml"
    path.write_text(content)
    return path


class TestLoadPrintConfig:
    """Tests for load_print_config."""

    def test_full_file(self, tmp_path: Path) -> None:
        """All keys are read."""
        path = tmp_path / "print.yaml"
        with open(path, "w") as f:
            yaml.dump(
                {"justification": "left", "padding": 2, "pad_char": ".", "show_headers": False},
                f,
            )
        assert load_print_config(path) == PrintConfig(
            justification=Justification.LEFT, padding=2, pad_char=".", show_headers=False
        )

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        """Missing keys keep their default values."""
        path = _write(tmp_path, "padding: 1\n")
        assert load_print_config(path) == PrintConfig(padding=1)

    def test_partial_file_overrides_base(self, tmp_path: Path) -> None:
        """Keys override the given base configuration only where present."""
        base = PrintConfig(justification=Justification.LEFT, pad_char="*")
        path = _write(tmp_path, "show_headers: false\n")
        assert load_print_config(path, base=base) == PrintConfig(
            justification=Justification.LEFT, pad_char="*", show_headers=False
        )

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file yields the base configuration."""
        assert load_print_config(_write(tmp_path, "")) == PrintConfig()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """A YAML list is rejected."""
        with pytest.raises(ValidationError, match="mapping"):
            load_print_config(_write(tmp_path, "- padding\n"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML is reported as a validation error."""
        with pytest.raises(ValidationError, match="Invalid YAML"):
            load_print_config(_write(tmp_path, "padding: [1\n"))

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is reported as a validation error."""
        with pytest.raises(ValidationError, match="Cannot read file"):
            load_print_config(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "content",
        ["padding: 0\n", "padding: '3'\n", "pad_char: ab\n", "justification: center\n"],
    )
    def test_invalid_values(self, tmp_path: Path, content: str) -> None:
        """Invalid values raise ValidationError."""
        with pytest.raises(ValidationError):
            load_print_config(_write(tmp_path, content))

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys raise ValidationError."""
        with pytest.raises(ValidationError, match="Unknown print configuration key"):
            load_print_config(_write(tmp_path, "colour: red\n"))

    def test_unknown_keys_of_mixed_types(self, tmp_path: Path) -> None:
        """Integer and string keys together are still reported as unknown keys."""
        with pytest.raises(ValidationError, match="Unknown print configuration key") as exc_info:
            load_print_config(_write(tmp_path, "1: a\nfoo: b\n"))
        assert exc_info.value.value == 1


class TestResolveConfigPath:
    """Tests for resolve_config_path."""

    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An explicit path beats the environment variable."""
        monkeypatch.setenv(CONFIG_ENV_VAR, "/env/print.yaml")
        assert resolve_config_path("cli.yaml") == Path("cli.yaml")

    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The environment variable is used when no path is given."""
        monkeypatch.setenv(CONFIG_ENV_VAR, "/env/print.yaml")
        assert resolve_config_path(None) == Path("/env/print.yaml")

    def test_nothing_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """None when neither is set."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert resolve_config_path() is None
