"""Tests for settings, config files and command line args."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rust2luau.config import TranspilerConfig
from rust2luau.config_loader import CONFIG_DIR_NAME, CONFIG_FILE_NAME, load_config
from rust2luau.version import get_version, show_version


def write_config(root: Path, text: str) -> Path:
    config_dir = root / CONFIG_DIR_NAME
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / CONFIG_FILE_NAME
    config_path.write_text(text, encoding="utf-8")
    return config_path


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the global config lookup at an empty temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    return work


class TestTranspilerConfig:
    """Test the settings model."""

    def test_defaults(self) -> None:
        config = TranspilerConfig()
        assert config.indent_str == "    "
        assert config.source_comments is False

    def test_indent_width(self) -> None:
        assert TranspilerConfig(indent_width=2).indent_str == "  "

    def test_tabs_override_width(self) -> None:
        assert TranspilerConfig(indent_width=2, use_tabs=True).indent_str == "\t"

    def test_zero_width_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TranspilerConfig(indent_width=0)


class TestLoadConfig:
    """Test config priority: CLI > local > global > defaults."""

    def test_defaults_without_files(self, home_dir, work_dir, make_args) -> None:
        assert load_config(make_args(path=work_dir)) == TranspilerConfig()

    def test_global_config(self, home_dir, work_dir, make_args) -> None:
        write_config(home_dir, "indent_width = 2\n")
        assert load_config(make_args(path=work_dir)).indent_width == 2

    def test_local_overrides_global(self, home_dir, work_dir, make_args) -> None:
        write_config(home_dir, "indent_width = 2\nsource_comments = true\n")
        write_config(work_dir, "indent_width = 8\n")
        config = load_config(make_args(path=work_dir))
        assert config.indent_width == 8
        assert config.source_comments is True

    def test_cli_overrides_files(self, home_dir, work_dir, make_args) -> None:
        write_config(work_dir, "indent_width = 8\n")
        config = load_config(make_args(path=work_dir, indent=3, tabs=True))
        assert config.indent_width == 3
        assert config.use_tabs is True

    def test_cli_flags_only_turn_options_on(self, home_dir, work_dir, make_args) -> None:
        write_config(work_dir, "use_tabs = true\n")
        assert load_config(make_args(path=work_dir, tabs=False)).use_tabs is True

    def test_malformed_file_is_ignored(self, home_dir, work_dir, make_args) -> None:
        write_config(work_dir, "indent_width = [\n")
        assert load_config(make_args(path=work_dir)) == TranspilerConfig()

    def test_invalid_file_is_ignored(self, home_dir, work_dir, make_args) -> None:
        write_config(home_dir, "indent_width = 2\n")
        write_config(work_dir, "indent_width = -1\n")
        assert load_config(make_args(path=work_dir)).indent_width == 2

    def test_invalid_cli_value(self, home_dir, work_dir, make_args) -> None:
        with pytest.raises(ValidationError):
            load_config(make_args(path=work_dir, indent=0))

    def test_missing_working_dir(self, home_dir, tmp_path, make_args) -> None:
        with pytest.raises(ValueError, match="not a valid directory"):
            load_config(make_args(path=tmp_path / "nowhere"))


class TestArgs:
    """Test derived command line values."""

    def test_input_paths(self, make_args) -> None:
        args = make_args(files=["a.rs", "src"])
        assert args.input_paths == [Path("a.rs"), Path("src")]

    def test_relative_working_dir(self, tmp_path: Path, make_args, monkeypatch) -> None:
        (tmp_path / "proj").mkdir()
        monkeypatch.chdir(tmp_path)
        assert make_args(path=Path("proj")).working_dir == (tmp_path / "proj").resolve()

    def test_default_working_dir(self, tmp_path: Path, make_args, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert make_args(path=None).working_dir == tmp_path.resolve()


class TestVersion:
    """Test version reporting."""

    def test_show_version(self) -> None:
        with (
            patch("rust2luau.version.version", return_value="1.2.3"),
            patch("builtins.print") as mock_print,
            pytest.raises(SystemExit) as exc_info,
        ):
            show_version()
        mock_print.assert_called_once_with("rust2luau 1.2.3")
        assert exc_info.value.code == 0

    def test_missing_package_metadata(self) -> None:
        with patch("rust2luau.version.version", side_effect=Exception("not found")):
            assert get_version() == "unknown"
