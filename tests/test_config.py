"""Tests for the configuration module."""

from pathlib import Path

import pytest

from valqueue._cli.config import (
    ConfigError,
    ValqueueConfig,
    find_pyproject_toml,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "forms" / "signup"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfigPaths:
    """Tests for loading form/input/output paths."""

    def test_full_configuration(self, tmp_path: Path) -> None:
        """Should resolve all paths relative to the project root."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.valqueue]
form = "forms/signup.toml"
input = "data/values.toml"
output = "data/result.toml"
""",
        )

        config = load_config(pyproject)

        assert config.form == tmp_path / "forms/signup.toml"
        assert config.input == tmp_path / "data/values.toml"
        assert config.output == tmp_path / "data/result.toml"
        assert config.project_root == tmp_path

    def test_absolute_path_is_kept(self, tmp_path: Path) -> None:
        """Should not rebase absolute paths."""
        form = tmp_path / "elsewhere" / "form.toml"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.valqueue]\nform = '{form.as_posix()}'\n")

        assert load_config(pyproject).form == form

    def test_invalid_path_type_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError when a path is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.valqueue]
input = 123
""",
        )

        with pytest.raises(ConfigError, match="expected string path"):
            load_config(pyproject)

    def test_unknown_key_raises_error(self, tmp_path: Path) -> None:
        """Should reject keys it does not know."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.valqueue]
from = "typo.toml"
""",
        )

        with pytest.raises(ConfigError, match="Unknown"):
            load_config(pyproject)


class TestLoadConfigEmptySection:
    """Tests for empty or missing configuration."""

    def test_no_tool_valqueue_section(self, tmp_path: Path) -> None:
        """Should return empty config when no [tool.valqueue] section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[project]
name = "test"
""",
        )

        config = load_config(pyproject)

        assert config.form is None
        assert config.input is None
        assert config.output is None
        assert config.project_root == tmp_path

    def test_empty_tool_valqueue_section(self, tmp_path: Path) -> None:
        """Should return empty config when [tool.valqueue] is empty."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.valqueue]\n")

        config = load_config(pyproject)

        assert config.form is None
        assert config.input is None
        assert config.output is None


class TestLoadConfigErrors:
    """Tests for configuration error handling."""

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid TOML."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("invalid toml [[[")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_section_must_be_a_table(self, tmp_path: Path) -> None:
        """Should raise ConfigError when [tool.valqueue] is not a table."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool]\nvalqueue = "form.toml"\n')

        with pytest.raises(ConfigError, match="expected a table"):
            load_config(pyproject)


class TestValqueueConfigDataclass:
    """Tests for the ValqueueConfig dataclass."""

    def test_default_values(self) -> None:
        """Should have None as default values."""
        config = ValqueueConfig()

        assert config.form is None
        assert config.input is None
        assert config.output is None
        assert config.project_root is None

    def test_frozen(self) -> None:
        """Should be frozen (immutable)."""
        config = ValqueueConfig()

        with pytest.raises(AttributeError):
            config.form = Path("form.toml")  # type: ignore[misc]
