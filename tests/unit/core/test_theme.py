"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path

import ignorectl.core.theme as theme_module
import pytest
from ignorectl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    get_user_theme_path,
    load_theme,
)
from rich.theme import Theme


def _write_theme(content: str) -> Path:
    path = get_user_theme_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.success == "#03b971"
        assert colors.added == "#c1ff62"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts short and long hex codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_length(self) -> None:
        """ThemeColors rejects colors of the wrong length."""
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(text="#abcd")

    def test_invalid_hex_digits(self) -> None:
        """ThemeColors rejects non-hex digits."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_unknown_color_rejected(self) -> None:
        """Unknown color names are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files return None."""
        assert _load_toml_colors(tmp_path / "theme.toml") is None

    def test_reads_colors_table(self, tmp_path: Path) -> None:
        """String values in [colors] are returned."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nsuccess = "#00ff00"\nwidth = 3\n')

        assert _load_toml_colors(path) == {"success": "#00ff00"}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Syntax errors return None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert _load_toml_colors(path) is None


class TestLoadTheme:
    """Tests for load_theme."""

    def test_defaults_without_user_file(self) -> None:
        """Without a theme file the defaults are used."""
        assert load_theme() == ThemeColors()

    def test_user_override(self) -> None:
        """User colors override defaults."""
        _write_theme('[colors]\nerror = "#ff0000"\n')

        colors = load_theme()

        assert colors.error == "#ff0000"
        assert colors.success == ThemeColors().success

    def test_invalid_override_falls_back(self) -> None:
        """Invalid user colors fall back to the defaults."""
        _write_theme('[colors]\nerror = "red"\n')

        assert load_theme() == ThemeColors()


class TestRichTheme:
    """Tests for get_rich_theme and get_theme."""

    def test_contains_styles(self) -> None:
        """The Rich theme defines every style the CLI uses."""
        theme = get_rich_theme(ThemeColors())

        for name in ("success", "warning", "error", "info", "added", "removed", "entry"):
            assert name in theme.styles

    def test_get_theme_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_theme builds the theme once."""
        monkeypatch.setattr(theme_module, "_cached_theme", None)

        first = get_theme()

        assert isinstance(first, Theme)
        assert get_theme() is first
