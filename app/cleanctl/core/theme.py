"""Colour theme for cleanctl output.

Colours ship in ``cleanctl/data/theme.toml``. A ``theme.toml`` in the
user's config directory may override any subset of them; an unusable
override is ignored with a logged warning.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from cleanctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """One hex colour per kind of cleanup output."""

    model_config = ConfigDict(extra="forbid")

    header: str = "#69B9A1"
    border: str = "#29526d"
    muted: str = "#b2bec3"
    path: str = "#0e8ac8"
    removed: str = "#f53263"
    success: str = "#03b971"
    warning: str = "#f5b332"
    info: str = "#0ec1c8"
    error: str = "#f53263"

    @field_validator("*")
    @classmethod
    def check_hex(cls, value: str) -> str:
        """Accept #RGB and #RRGGBB colours only."""
        value = value.strip()
        if not _HEX_COLOR.fullmatch(value):
            msg = f"{value!r} is not a #RGB or #RRGGBB colour"
            raise ValueError(msg)
        return value


def _read_colors(source: Path | Traversable) -> dict[str, object]:
    """Read the [colors] table of a theme file; a missing file reads as empty."""
    try:
        with source.open("rb") as f:
            colors = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}

    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", source)
        return {}
    return colors


def load_theme() -> ThemeColors:
    """Merge the user's colour overrides into the bundled colours."""
    colors = _read_colors(resources.files("cleanctl.data") / "theme.toml")
    colors.update(_read_colors(get_user_theme_path()))
    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map theme colours onto the style names used by the CLI."""
    c = colors if colors is not None else load_theme()
    return Theme(
        {
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "muted": c.muted,
            "path": c.path,
            "removed": c.removed,
            "success": c.success,
            "warning": c.warning,
            "info": c.info,
            "error": f"bold {c.error}",
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme shared by the CLI consoles, loaded on first use."""
    return get_rich_theme()
