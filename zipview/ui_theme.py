"""UI theme definitions and selection helpers.

Themes are ANSI palettes for rows, status line, JSON value kinds and
transcript authors. ``--no-color`` maps to the plain theme.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    row: str
    selected: str
    divider: str
    search_hit: str
    status: str
    status_error: str
    status_success: str
    header: str
    meta_label: str
    tree_marker: str
    json_key: str
    json_string: str
    json_number: str
    json_boolean: str
    json_null: str
    json_container: str
    author_user: str
    author_assistant: str
    author_other: str
    separator: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    row="\033[37m",
    selected="\033[30;47m",
    divider="\033[2m",
    search_hit="\033[30;43m",
    status="\033[90m",
    status_error="\033[31m",
    status_success="\033[32m",
    header="\033[1;37m",
    meta_label="\033[38;5;109m",
    tree_marker="\033[38;5;44m",
    json_key="\033[38;5;252m",
    json_string="\033[32m",
    json_number="\033[33m",
    json_boolean="\033[35m",
    json_null="\033[90m",
    json_container="\033[37m",
    author_user="\033[36m",
    author_assistant="\033[35m",
    author_other="\033[37m",
    separator="\033[90m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    row="\033[38;5;252m",
    selected="\033[1;38;5;16;48;5;45m",
    divider="\033[2;38;5;31m",
    search_hit="\033[38;5;16;48;5;215m",
    status="\033[38;5;110m",
    status_error="\033[38;5;203m",
    status_success="\033[38;5;84m",
    header="\033[1;38;5;45m",
    meta_label="\033[38;5;73m",
    tree_marker="\033[38;5;39m",
    json_key="\033[38;5;153m",
    json_string="\033[38;5;84m",
    json_number="\033[38;5;215m",
    json_boolean="\033[38;5;177m",
    json_null="\033[2;38;5;110m",
    json_container="\033[38;5;117m",
    author_user="\033[38;5;45m",
    author_assistant="\033[38;5;177m",
    author_other="\033[38;5;252m",
    separator="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    row="",
    selected="\033[7m",
    divider="",
    search_hit="\033[4m",
    status="",
    status_error="",
    status_success="",
    header="",
    meta_label="",
    tree_marker="",
    json_key="",
    json_string="",
    json_number="",
    json_boolean="",
    json_null="",
    json_container="",
    author_user="",
    author_assistant="",
    author_other="",
    separator="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
