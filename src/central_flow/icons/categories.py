"""Application categories and the synthesized fallback badge.

When no icon file exists the resolver draws a 48x48 rounded tile whose
colour and glyph come from the application's category.  The category
is inferred from the identifier by substring match against
``_CATEGORY_KEYWORDS``; the table is ordered and the first hit wins.
"""

from __future__ import annotations

import base64
from enum import Enum
from html import escape


class AppCategory(str, Enum):
    BROWSER = "browser"
    TERMINAL = "terminal"
    EDITOR = "editor"
    FILE_MANAGER = "file-manager"
    MEDIA = "media"
    OFFICE = "office"
    CHAT = "chat"
    DEVELOPMENT = "development"
    SYSTEM = "system"
    APPLICATION = "application"


_CATEGORY_KEYWORDS: tuple[tuple[AppCategory, tuple[str, ...]], ...] = (
    (AppCategory.BROWSER, ("chrome", "firefox", "browser", "chromium", "edge", "brave", "safari")),
    (AppCategory.TERMINAL, ("terminal", "konsole", "xterm", "alacritty", "kitty", "gnome-terminal")),
    (AppCategory.EDITOR, ("code", "vim", "emacs", "atom", "sublime", "gedit", "nano")),
    (AppCategory.FILE_MANAGER, ("nautilus", "thunar", "dolphin", "nemo", "files", "pcmanfm")),
    (AppCategory.MEDIA, ("spotify", "vlc", "rhythmbox", "audacity", "mpv", "totem", "banshee")),
    (AppCategory.OFFICE, ("libreoffice", "writer", "calc", "impress", "office", "onlyoffice")),
    (AppCategory.CHAT, ("slack", "discord", "telegram", "whatsapp", "teams", "skype", "zoom")),
    (AppCategory.DEVELOPMENT, ("postman", "insomnia", "dbeaver", "docker", "git", "github")),
    (AppCategory.SYSTEM, ("monitor", "calculator", "settings", "control", "system")),
)

_CATEGORY_COLORS: dict[AppCategory, str] = {
    AppCategory.BROWSER: "#4285F4",
    AppCategory.TERMINAL: "#2D3748",
    AppCategory.EDITOR: "#3182CE",
    AppCategory.FILE_MANAGER: "#38A169",
    AppCategory.MEDIA: "#E53E3E",
    AppCategory.OFFICE: "#D69E2E",
    AppCategory.CHAT: "#805AD5",
    AppCategory.DEVELOPMENT: "#718096",
    AppCategory.SYSTEM: "#4A5568",
    AppCategory.APPLICATION: "#4A5568",
}

_CATEGORY_GLYPHS: dict[AppCategory, str] = {
    AppCategory.BROWSER: "\N{GLOBE WITH MERIDIANS}",
    AppCategory.TERMINAL: "\N{KEYBOARD}\N{VARIATION SELECTOR-16}",
    AppCategory.EDITOR: "\N{MEMO}",
    AppCategory.FILE_MANAGER: "\N{FILE FOLDER}",
    AppCategory.MEDIA: "\N{MUSICAL NOTE}",
    AppCategory.OFFICE: "\N{PAGE FACING UP}",
    AppCategory.CHAT: "\N{SPEECH BALLOON}",
    AppCategory.DEVELOPMENT: "\N{GEAR}\N{VARIATION SELECTOR-16}",
    AppCategory.SYSTEM: "\N{DESKTOP COMPUTER}\N{VARIATION SELECTOR-16}",
    AppCategory.APPLICATION: "\N{MOBILE PHONE}",
}

_TILE_SIZE = 48

_SVG_TEMPLATE = (
    '<svg width="{size}" height="{size}" viewBox="0 0 {size} {size}" fill="none" '
    'xmlns="http://www.w3.org/2000/svg">'
    '<rect width="{size}" height="{size}" rx="8" fill="{color}"/>'
    '<text x="24" y="32" font-family="system-ui, -apple-system" font-size="20" '
    'fill="white" text-anchor="middle">{glyph}</text>'
    "</svg>"
)


def infer_category(identifier: str) -> AppCategory:
    """Case-insensitive keyword match; ``APPLICATION`` when nothing matches."""
    name = identifier.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return AppCategory.APPLICATION


def category_color(category: AppCategory) -> str:
    return _CATEGORY_COLORS[category]


def category_glyph(category: AppCategory) -> str:
    return _CATEGORY_GLYPHS[category]


def render_fallback_svg(
    category: AppCategory = AppCategory.APPLICATION,
    *,
    glyph: str | None = None,
    color: str | None = None,
) -> str:
    return _SVG_TEMPLATE.format(
        size=_TILE_SIZE,
        color=escape(color or category_color(category), quote=True),
        glyph=escape(glyph or category_glyph(category), quote=False),
    )


def fallback_data_uri(
    category: AppCategory = AppCategory.APPLICATION,
    *,
    glyph: str | None = None,
    color: str | None = None,
) -> str:
    svg = render_fallback_svg(category, glyph=glyph, color=color)
    payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{payload}"
