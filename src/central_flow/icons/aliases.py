"""Map window-manager classes and desktop ids to icon theme names."""

from __future__ import annotations

import re

# Keys are matched exactly, so both the WM_CLASS capitalisation and the
# lowercase desktop id appear where they differ.
_ALIASES: dict[str, str] = {
    # browsers
    "Google-chrome": "google-chrome",
    "google-chrome": "google-chrome",
    "Chrome": "google-chrome",
    "Firefox": "firefox",
    "firefox": "firefox",
    "Chromium": "chromium",
    "chromium": "chromium",
    "Microsoft-edge": "microsoft-edge",
    "Brave-browser": "brave-browser",
    "brave": "brave-browser",
    # editors
    "Code": "visual-studio-code",
    "code": "visual-studio-code",
    "code-oss": "visual-studio-code",
    "Atom": "atom",
    "atom": "atom",
    "Sublime_text": "sublime-text",
    "sublime_text": "sublime-text",
    "Vim": "vim",
    "vim": "vim",
    "Emacs": "emacs",
    "emacs": "emacs",
    "Gedit": "org.gnome.gedit",
    "gedit": "org.gnome.gedit",
    # file managers
    "Nautilus": "org.gnome.Nautilus",
    "nautilus": "org.gnome.Nautilus",
    "org.gnome.Nautilus": "org.gnome.Nautilus",
    "Thunar": "thunar",
    "thunar": "thunar",
    "Dolphin": "system-file-manager",
    "dolphin": "system-file-manager",
    "Nemo": "nemo",
    "nemo": "nemo",
    # terminals
    "Gnome-terminal": "org.gnome.Terminal",
    "gnome-terminal": "org.gnome.Terminal",
    "org.gnome.Terminal": "org.gnome.Terminal",
    "terminal": "org.gnome.Terminal",
    "Konsole": "konsole",
    "konsole": "konsole",
    "Xterm": "xterm",
    "xterm": "xterm",
    "Alacritty": "Alacritty",
    "alacritty": "Alacritty",
    "Kitty": "kitty",
    "kitty": "kitty",
    # chat
    "Slack": "slack",
    "slack": "slack",
    "Discord": "discord",
    "discord": "discord",
    "TelegramDesktop": "telegram",
    "Telegram": "telegram",
    "telegram": "telegram",
    "Teams": "teams",
    "teams": "teams",
    "WhatsApp": "whatsapp",
    "whatsapp": "whatsapp",
    "Skype": "skype",
    "skype": "skype",
    # media
    "Spotify": "spotify",
    "spotify": "spotify",
    "Vlc": "vlc",
    "vlc": "vlc",
    "Rhythmbox": "rhythmbox",
    "rhythmbox": "rhythmbox",
    "Audacity": "audacity",
    "audacity": "audacity",
    "Mpv": "mpv",
    "mpv": "mpv",
    # design
    "Gimp": "gimp",
    "gimp": "gimp",
    "Inkscape": "inkscape",
    "inkscape": "inkscape",
    "Blender": "blender",
    "blender": "blender",
    "Krita": "krita",
    "krita": "krita",
    "Figma-linux": "figma-linux",
    # development
    "Postman": "postman",
    "postman": "postman",
    "Insomnia": "insomnia",
    "insomnia": "insomnia",
    "DBeaver": "dbeaver",
    "dbeaver": "dbeaver",
    "Docker": "docker",
    "docker": "docker",
    # system
    "Gnome-system-monitor": "org.gnome.SystemMonitor",
    "gnome-system-monitor": "org.gnome.SystemMonitor",
    "Gnome-calculator": "org.gnome.Calculator",
    "gnome-calculator": "org.gnome.Calculator",
    # office
    "libreoffice-writer": "libreoffice-writer",
    "libreoffice-calc": "libreoffice-calc",
    "libreoffice-impress": "libreoffice-impress",
    "Thunderbird": "thunderbird",
    "thunderbird": "thunderbird",
}

_CLEANUP_PATTERNS = (
    re.compile(r"^org\.gnome\."),
    re.compile(r"^com\."),
    re.compile(r"^io\."),
    re.compile(r"-desktop$"),
    re.compile(r"-browser$"),
)

COMMON_APPS: tuple[str, ...] = (
    "firefox",
    "google-chrome",
    "chromium",
    "code",
    "nautilus",
    "gnome-terminal",
    "spotify",
    "discord",
    "slack",
    "vlc",
)


def normalize_identifier(identifier: str) -> str:
    """Return the icon lookup name for a raw WM class or desktop id.

    Exact alias hits win.  Otherwise the name is lowercased and common
    reverse-domain prefixes and ``-desktop``/``-browser`` suffixes are
    stripped; if that leaves nothing, the lowercased input is returned.
    """
    mapped = _ALIASES.get(identifier)
    if mapped:
        return mapped

    lowered = identifier.lower()
    cleaned = lowered
    for pattern in _CLEANUP_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned or lowered
