"""Icon resolution with theme search, memoization and a synthesized fallback.

``IconResolver.resolve`` never raises for a missing icon.  Lookup order
for a name (first existing file wins):

  1. the identifier itself, when it is an absolute path to a file
  2. for each base directory, for each theme:
       ``<size>x<size>/apps`` for every size, largest first
       ``scalable/apps``
       ``<size>x<size>/<secondary>`` for actions, devices, mimetypes,
       places and status
     then the base directory itself (``/usr/share/pixmaps/foo.png``)
  3. the category badge from :mod:`central_flow.icons.categories`

In every directory the extensions are tried in ``_EXTENSIONS`` order.
Results, fallbacks included, are cached per exact request shape for the
lifetime of the resolver.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from central_flow.config import DEFAULT_ICON_SIZES, DEFAULT_ICON_THEMES, LauncherConfig
from central_flow.icons.aliases import COMMON_APPS, normalize_identifier
from central_flow.icons.categories import (
    AppCategory,
    category_color,
    fallback_data_uri,
    infer_category,
)

logger = logging.getLogger(__name__)

_EXTENSIONS: tuple[str, ...] = (".png", ".svg", ".xpm", ".jpg", ".jpeg")
_SECONDARY_CATEGORIES: tuple[str, ...] = ("actions", "devices", "mimetypes", "places", "status")

_MIME_TYPES: dict[str, str] = {
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".xpm": "image/x-xpixmap",
    ".gif": "image/gif",
}
_DEFAULT_MIME_TYPE = "image/png"


class IconSearchOptions(BaseModel):
    """Per-request overrides.  Part of the cache key, hence frozen."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sizes: tuple[int, ...] | None = None
    themes: tuple[str, ...] | None = None
    category: AppCategory | None = None
    glyph: str | None = None
    color: str | None = None

    @field_validator("sizes")
    @classmethod
    def validate_sizes(cls, values: tuple[int, ...] | None) -> tuple[int, ...] | None:
        if values is not None and any(size <= 0 for size in values):
            raise ValueError("icon sizes must be positive")
        return values


_NO_OPTIONS = IconSearchOptions()


def mime_type_for(path: str | Path) -> str:
    return _MIME_TYPES.get(Path(path).suffix.lower(), _DEFAULT_MIME_TYPE)


def encode_data_uri(path: str | Path) -> str:
    """Read ``path`` and return ``data:<mime>;base64,<payload>``."""
    payload = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:{mime_type_for(path)};base64,{payload}"


def _search_directory(directory: Path, icon_name: str) -> Path | None:
    if not directory.is_dir():
        return None
    for ext in _EXTENSIONS:
        candidate = directory / f"{icon_name}{ext}"
        if candidate.is_file():
            return candidate
    return None


class IconResolver:
    """Resolves application identifiers to data URIs.

    Parameters
    ----------
    base_directories:
        Icon roots searched in order.  Missing directories are skipped.
    themes:
        Theme directory names searched in order under every root.
    sizes:
        Pixel sizes, largest preferred first.
    """

    def __init__(
        self,
        base_directories: Iterable[str | Path],
        *,
        themes: Sequence[str] = DEFAULT_ICON_THEMES,
        sizes: Sequence[int] = DEFAULT_ICON_SIZES,
    ) -> None:
        self.base_directories = [Path(d) for d in base_directories]
        self.themes = tuple(themes)
        self.sizes = tuple(sizes)
        self._cache: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: LauncherConfig) -> IconResolver:
        return cls(
            config.icon_base_directories,
            themes=config.icon_themes,
            sizes=config.icon_sizes,
        )

    # ── lookup ────────────────────────────────────────────────────

    def find_icon_path(
        self, icon_name: str, options: IconSearchOptions | None = None
    ) -> Path | None:
        """Walk the theme hierarchy for ``icon_name``.  ``None`` if absent.

        Filesystem errors during the walk (a name too long for the
        platform, a permission problem) count as not found.
        """
        try:
            return self._lookup(icon_name, options or _NO_OPTIONS)
        except OSError as exc:
            logger.warning("Icon lookup for %r failed: %s", icon_name, exc)
            return None

    def _lookup(self, icon_name: str, opts: IconSearchOptions) -> Path | None:
        direct = Path(icon_name)
        if direct.is_absolute():
            return direct if direct.is_file() else None
        # Names with separators are not theme lookups.
        if "/" in icon_name or "\\" in icon_name:
            return None

        sizes = opts.sizes or self.sizes
        themes = opts.themes or self.themes

        for base_dir in self.base_directories:
            if not base_dir.is_dir():
                continue
            for theme in themes:
                theme_dir = base_dir / theme
                if not theme_dir.is_dir():
                    continue
                found = self._search_theme(theme_dir, icon_name, sizes)
                if found is not None:
                    return found
            found = _search_directory(base_dir, icon_name)
            if found is not None:
                return found
        return None

    @staticmethod
    def _search_theme(
        theme_dir: Path, icon_name: str, sizes: Sequence[int]
    ) -> Path | None:
        for size in sizes:
            found = _search_directory(theme_dir / f"{size}x{size}" / "apps", icon_name)
            if found is not None:
                return found

        found = _search_directory(theme_dir / "scalable" / "apps", icon_name)
        if found is not None:
            return found

        for category in _SECONDARY_CATEGORIES:
            for size in sizes:
                found = _search_directory(theme_dir / f"{size}x{size}" / category, icon_name)
                if found is not None:
                    return found
        return None

    # ── public API ────────────────────────────────────────────────

    def resolve(self, identifier: str, options: IconSearchOptions | None = None) -> str:
        """Return a data URI for ``identifier``; never raises for missing icons."""
        opts = options or _NO_OPTIONS
        if not identifier:
            return fallback_data_uri(
                opts.category or AppCategory.APPLICATION,
                glyph=opts.glyph,
                color=opts.color,
            )

        cache_key = f"{identifier}:{opts.model_dump_json()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        data_uri: str | None = None
        icon_path = self.find_icon_path(identifier, opts)
        if icon_path is not None:
            try:
                data_uri = encode_data_uri(icon_path)
            except OSError:
                logger.exception("Failed to read icon %s", icon_path)

        if data_uri is None:
            data_uri = fallback_data_uri(
                opts.category or infer_category(identifier),
                glyph=opts.glyph,
                color=opts.color,
            )

        self._cache[cache_key] = data_uri
        return data_uri

    def resolve_app(
        self,
        identifier: str,
        category: AppCategory | None = None,
        glyph: str | None = None,
    ) -> str:
        """Normalize a raw app identifier, then resolve with its category colour."""
        detected = category or infer_category(identifier)
        return self.resolve(
            normalize_identifier(identifier),
            IconSearchOptions(
                category=detected,
                glyph=glyph,
                color=category_color(detected),
            ),
        )

    def resolve_window(self, wm_class: str, app_name: str | None = None) -> str:
        return self.resolve_app(wm_class or app_name or "")

    def preload(self, identifiers: Iterable[str] = COMMON_APPS) -> int:
        """Warm the cache for common applications.  Returns how many were resolved."""
        count = 0
        for identifier in identifiers:
            self.resolve_app(identifier)
            count += 1
        return count

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
