"""Icon subsystem: theme lookup, identifier normalization, fallback badges."""

from central_flow.icons.aliases import COMMON_APPS, normalize_identifier
from central_flow.icons.categories import (
    AppCategory,
    category_color,
    category_glyph,
    fallback_data_uri,
    infer_category,
    render_fallback_svg,
)
from central_flow.icons.resolver import (
    IconResolver,
    IconSearchOptions,
    encode_data_uri,
    mime_type_for,
)

__all__ = [
    "COMMON_APPS",
    "AppCategory",
    "IconResolver",
    "IconSearchOptions",
    "category_color",
    "category_glyph",
    "encode_data_uri",
    "fallback_data_uri",
    "infer_category",
    "mime_type_for",
    "normalize_identifier",
    "render_fallback_svg",
]
