"""Theme metadata extraction and merging.

A theme's display record is assembled from three layers, each overriding
the previous one field by field:

=====  ====================  ==============================================
Tier   Source                Fields
=====  ====================  ==============================================
1      defaults              name=<id>, author="Unknown", description=""
2      ``<id>.json`` sidecar any schema field holding a string
3      CSS header comment    @name, @author, @description, @version
=====  ====================  ==============================================

Header tags are display-only; they are never written back to the sidecar.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Mapping

from loginthemes.themes.constants import DEFAULT_AUTHOR, DEFAULT_DESCRIPTION
from loginthemes.themes.models import ThemeRecord

# Sidecar key -> ThemeRecord attribute.
METADATA_FIELDS: dict[str, str] = {
    "name": "name",
    "author": "author",
    "description": "description",
    "version": "version",
    "importedAt": "imported_at",
    "updatedAt": "updated_at",
}

DISPLAY_FIELDS: tuple[str, ...] = ("name", "author", "description", "version")

_COMMENT_BLOCK_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_HEADER_TAG_RES: dict[str, re.Pattern[str]] = {
    tag: re.compile(rf"@{tag}\s+(.+)", re.IGNORECASE) for tag in DISPLAY_FIELDS
}

Layer = Mapping[str, "str | None"]


def default_layer(theme_id: str) -> dict[str, str | None]:
    return {
        "name": theme_id,
        "author": DEFAULT_AUTHOR,
        "description": DEFAULT_DESCRIPTION,
    }


def sidecar_layer(data: Mapping[str, object]) -> dict[str, str | None]:
    """Keep only schema fields holding strings."""
    return {
        key: value
        for key, value in data.items()
        if key in METADATA_FIELDS and isinstance(value, str)
    }


def parse_css_header(css: str) -> dict[str, str | None]:
    """Extract @-tags from the first ``/* ... */`` block of a stylesheet."""
    match = _COMMENT_BLOCK_RE.search(css)
    if not match:
        return {}
    header = match.group(0)
    tags: dict[str, str | None] = {}
    for tag, pattern in _HEADER_TAG_RES.items():
        found = pattern.search(header)
        if not found:
            continue
        value = found.group(1).strip()
        if value.endswith("*/"):
            value = value[:-2].rstrip()
        if value:
            tags[tag] = value
    return tags


def merge_metadata(*layers: Layer) -> dict[str, str | None]:
    """Merge layers in order; later non-None values win."""
    merged: dict[str, str | None] = {}
    for layer in layers:
        for key, value in layer.items():
            if key in METADATA_FIELDS and value is not None:
                merged[key] = value
    return merged


def build_record(theme_id: str, *layers: Layer) -> ThemeRecord:
    merged = merge_metadata(default_layer(theme_id), *layers)
    kwargs = {attr: merged.get(key) for key, attr in METADATA_FIELDS.items()}
    return ThemeRecord(theme_id=theme_id, is_builtin=False, **kwargs)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
