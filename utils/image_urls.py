"""Canonicalization of part image URLs returned by the builds backend."""

from __future__ import annotations

from typing import Any

from utils.constants import IMAGE_TRACKING_SUFFIX


def canonicalize_image_url(url: Any) -> str:
    """Return a render-ready image URL.

    The backend serves images as protocol-relative URLs (``//cdn/x.jpg``),
    with slashes escaped by JSON-in-JSON encoding (``https:\\/\\/cdn``), or
    with a ``&width=1`` tracking suffix. All three are repaired here; empty
    or non-string input yields ``""``.
    """
    if not url or not isinstance(url, str):
        return ""
    url = url.replace(IMAGE_TRACKING_SUFFIX, "")
    url = url.replace("\\/", "/")
    if url.startswith("//"):
        url = f"https:{url}"
    return url
