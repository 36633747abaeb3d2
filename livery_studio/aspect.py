"""
Aspect ratio policy for the Gemini image endpoint.

The service is the final arbiter: ratios outside the allow-list are passed
through untouched rather than rejected.
"""

from __future__ import annotations

SUPPORTED_ASPECT_RATIOS = ("1:1", "2:3", "3:2", "3:4", "4:3", "9:16", "16:9", "21:9")

PORTRAIT = "9:16"
LANDSCAPE_4_3 = "4:3"

# Merch forms pick the canvas for the user: the collection catalog is a tall
# sheet, every single-product mockup is a 4:3 product shot.
_MERCH_DEFAULT_RATIOS = {
    "COLLECTION": PORTRAIT,
}


# UI ratio → ratio the image endpoint expects (identity for every allow-listed value)
_SERVICE_RATIOS = {ratio: ratio for ratio in SUPPORTED_ASPECT_RATIOS}


def resolve_aspect_ratio(ratio: str) -> str:
    """Map a requested ratio to the service's value; unknown ratios pass through."""
    return _SERVICE_RATIOS.get(ratio, ratio)


def is_supported(ratio: str) -> bool:
    return ratio in SUPPORTED_ASPECT_RATIOS


def default_merch_aspect_ratio(item_type: str) -> str:
    return _MERCH_DEFAULT_RATIOS.get(item_type, LANDSCAPE_4_3)
