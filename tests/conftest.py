"""Shared pytest fixtures for livery_studio tests."""

from __future__ import annotations

import io
from typing import Callable, Dict
from unittest.mock import MagicMock

import pytest
from google.genai import types
from PIL import Image

from livery_studio.config import StudioConfig
from livery_studio.images import to_data_uri

# ============================================================================
# Image Fixtures
# ============================================================================


def _encode(color, fmt: str = "PNG", mode: str = "RGB", size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """Small red PNG."""
    return _encode((255, 0, 0))


@pytest.fixture
def jpeg_uri() -> str:
    """Small JPEG data URI — exercises PNG normalization."""
    return to_data_uri(_encode((0, 0, 255), fmt="JPEG"), "image/jpeg")


@pytest.fixture
def images() -> Dict[str, str]:
    """One distinct PNG data URI per image role."""
    palette = {
        "car": (200, 0, 0),
        "car2": (0, 200, 0),
        "pattern": (0, 0, 200),
        "style": (200, 200, 0),
        "event": (0, 200, 200),
        "sponsor": (200, 0, 200),
        "team": (90, 90, 90),
    }
    return {name: to_data_uri(_encode(color)) for name, color in palette.items()}


# ============================================================================
# Gemini Fixtures
# ============================================================================


@pytest.fixture
def config() -> StudioConfig:
    return StudioConfig(api_key="test-key")


@pytest.fixture
def make_image_response(png_bytes) -> Callable[..., types.GenerateContentResponse]:
    """Build a response whose first candidate carries text then an inline image."""

    def _make(data: bytes = None, mime_type: str = "image/png") -> types.GenerateContentResponse:
        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(
                        role="model",
                        parts=[
                            types.Part(text="Here is your render."),
                            types.Part(inline_data=types.Blob(data=data or png_bytes, mime_type=mime_type)),
                        ],
                    )
                )
            ]
        )

    return _make


@pytest.fixture
def make_text_response() -> Callable[[str], types.GenerateContentResponse]:
    """Build a text-only response (no inline image)."""

    def _make(text: str) -> types.GenerateContentResponse:
        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(role="model", parts=[types.Part(text=text)])
                )
            ]
        )

    return _make


@pytest.fixture
def fake_client() -> MagicMock:
    """Stand-in for genai.Client; tests set models.generate_content behaviour."""
    return MagicMock()
