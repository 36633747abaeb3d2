"""
Config — runtime settings for the Gemini-backed generation core.

Values come from the environment (and an optional .env file):

  GEMINI_API_KEY                    required
  LIVERY_STUDIO_GENERATION_MODEL    default gemini-3-pro-image-preview
  LIVERY_STUDIO_ANALYSIS_MODEL      default gemini-3-flash-preview
  LIVERY_STUDIO_IMAGE_SIZE          default 1K
  LIVERY_STUDIO_TIMEOUT_S           default 120
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from google import genai
from google.genai import types

from .errors import ConfigurationError

DEFAULT_GENERATION_MODEL = "gemini-3-pro-image-preview"
DEFAULT_ANALYSIS_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_SIZE = "1K"
DEFAULT_TIMEOUT_S = 120.0


@dataclass(frozen=True)
class StudioConfig:
    api_key: str = ""
    generation_model: str = DEFAULT_GENERATION_MODEL
    analysis_model: str = DEFAULT_ANALYSIS_MODEL
    image_size: str = DEFAULT_IMAGE_SIZE
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """Build a config from os.environ after loading .env."""
        load_dotenv()

        api_key = os.environ.get("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not set in environment / .env")

        timeout_raw = os.environ.get("LIVERY_STUDIO_TIMEOUT_S", "")
        try:
            timeout_s = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_S
        except ValueError:
            raise ConfigurationError(f"LIVERY_STUDIO_TIMEOUT_S is not a number: {timeout_raw!r}")

        return cls(
            api_key=api_key,
            generation_model=os.environ.get("LIVERY_STUDIO_GENERATION_MODEL") or DEFAULT_GENERATION_MODEL,
            analysis_model=os.environ.get("LIVERY_STUDIO_ANALYSIS_MODEL") or DEFAULT_ANALYSIS_MODEL,
            image_size=os.environ.get("LIVERY_STUDIO_IMAGE_SIZE") or DEFAULT_IMAGE_SIZE,
            timeout_s=timeout_s,
        )


def build_client(config: StudioConfig) -> genai.Client:
    """Create a Gemini client whose HTTP calls give up after config.timeout_s."""
    if not config.api_key:
        raise ConfigurationError("StudioConfig.api_key is empty — cannot build a Gemini client")
    return genai.Client(
        api_key=config.api_key,
        http_options=types.HttpOptions(timeout=int(config.timeout_s * 1000)),
    )
