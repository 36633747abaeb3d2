"""
Style DNA extraction — one Gemini vision call that describes an image's
artistic technique (medium, lighting, composition, brushwork, mood) without
naming the car in it. The text pre-fills the editable DNA field of a
STYLE_TRANSFER brief.
"""

from __future__ import annotations

import logging
from typing import Optional

from google.genai import types

from .config import StudioConfig, build_client
from .errors import AnalysisFailed
from .images import TRANSPORT_MIME, transport_bytes

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Chinese",
}

STYLE_DNA_INSTRUCTION = (
    "Analyze the artistic DNA of this motorsport poster or art piece. "
    "Describe its visual technique (e.g. flat vector, oil painting, cinematic CGI, vintage illustration), "
    "lighting style, composition logic, brushwork, and overall atmospheric mood. "
    "Focus only on the STYLE, not the specific car model. "
    "Keep it concise (under 100 words) so it can be used as a prompt. "
    "IMPORTANT: Provide the response in {language}."
)


def analysis_instruction(language: str) -> str:
    return STYLE_DNA_INSTRUCTION.format(language=LANGUAGE_NAMES.get(language, language))


class StyleDnaExtractor:
    """Extracts a short style description from a single reference image."""

    def __init__(self, config: StudioConfig, client=None) -> None:
        self.config = config
        self._client = client if client is not None else build_client(config)

    def extract(self, image: str, language: str = "en") -> str:
        """
        Args:
            image:     data URI of the style reference
            language:  "en" / "zh", or any language name to answer in

        Returns:
            The style description, or "" when the model returns no text.

        Raises:
            AnalysisFailed: the round trip to Gemini failed.
        """
        contents = [
            types.Part.from_text(text=analysis_instruction(language)),
            types.Part.from_bytes(data=transport_bytes(image), mime_type=TRANSPORT_MIME),
        ]
        try:
            response = self._client.models.generate_content(
                model=self.config.analysis_model,
                contents=contents,
            )
        except Exception as e:
            logger.error(f"Style DNA analysis failed ({self.config.analysis_model}): {e}")
            raise AnalysisFailed(str(e)) from e

        text: Optional[str] = getattr(response, "text", None)
        if not text:
            logger.warning("Style DNA analysis returned no text")
            return ""
        logger.info(f"Style DNA extracted ({len(text)} chars)")
        return text.strip()
