"""Error taxonomy shared by the analyzer, orchestrator and CLI."""

from __future__ import annotations

from typing import List, Optional


class StudioError(Exception):
    code = "STUDIO_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)


class ConfigurationError(StudioError):
    code = "CONFIGURATION_ERROR"


class AdmissionError(StudioError):
    """A brief is missing fields its request family cannot work without."""

    code = "ADMISSION_REJECTED"

    def __init__(self, missing: List[str], message: Optional[str] = None) -> None:
        self.missing = list(missing)
        super().__init__(message or f"missing required fields: {', '.join(self.missing)}")


class AnalysisFailed(StudioError):
    code = "ANALYSIS_FAILED"


class GenerationFailed(StudioError):
    code = "GENERATION_FAILED"


class NoImageInResponse(GenerationFailed):
    code = "NO_IMAGE_IN_RESPONSE"


class ImagePayloadError(ValueError):
    """Raised when an image field is not a decodable data URI."""
