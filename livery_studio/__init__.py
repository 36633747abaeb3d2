"""
Livery Studio — compiles motorsport creative briefs into Gemini image
generation calls.

  compile_request(request)            → CompiledPrompt (pure, no I/O)
  GenerationOrchestrator.generate()   → GenerationResult | None
  StyleDnaExtractor.extract()         → style description text
"""

from .compiler import compile_request
from .config import StudioConfig
from .models import (
    ArtRequest,
    AssetRecord,
    Attachment,
    CompiledPrompt,
    GenerationResult,
    MerchRequest,
    SceneRequest,
)

__all__ = [
    "ArtRequest",
    "AssetRecord",
    "Attachment",
    "CompiledPrompt",
    "GenerationResult",
    "MerchRequest",
    "SceneRequest",
    "StudioConfig",
    "compile_request",
]
