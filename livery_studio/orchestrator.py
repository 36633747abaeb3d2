"""
Orchestrator — one generation round trip per call.

  request ─► compile_request ─► [text part, inline PNG parts…] ─► Gemini
          ◄─ GenerationResult(image_url, prompt_text) | None | GenerationFailed

Each call is independent: no locks, caches or queues live here, so calls can
run concurrently (see generate_many).
"""

from __future__ import annotations

import base64
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Hashable, List, Optional, Union

from google.genai import types

from .aspect import resolve_aspect_ratio
from .compiler import compile_request
from .config import StudioConfig, build_client
from .errors import GenerationFailed, NoImageInResponse, StudioError
from .images import TRANSPORT_MIME, to_data_uri, transport_bytes
from .models import CompiledPrompt, GenerationResult

logger = logging.getLogger(__name__)


def build_contents(compiled: CompiledPrompt) -> List[types.Part]:
    """Prompt text first, then one inline PNG part per attachment in compiler order."""
    parts = [types.Part.from_text(text=compiled.text)]
    for attachment in compiled.attachments:
        parts.append(
            types.Part.from_bytes(data=transport_bytes(attachment.data), mime_type=TRANSPORT_MIME)
        )
    return parts


def extract_image_url(response) -> Optional[str]:
    """First inline image of candidates[0] as a data URI, or None when there is none."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = candidates[0].content
    for part in (content.parts if content else None) or []:
        if hasattr(part, "inline_data") and part.inline_data and part.inline_data.data:
            data = part.inline_data.data
            # data may be bytes or base64 string
            if isinstance(data, str):
                data = base64.b64decode(data)
            return to_data_uri(data, part.inline_data.mime_type or TRANSPORT_MIME)
    return None


class GenerationOrchestrator:
    """Compiles a brief, calls the Gemini image model and extracts the rendered asset."""

    def __init__(self, config: StudioConfig, client=None) -> None:
        self.config = config
        self._client = client if client is not None else build_client(config)

    def generate(self, request, raise_on_empty: bool = False) -> Optional[GenerationResult]:
        """
        Run one generation for a Scene/Art/Merch request.

        Returns None when Gemini answers without an image, unless
        raise_on_empty is set, in which case NoImageInResponse is raised.
        Transport failures always raise GenerationFailed.
        """
        aspect_ratio = resolve_aspect_ratio(request.aspect_ratio)
        compiled = compile_request(request)
        return self._dispatch(compiled, aspect_ratio, raise_on_empty)

    def generate_compiled(
        self,
        compiled: CompiledPrompt,
        aspect_ratio: str,
        raise_on_empty: bool = False,
    ) -> Optional[GenerationResult]:
        """Same as generate() for a prompt the caller already compiled (and possibly edited)."""
        return self._dispatch(compiled, resolve_aspect_ratio(aspect_ratio), raise_on_empty)

    def generate_many(
        self,
        requests: Dict[Hashable, object],
        max_workers: int = 4,
    ) -> Dict[Hashable, Union[GenerationResult, None, StudioError]]:
        """
        Generate several briefs concurrently, keyed by the caller's identifiers.

        A failed brief maps to its StudioError; the others still complete.
        """
        results: Dict[Hashable, Union[GenerationResult, None, StudioError]] = {}
        if not requests:
            return results

        with ThreadPoolExecutor(max_workers=min(len(requests), max_workers)) as executor:
            futures = {
                executor.submit(self.generate, request): key
                for key, request in requests.items()
            }
            for future in as_completed(futures):
                key = futures[future]
                try:
                    results[key] = future.result()
                except StudioError as exc:
                    results[key] = exc
        return results

    # ── internals ─────────────────────────────────────────────────────────────

    def _dispatch(
        self,
        compiled: CompiledPrompt,
        aspect_ratio: str,
        raise_on_empty: bool,
    ) -> Optional[GenerationResult]:
        contents = build_contents(compiled)
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(
                aspect_ratio=aspect_ratio,
                image_size=self.config.image_size,
            ),
        )
        logger.debug(
            f"Dispatching {self.config.generation_model} "
            f"({len(compiled.attachments)} attachment(s), {aspect_ratio}, {self.config.image_size})"
        )

        try:
            response = self._client.models.generate_content(
                model=self.config.generation_model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini generation failed ({self.config.generation_model}): {e}")
            raise GenerationFailed(str(e)) from e

        image_url = extract_image_url(response)
        if image_url is None:
            logger.warning(f"No image returned by {self.config.generation_model}")
            if raise_on_empty:
                raise NoImageInResponse(f"{self.config.generation_model} returned no inline image")
            return None

        return GenerationResult(image_url=image_url, prompt_text=compiled.text)
