"""
Compiler — DesignRequest → CompiledPrompt.

Pure: no network, no clock, no mutable state. The same request always
compiles to the same prompt text and the same ordered attachment list.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from .art_prompts import compile_art_prompt
from .merch_prompts import compile_merch_prompt
from .models import (
    ArtRequest,
    Attachment,
    AttachmentRole,
    CompiledPrompt,
    MerchRequest,
    SceneRequest,
)
from .scene_prompts import compile_scene_prompt

# Attachment order per request family: subject images, then references, logos last.
SCENE_ATTACHMENTS: Sequence[Tuple[str, AttachmentRole]] = (
    ("primary_car_image", AttachmentRole.PRIMARY_CAR),
    ("secondary_car_image", AttachmentRole.SECONDARY_CAR),
    ("pattern_image", AttachmentRole.PATTERN_REFERENCE),
    ("sponsor_logo", AttachmentRole.SPONSOR_LOGO),
    ("team_logo", AttachmentRole.TEAM_LOGO),
)

ART_ATTACHMENTS: Sequence[Tuple[str, AttachmentRole]] = (
    ("primary_car_image", AttachmentRole.PRIMARY_CAR),
    ("secondary_car_image", AttachmentRole.SECONDARY_CAR),
    ("style_reference_image", AttachmentRole.STYLE_REFERENCE),
    ("event_logo", AttachmentRole.EVENT_LOGO),
    ("sponsor_logo", AttachmentRole.SPONSOR_LOGO),
    ("team_logo", AttachmentRole.TEAM_LOGO),
)

MERCH_ATTACHMENTS: Sequence[Tuple[str, AttachmentRole]] = (
    ("car_image", AttachmentRole.PRIMARY_CAR),
    ("pattern_image", AttachmentRole.PATTERN_REFERENCE),
    ("sponsor_logo", AttachmentRole.SPONSOR_LOGO),
    ("team_logo", AttachmentRole.TEAM_LOGO),
)

_COMPILERS: Dict[Type, Tuple[Callable, Sequence[Tuple[str, AttachmentRole]]]] = {
    SceneRequest: (compile_scene_prompt, SCENE_ATTACHMENTS),
    ArtRequest: (compile_art_prompt, ART_ATTACHMENTS),
    MerchRequest: (compile_merch_prompt, MERCH_ATTACHMENTS),
}


def collect_attachments(request, layout: Sequence[Tuple[str, AttachmentRole]]) -> Tuple[Attachment, ...]:
    """Present images in layout order. Absent images are skipped, never padded."""
    attachments: List[Attachment] = []
    for field_name, role in layout:
        data: Optional[str] = getattr(request, field_name, None)
        if data:
            attachments.append(Attachment(role=role, data=data))
    return tuple(attachments)


def compile_request(request) -> CompiledPrompt:
    """Compile a Scene/Art/Merch request into prompt text plus ordered attachments."""
    try:
        compile_text, layout = _COMPILERS[type(request)]
    except KeyError:
        raise TypeError(f"not a design request: {type(request).__name__}") from None
    return CompiledPrompt(
        text=compile_text(request),
        attachments=collect_attachments(request, layout),
    )
