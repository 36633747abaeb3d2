"""Caller-side admission control: reject briefs missing fields they cannot work without."""

from __future__ import annotations

from typing import List

from .art_prompts import STYLE_TRANSFER
from .errors import AdmissionError
from .models import ArtRequest, SceneRequest


def missing_fields(request) -> List[str]:
    missing: List[str] = []
    if isinstance(request, SceneRequest):
        if not request.primary_car_image:
            missing.append("primary_car_image")
    elif isinstance(request, ArtRequest) and request.style == STYLE_TRANSFER:
        if not request.style_reference_image:
            missing.append("style_reference_image")
        if not request.primary_car_image:
            missing.append("primary_car_image")
    return missing


def check_admission(request) -> None:
    missing = missing_fields(request)
    if missing:
        raise AdmissionError(missing)


def is_admissible(request) -> bool:
    return not missing_fields(request)
