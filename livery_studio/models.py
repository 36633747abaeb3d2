"""
Data model for creative briefs and generation output.

  SceneRequest  — scene / livery poster or technical 3-view sheet
  ArtRequest    — art-style poster, including style-DNA replication
  MerchRequest  — merchandise mockup

DesignRequest is the tagged union of the three (discriminated on `kind`).
Image fields hold data URIs; empty strings are treated as "not provided".
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .images import ensure_decodable, split_data_uri

DEFAULT_PERSPECTIVE = "High-angle diagonal diving right"

PERSPECTIVE_PRESETS = (
    DEFAULT_PERSPECTIVE,
    "Low-angle aggressive front",
    "Side profile panning blur",
    "Rear quarter chase cam",
    "Top-down hairpin entry",
)


def _optional_image(value):
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return ensure_decodable(value)


class _Brief(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    aspect_ratio: str = Field(description="Requested canvas ratio, e.g. '9:16'")


class SceneRequest(_Brief):
    """Photoreal scene poster or technical 3-view livery sheet."""

    kind: Literal["scene"] = "scene"
    primary_model: str = Field(default="", description="Lead car model name")
    secondary_model: Optional[str] = Field(default=None, description="Second car model name")
    livery_notes: str = ""
    perspective: str = DEFAULT_PERSPECTIVE
    scenario: str = Field(default="RACE", description="RACE | LAUNCH | GARAGE | PADDOCK")
    output_format: str = Field(default="RENDERED_3D", description="RENDERED_3D | THREE_VIEW_SHEET")

    primary_car_image: Optional[str] = None
    secondary_car_image: Optional[str] = None
    pattern_image: Optional[str] = None
    sponsor_logo: Optional[str] = None
    team_logo: Optional[str] = None

    @field_validator(
        "primary_car_image", "secondary_car_image", "pattern_image", "sponsor_logo", "team_logo",
        mode="before",
    )
    @classmethod
    def check_images(cls, value):
        return _optional_image(value)


class ArtRequest(_Brief):
    """Stylised motorsport poster; STYLE_TRANSFER clones a reference image's technique."""

    kind: Literal["art"] = "art"
    style: str = Field(description="One of the art style tags, or STYLE_TRANSFER")

    primary_car_image: Optional[str] = None
    secondary_car_image: Optional[str] = None
    style_reference_image: Optional[str] = None
    event_logo: Optional[str] = None
    sponsor_logo: Optional[str] = None
    team_logo: Optional[str] = None

    style_prompt: Optional[str] = Field(
        default=None,
        description="Extracted style DNA (STYLE_TRANSFER) or free design notes (other styles)",
    )
    supplement: Optional[str] = Field(default=None, description="Extra user instructions")

    @field_validator(
        "primary_car_image", "secondary_car_image", "style_reference_image",
        "event_logo", "sponsor_logo", "team_logo",
        mode="before",
    )
    @classmethod
    def check_images(cls, value):
        return _optional_image(value)


class MerchRequest(_Brief):
    """Branded merchandise mockup."""

    kind: Literal["merch"] = "merch"
    item_type: str = Field(description="APPAREL | SCALE_MODEL | BEVERAGE | COLLECTION")

    team_logo: Optional[str] = None
    sponsor_logo: Optional[str] = None
    car_image: Optional[str] = None
    pattern_image: Optional[str] = None

    base_color: Optional[str] = Field(default=None, description="Hex colour, e.g. '#000000'")
    style_description: Optional[str] = None

    @field_validator(
        "team_logo", "sponsor_logo", "car_image", "pattern_image",
        mode="before",
    )
    @classmethod
    def check_images(cls, value):
        return _optional_image(value)


DesignRequest = Annotated[
    Union[SceneRequest, ArtRequest, MerchRequest],
    Field(discriminator="kind"),
]

design_request_adapter = TypeAdapter(DesignRequest)


# ── Compiler / orchestrator output ────────────────────────────────────────────

class AttachmentRole(str, Enum):
    PRIMARY_CAR = "primary_car"
    SECONDARY_CAR = "secondary_car"
    PATTERN_REFERENCE = "pattern_reference"
    STYLE_REFERENCE = "style_reference"
    EVENT_LOGO = "event_logo"
    SPONSOR_LOGO = "sponsor_logo"
    TEAM_LOGO = "team_logo"


@dataclass(frozen=True)
class Attachment:
    role: AttachmentRole
    data: str               # data URI


@dataclass(frozen=True)
class CompiledPrompt:
    text: str
    attachments: Tuple[Attachment, ...] = ()

    @property
    def roles(self) -> Tuple[AttachmentRole, ...]:
        return tuple(a.role for a in self.attachments)


@dataclass(frozen=True)
class GenerationResult:
    image_url: str          # data URI of the rendered asset
    prompt_text: str        # exact prompt sent with the request


@dataclass
class AssetRecord:
    """A generated asset as the caller keeps it: result + identity + when."""

    image_url: str
    prompt: str
    asset_type: str                                                  # POSTER | ART_POSTER | STYLE_TRANSFER | MERCH
    request: Union[SceneRequest, ArtRequest, MerchRequest]
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, result: GenerationResult, request) -> "AssetRecord":
        return cls(
            image_url=result.image_url,
            prompt=result.prompt_text,
            asset_type=asset_type_for(request),
            request=request,
        )

    def save_image(self, path: Path) -> Path:
        _, data = split_data_uri(self.image_url)
        path.write_bytes(data)
        return path

    def to_dict(self) -> dict:
        """JSON-friendly summary; image payloads are left out."""
        return {
            "id": self.id,
            "asset_type": self.asset_type,
            "timestamp": self.timestamp.isoformat(),
            "prompt": self.prompt,
            "request": self.request.model_dump(
                exclude={name for name, value in self.request if _looks_like_image(name, value)}
            ),
        }


def asset_type_for(request) -> str:
    if isinstance(request, SceneRequest):
        return "POSTER"
    if isinstance(request, ArtRequest):
        return "STYLE_TRANSFER" if request.style == "STYLE_TRANSFER" else "ART_POSTER"
    return "MERCH"


def _looks_like_image(name: str, value) -> bool:
    return isinstance(value, str) and value.startswith("data:") and (
        name.endswith("_image") or name.endswith("_logo")
    )

