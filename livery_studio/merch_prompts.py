"""
Merch sub-compiler — branded product mockups.

Design source priority for every product surface:
  1. Pattern Reference image (when supplied)
  2. livery DNA of the Car Reference image
Unknown item types fall back to a generic product template built from
whatever optional fields are present.
"""

from __future__ import annotations

from typing import Callable, Dict

from .clauses import assemble
from .models import MerchRequest

APPAREL = "APPAREL"
SCALE_MODEL = "SCALE_MODEL"
BEVERAGE = "BEVERAGE"
COLLECTION = "COLLECTION"
ITEM_TYPES = (APPAREL, SCALE_MODEL, BEVERAGE, COLLECTION)

PREAMBLE = "(Professional Motorsport Merchandise Product Photography, 8k resolution, Masterpiece)."
PHYSICAL_PRODUCT = "STRICT: The asset must look like a real, physical product."

APPAREL_DEFAULT_COLOR = "Pure Black"
COLLECTION_DEFAULT_COLOR = "Black"
APPAREL_DEFAULT_ART = "Cinematic motorsport illustration with vibrant glows and dynamic lighting"


# ── Design source priority ────────────────────────────────────────────────────

def label_design_source(request: MerchRequest) -> str:
    """Beverage label rule: the pattern reference overrides the car livery."""
    if request.pattern_image:
        return (
            "The graphic background design of the labels MUST be precisely derived from the design "
            "motifs and DNA of the provided 'Pattern Reference'."
        )
    return (
        "The graphic background design and color palette of the labels MUST match the specific livery "
        "design DNA and colors of the provided 'Car Reference'."
    )


def collection_design_source(request: MerchRequest) -> str:
    """Same priority as label_design_source, applied across every product in the lineup."""
    if request.pattern_image:
        return (
            "Extract the exact pattern motifs, graphic DNA, and color palette from the provided "
            "'Pattern Reference' and apply it cohesively across all product surfaces."
        )
    return (
        "Extract the color DNA and geometric racing motifs from the provided 'Car Reference' livery "
        "to style the entire collection."
    )


# ── Item templates ────────────────────────────────────────────────────────────

def _scale_model(request: MerchRequest) -> str:
    return (
        "CONCEPT: High-end collectible 1/18 scale diecast racing model figurine.\n"
        "VISUAL STYLE: Minimalist, clean, pure professional white studio background.\n"
        "SUBJECT: A 1/18 scale miniature model of the provided car, featuring its exact livery and decals.\n"
        "PACKAGING: A premium collectible display box is included in the scene, positioned behind or "
        "next to the model car.\n"
        "BRANDING ON BOX: The provided Team Logo and Sponsor Logo are printed as high-quality graphic "
        "elements on the packaging box's surfaces.\n"
        "LIGHTING: Cinematic high-end studio product photography lighting."
    )


def _beverage(request: MerchRequest) -> str:
    return (
        "CONCEPT: High-end professional product shot of racing-branded takeaway coffee.\n"
        "SCENE: Two premium coffee cups on a minimalist, pure white studio background.\n"
        "SUBJECTS:\n"
        "1. One transparent plastic takeaway cup with an Iced Americano (dark coffee with clear visible ice cubes).\n"
        "2. One premium matte-finish paper cup for a hot Latte.\n"
        "BRANDING: Both cups feature a custom-designed wrap-around graphic label or sleeve.\n"
        "LABEL DESIGN LOGIC:\n"
        "- The labels MUST integrate the provided Team Logo and Sponsor Logo.\n"
        f"- {label_design_source(request)}\n"
        "LIGHTING: Bright, clean, clinical studio product lighting with soft reflections on the plastic cup."
    )


def _apparel(request: MerchRequest) -> str:
    art_style = (request.style_description or "").strip() or APPAREL_DEFAULT_ART
    lines = [
        'CONCEPT: Professional high-end "Racing Team Apparel" merchandise mockup.',
        "LAYOUT: A side-by-side presentation showing both the FRONT and BACK of a premium T-shirt in one frame.",
        f"BASE COLOR: The T-shirt must be the color: {request.base_color or APPAREL_DEFAULT_COLOR}.",
        "FRONT DESIGN:",
        "- Small, professional-grade logo placement on the chest.",
        "- The Team Logo must be placed on the LEFT CHEST.",
        "- The Sponsor Logo must be placed on the RIGHT CHEST.",
        "- Visual style: Minimalist and clean.",
        "BACK DESIGN:",
        "- A large, high-impact central graphic centered on the back.",
        "- The car from the 'Car Reference' image must be the primary subject of this graphic.",
        "- BACKGROUND OF THE GRAPHIC: The Team Logo appears as a large, stylized backdrop directly BEHIND the car graphic.",
        f"- ARTISTIC STYLE: {art_style}.",
    ]
    if request.pattern_image:
        lines.append(
            "- Incorporate graphic motifs and color DNA from the provided 'Pattern Reference' into the "
            "background of the back graphic."
        )
    lines.append("VISUAL STYLE: Photorealistic product photography on a minimalist neutral studio background.")
    return "\n".join(lines)


def _collection(request: MerchRequest) -> str:
    return (
        'CONCEPT: A professional high-end "Motorsport Brand Merchandise Collection" catalog sheet.\n'
        "LAYOUT: Organized product lineup on a clean white background with subtle graphic accents like "
        "dots or geometric shadows.\n"
        "PRODUCTS TO INCLUDE IN THE LINEUP:\n"
        "1. 1/18 SCALE MODEL: A precision model car with its branded display box.\n"
        "2. APPAREL: A high-end T-shirt and a team hoodie displayed flat or on invisible mannequins.\n"
        f"   - COLOR REQUIREMENT: The T-shirt and hoodie MUST be produced in the base color: "
        f"{request.base_color or COLLECTION_DEFAULT_COLOR}.\n"
        "3. ACCESSORIES: A branded tote bag, a set of graphic keychains, and a circular hand fan.\n"
        "4. LIFESTYLE: An insulated stainless steel bottle or coffee mug.\n"
        "DESIGN DNA (TOP PRIORITY): All products MUST share a unified design theme.\n"
        f"- {collection_design_source(request)}\n"
        "BRANDING: Integrate the provided Team Logo and Sponsor Logo prominently on every item in the collection.\n"
        "VISUAL STYLE: Clean, bright, high-fidelity studio product photography."
    )


def _generic_item(request: MerchRequest) -> str:
    item = request.item_type.strip().replace("_", " ").lower() or "merchandise item"
    lines = [
        f"Generate a high-end product visualization for a {item} for a racing team.",
        "The style should be consistent with professional motorsport merchandise photography.",
    ]
    if request.base_color:
        lines.append(f"Base color: {request.base_color}.")
    if request.style_description and request.style_description.strip():
        lines.append(f"Additional style: {request.style_description.strip()}.")
    if request.pattern_image or request.car_image:
        lines.append(f"DESIGN SOURCE: {collection_design_source(request)}")
    if request.team_logo or request.sponsor_logo:
        lines.append("BRANDING: Integrate the provided logos cleanly on the product surfaces.")
    return "\n".join(lines)


MERCH_ITEMS: Dict[str, Callable[[MerchRequest], str]] = {
    SCALE_MODEL: _scale_model,
    BEVERAGE: _beverage,
    APPAREL: _apparel,
    COLLECTION: _collection,
}


def compile_merch_prompt(request: MerchRequest) -> str:
    template = MERCH_ITEMS.get(request.item_type, _generic_item)
    return assemble([
        PREAMBLE,
        template(request),
        PHYSICAL_PRODUCT,
    ])
