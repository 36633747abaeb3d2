"""
Art sub-compiler — stylised motorsport posters.

STYLE_TRANSFER replicates a reference image's artistic DNA. Every other
style is a fixed template looked up in ART_STYLES.
"""

from __future__ import annotations

from typing import Callable, Dict

from .clauses import assemble, branding_clause, quoted_note
from .models import ArtRequest

ILLUSTRATION = "ILLUSTRATION"
MINIMALIST = "MINIMALIST"
GEOMETRIC_VECTOR = "GEOMETRIC_VECTOR"
MODERN_VECTOR = "MODERN_VECTOR"
TECHNICAL_SPEC = "TECHNICAL_SPEC"
STUDIO_CLOSEUP = "STUDIO_CLOSEUP"
NEON_NIGHT = "NEON_NIGHT"
CITY_POP = "CITY_POP"
HOLOGRAPHIC = "HOLOGRAPHIC"
CITY_PAINTING = "CITY_PAINTING"
STYLE_TRANSFER = "STYLE_TRANSFER"

PREAMBLE = "(Professional High-Impact Motorsport Promotion Art, 8k resolution, Masterpiece)."


def subject_clause(request: ArtRequest) -> str:
    if request.primary_car_image and request.secondary_car_image:
        return (
            'SUBJECT: TWO high-performance racing cars as identified from the provided "Car Image 1" '
            'and "Car Image 2".\n'
            "CRITICAL DETAIL REQUIREMENT: For EACH car, you MUST replicate every detail of its "
            "aerodynamic body and livery patterns, stylized into the chosen artistic medium."
        )
    if request.primary_car_image:
        return (
            'SUBJECT: ONE high-performance racing car as identified from the provided "Car Image".\n'
            "CRITICAL DETAIL REQUIREMENT: For the car, you MUST replicate every detail of its "
            "aerodynamic body and livery patterns, stylized into the chosen artistic medium."
        )
    return "SUBJECT: ONE high-performance racing car, stylized into the chosen artistic medium."


# ── Style DNA replication ─────────────────────────────────────────────────────

def style_transfer_clause(request: ArtRequest) -> str:
    """
    Technique and composition come from the style source; colour comes from the car.

    An already-extracted DNA description wins over re-analysing the reference
    image. With neither available there is nothing to analyse and the clause
    only carries the colour rule.
    """
    dna = (request.style_prompt or "").strip()
    lines = ["STYLE: ARTISTIC DNA REPLICATION."]

    if dna:
        lines.append(f'CORE STYLE DNA: "{dna}".')
        technique_source = "the CORE STYLE DNA"
    elif request.style_reference_image:
        lines.append(
            'Analyze the provided "Style Reference Image" to extract its artistic technique and composition.'
        )
        technique_source = 'the "Style Reference Image"'
    else:
        technique_source = ""

    supplement = quoted_note("ADDITIONAL USER INSTRUCTIONS", request.supplement)
    if supplement:
        lines.append(supplement)

    if technique_source:
        lines.append(
            f"TECHNIQUE SOURCE: Rendering technique, brushwork, lighting style and composition are taken "
            f"from {technique_source}. Do NOT take its colors."
        )
    lines.append(
        'COLOR LOGIC (MANDATORY): Analyze the "Car Image" and extract its specific livery color palette '
        "(the brand colors). The background, environment, and artistic effects of the new poster MUST "
        "use the colors extracted from the CAR LIVERY, never the palette of the style reference."
    )
    lines.append(
        'EXECUTION: Render the car from the "Car Image" into a scene that clones the artistic atmosphere, '
        "brushwork, and layout of the style DNA but uses the car's color palette for all environment elements."
    )
    return "\n".join(lines)


# ── Fixed style templates ─────────────────────────────────────────────────────

def _illustration(request: ArtRequest) -> str:
    return "STYLE: Dynamic Motorsport Vector Illustration. High-impact perspective with converging radial speed lines."


def _minimalist(request: ArtRequest) -> str:
    return (
        "STYLE: Masterful High-Contrast Minimalist Flat Vector Illustration.\n"
        "TECHNIQUE: 100% flat color blocks with zero gradients, zero textures, and zero soft shading.\n"
        "SHADOW LOGIC: Large, solid black graphic shadows with perfectly sharp, hard edges define the "
        "car's form and its contact with the ground. Shadows are a primary structural element.\n"
        "ENVIRONMENT: Ultra-minimalist graphic space. A simple, solid primary-color field (bold blue, "
        "vibrant red, or minimalist gray).\n"
        "COMPOSITION: Iconic, centered framing. The car is a bold graphic object, like a high-end "
        "vintage poster or modern sticker art.\n"
        "COLOR PALETTE: Highly saturated primaries (red, yellow, blue) with deep black accents for shadows."
    )


def _geometric_vector(request: ArtRequest) -> str:
    return (
        "STYLE: Modern Geometric Perspective Vector Illustration.\n"
        "TECHNIQUE: Clean, sharp vector shapes creating deep architectural storytelling, with dramatic "
        "isometric or high-converging perspective.\n"
        "VISUALS: The car is integrated into a highly organized environment, one of:\n"
        "- A sun-drenched European coastal street with pastel buildings and sharp terracotta shadows.\n"
        "- A cozy modern interior with large arched windows, indoor greenery, and warm sunbeams casting bold graphic shadows.\n"
        "- A surreal minimalist landscape of oversized everyday objects blended with bamboo or rivers.\n"
        "SHADOWS: Dramatic, hard-edged solid-color shadows (deep blues, rich ochres) that define the volume.\n"
        "COLOR PALETTE: Vibrant and sophisticated. Saturated primaries mixed with soft creamy neutrals.\n"
        'ATMOSPHERE: Serene, nostalgic "Lofi" aesthetic with high-end graphical precision.'
    )


def _modern_vector(request: ArtRequest) -> str:
    return (
        "STYLE: Clean Modern Vector Illustration in the 80s city-pop and geometric poster tradition.\n"
        "TECHNIQUE: 100% flat color blocking with zero gradients. Sharp, high-contrast, hard-edged solid black shadows.\n"
        "ENVIRONMENT: Minimalist urban or racing scenery, one of:\n"
        "- A high-tech pit garage entrance with architectural lines.\n"
        "- A single stylized light tower against a saturated pink or cobalt blue sky.\n"
        "- A minimalist racetrack sector with bold asphalt markings and primary color barriers.\n"
        "- A clean coastal road with sharp yellow lane lines.\n"
        "COLOR PALETTE: High-saturation pop art colors. Deep blues, vibrant pinks, sun-drenched yellows, and turquoise.\n"
        "COMPOSITION: The car is a clean, graphical subject within a static, serene geometric environment.\n"
        "ATMOSPHERE: Serene, static, and graphically powerful."
    )


def _technical_spec(request: ArtRequest) -> str:
    return (
        "STYLE: Professional Automotive Technical Design Sheet.\n"
        "LAYOUT: A multi-view composition within a single frame.\n"
        "- PRIMARY VIEW: A large, clean perspective view of the car as the centerpiece.\n"
        "- SECONDARY VIEWS: Two smaller inset panels showing a rear-quarter view and a technical close-up "
        "of one component (a racing wheel or the rear wing).\n"
        "VISUAL TECHNIQUE: High-end technical vector illustration. Flat, clean cel-shading with sharp, "
        "hard-edged shadows and bold, solid color fills instead of photoreal gradients.\n"
        "BACKGROUND: A minimalist, clean desaturated infinite space.\n"
        "GRAPHIC ACCENTS: Bold diagonal geometric shapes (parallelograms and racing stripes) in the primary "
        "and accent colors of the car's livery.\n"
        "STRICT: NO NUMBERS, NO LABELS. The poster must be purely visual."
    )


def _studio_closeup(request: ArtRequest) -> str:
    return "STYLE: High-End Ultra-Minimalist Studio Launch. A pure, infinite and void-like environment."


def _neon_night(request: ArtRequest) -> str:
    return "STYLE: Neo-Cyberpunk Night Racing. High-saturation neon reflections on wet asphalt."


def _city_pop(request: ArtRequest) -> str:
    return (
        "STYLE: 1980s Japanese City Pop resort illustration aesthetic.\n"
        "TECHNIQUE: Clean, flat colors, minimalist shading, hard-edged shadows and vibrant color gradients.\n"
        "ENVIRONMENT: A pristine, high-end racing circuit under a brilliant, clear sun.\n"
        "SCENE ELEMENTS: Clean gray asphalt, bold red-and-white (or blue-and-white) curbs, minimalist "
        "pit lane structures, and sleek empty grandstands in the distance.\n"
        "SKY: A crystal-clear deep cobalt blue sky with subtle horizontal 80s pop-art gradients.\n"
        "COMPOSITION: The car is the focal point, parked or cruising on the clean track. No beach or leisure elements.\n"
        "LIGHTING: Bright midday sun with high-contrast, sharp shadows on the ground and car body.\n"
        "COLOR PALETTE: Dominant cobalt blue, turquoise, vibrant track-marker colors, and pastel accents. "
        "The livery is adapted to this flat graphic style while keeping its original color scheme."
    )


def _holographic(request: ArtRequest) -> str:
    return "STYLE: Futuristic Holographic Iridescent Illustration."


def _city_painting(request: ArtRequest) -> str:
    return (
        "STYLE: Professional Single-Frame Motorsport Art (Dynamic City Racing Painting).\n"
        "LAYOUT: A single, grand, ultra-cinematic wide-angle frame.\n"
        "SCENE: The car in an aggressive, high-speed drift or corner entry through a towering metropolitan "
        "street circuit.\n"
        "TECHNIQUE: Digital realism fused with expressive, painterly brushwork. Visible impasto-like strokes "
        "on the environment and vibrant speed-trail effects.\n"
        "LIGHTING: Golden-hour sunset with warm orange highlights on the skyscrapers and long shadows across the track.\n"
        "BACKGROUND: A cream-colored canvas aesthetic with towering landmarks drawn with a slight architectural feel.\n"
        "COLOR PALETTE: High-contrast. The livery is the focal point, glowing against the warm neutral city."
    )


def _generic_style(request: ArtRequest) -> str:
    return "STYLE: High-end motorsport promotional artwork with a clean, confident composition."


ART_STYLES: Dict[str, Callable[[ArtRequest], str]] = {
    ILLUSTRATION: _illustration,
    MINIMALIST: _minimalist,
    GEOMETRIC_VECTOR: _geometric_vector,
    MODERN_VECTOR: _modern_vector,
    TECHNICAL_SPEC: _technical_spec,
    STUDIO_CLOSEUP: _studio_closeup,
    NEON_NIGHT: _neon_night,
    CITY_POP: _city_pop,
    HOLOGRAPHIC: _holographic,
    CITY_PAINTING: _city_painting,
}


def _style_clause(request: ArtRequest) -> str:
    if request.style == STYLE_TRANSFER:
        return style_transfer_clause(request)
    template = ART_STYLES.get(request.style, _generic_style)
    return "\n".join(
        part for part in (
            template(request),
            quoted_note("ADDITIONAL DESIGN NOTES", request.style_prompt),
            quoted_note("ADDITIONAL USER INSTRUCTIONS", request.supplement),
        ) if part
    )


def compile_art_prompt(request: ArtRequest) -> str:
    branding = branding_clause(request.sponsor_logo, request.team_logo, request.event_logo)
    if branding:
        branding = (
            "BRANDING: Integrate the provided logos professionally as decals on the car or graphic overlays.\n"
            + branding
        )
    return assemble([
        PREAMBLE,
        subject_clause(request),
        "VISUAL STYLE: " + _style_clause(request),
        branding,
        "FINAL POLISH: Ensure a high-end commercial aesthetic.",
    ])
