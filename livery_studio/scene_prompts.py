"""
Scene sub-compiler — motorsport CGI posters and technical livery sheets.

Branches on output format first:
  THREE_VIEW_SHEET  → flat 2D orthographic layout, scenario ignored
  anything else     → photoreal render in one of the scenario environments
"""

from __future__ import annotations

from typing import Callable, Dict

from .clauses import assemble, branding_clause
from .models import SceneRequest

RACE = "RACE"
LAUNCH = "LAUNCH"
GARAGE = "GARAGE"
PADDOCK = "PADDOCK"
SCENARIOS = (RACE, LAUNCH, GARAGE, PADDOCK)

RENDERED_3D = "RENDERED_3D"
THREE_VIEW_SHEET = "THREE_VIEW_SHEET"
OUTPUT_FORMATS = (RENDERED_3D, THREE_VIEW_SHEET)

RENDER_PREAMBLE = "(Professional Motorsport CGI, 8k Ultra-High Resolution, Masterpiece Photorealistic Render)."
SHEET_PREAMBLE = "(Professional Automotive Technical Livery Spec Sheet, 8k, Flat Design Style)."

# Enclosed sets park the cars next to each other; open sets stage a chase.
_SIDE_BY_SIDE_SCENARIOS = (PADDOCK, GARAGE)
SIDE_BY_SIDE_PLACEMENT = (
    "The two cars must be positioned SIDE-BY-SIDE (parallel) inside the bay, facing the camera, "
    "perfectly aligned like a factory racing team."
)
LEAD_CHASE_PLACEMENT = "The lead car is in front, and the chase car is slightly behind/to the side."


def _car(request: SceneRequest) -> str:
    model = request.primary_model.strip()
    return f"high-performance {model} racing car" if model else "high-performance racing car"


# ── Subject ───────────────────────────────────────────────────────────────────

def subject_clause(request: SceneRequest) -> str:
    if request.primary_car_image and request.secondary_car_image:
        placement = (
            SIDE_BY_SIDE_PLACEMENT
            if request.scenario in _SIDE_BY_SIDE_SCENARIOS
            else LEAD_CHASE_PLACEMENT
        )
        return (
            "SUBJECT: TWO high-performance racing cars.\n"
            '- CAR 1 (PRIMARY): Must match the first uploaded "Car Reference Image" exactly.\n'
            '- CAR 2 (SUPPORT): Must match the second uploaded "Car Reference Image".\n'
            f"PLACEMENT: {placement}"
        )
    if request.secondary_model:
        return (
            f"SUBJECT: A dynamic pair of {request.primary_model.strip()} and "
            f"{request.secondary_model.strip()} racing cars."
        )
    subject = f"SUBJECT: A {_car(request)}."
    if request.primary_car_image:
        subject += ' Its body shape must match the first uploaded "Car Reference Image".'
    return subject


# ── Livery source ─────────────────────────────────────────────────────────────

def livery_source_clause(request: SceneRequest) -> str:
    """A supplied pattern reference outranks the free-text livery notes."""
    notes = request.livery_notes.strip()
    if request.pattern_image:
        text = (
            'LIVERY (TOP PRIORITY): Analyze the provided "Pattern Reference" image. You MUST extract '
            "its exact color palette, graphic motifs, and design DNA. Map this specific design "
            f"precisely onto the aerodynamic body of the {request.primary_model.strip() or 'car'}."
        )
        if notes:
            text += f" Supplement with these notes: {notes}."
        return text
    if notes:
        return f"LIVERY: {notes}. Ensure all brand colors and aerodynamic details are sharp."
    return "LIVERY: Ensure all brand colors and aerodynamic details are sharp."


# ── Scenario environments ─────────────────────────────────────────────────────

def _race_environment(request: SceneRequest) -> str:
    return (
        "High-speed racing action on a world-class FIA grade racetrack with motion blur asphalt "
        "and glowing brake discs."
    )


def _launch_environment(request: SceneRequest) -> str:
    return (
        "Minimalist high-end professional automotive photography studio. Pure white infinite floor "
        "and background. Soft, broad overhead softbox lighting creating elegant highlight gradients "
        "along the car's body. Sharp contact shadows on the floor. 8k ultra-sharp detail."
    )


def _garage_environment(request: SceneRequest) -> str:
    if request.pattern_image:
        wall_graphics = (
            'Large wall graphics replicate the exact motifs and design DNA of the uploaded '
            '"Pattern Reference".'
        )
    else:
        wall_graphics = "Wall graphics follow the color palette of the primary racing car livery."
    return (
        "Vast, ultra-high-end professional racing headquarters factory workshop.\n"
        "ENVIRONMENT DETAIL:\n"
        "- ARCHITECTURE: Minimalist, massive multi-level industrial design.\n"
        "- MEZZANINE: A visible second-floor garage office with floor-to-ceiling glass partitions "
        "overlooking the workshop floor, soft ambient lighting and silhouettes of workstation screens.\n"
        "- WALL BRANDING: The Team Logo must be integrated onto the primary structural walls as a "
        "large-scale architectural sign (brushed metal or back-lit LED) or etched into the mezzanine glass.\n"
        f"- WALL GRAPHICS: {wall_graphics}\n"
        "- FLOOR: Polished gray industrial concrete with subtle, elegant reflections of the overhead lighting.\n"
        "- ASSETS: Organized stacks of racing slicks on matte-black racks, high-tech tool chests with "
        "carbon fiber finishes, glowing telemetry monitors on a mobile workstation in the mid-ground.\n"
        "- LIGHTING: Broad, cinematic linear LED strips in the ceiling creating sharp, high-contrast "
        "highlights on the car's silhouette.\n"
        "- ATMOSPHERE: Clinical, expensive, hyper-organized factory headquarters atmosphere."
    )


def _paddock_environment(request: SceneRequest) -> str:
    if request.pattern_image:
        wall_design = (
            'Replicate the exact graphic motifs and design DNA from the uploaded "Pattern Reference" '
            "across the surface of the primary partition wall panels."
        )
    else:
        wall_design = "The walls should reflect the color palette and geometric DNA of the primary racing car livery."
    return (
        "Professional high-end Racing Paddock Garage interior, hyper-organized and technologically advanced.\n"
        "ENVIRONMENT DETAIL:\n"
        "- CEILING: Massive, high-precision overhead lightbox panels in a clean geometric grid, "
        "providing clinical, soft-shadow lighting.\n"
        "- FLOOR: Ultra-high-gloss dark charcoal epoxy with razor-sharp mirror reflections of the cars "
        "and the surrounding branding.\n"
        "- WALL STRUCTURE: Thick, high-end modular partition walls with back-lit glowing panels. The "
        "Sponsor Logo and Team Logo appear as bold, back-lit architectural elements integrated into "
        "the partition panels.\n"
        f"- PADDOCK WALL DESIGN: {wall_design}\n"
        "- ASSETS & EQUIPMENT (SYMMETRICAL ARRANGEMENT):\n"
        "  1. TIRE STACKS: Racing slicks on vertical matte-black tire trolleys, symmetric on both sides of the bay.\n"
        "  2. TOOL CHESTS: Multi-drawer racing tool cabinets in matte black or carbon fiber against the walls.\n"
        "  3. MOBILE WORKSTATIONS: A high-tech telemetry cart visible in the periphery.\n"
        "- ATMOSPHERE: High-pressure race-day focus. Clinical and structurally substantial with deep perspective layers."
    )


def _generic_environment(request: SceneRequest) -> str:
    return "Professional motorsport setting with cinematic depth and clean, uncluttered surroundings."


ENVIRONMENTS: Dict[str, Callable[[SceneRequest], str]] = {
    RACE: _race_environment,
    LAUNCH: _launch_environment,
    GARAGE: _garage_environment,
    PADDOCK: _paddock_environment,
}


# ── Entry points ──────────────────────────────────────────────────────────────

def _three_view_sheet(request: SceneRequest) -> str:
    subject = f"SUBJECT: Technical 3-view orthographic projection of a {_car(request)}."
    if request.primary_car_image:
        subject += ' The car must match the first uploaded "Car Reference Image".'

    if request.pattern_image:
        mapping = 'Apply the provided "Pattern Reference" across the entire body.'
    else:
        mapping = "Derive the livery layout from the reference car and the livery notes."
    notes = request.livery_notes.strip()
    palette = f"Match the color palette to the livery: {notes}." if notes else ""

    return assemble([
        SHEET_PREAMBLE,
        subject,
        "LAYOUT:\n"
        "- LEFT: A large Top-Down View showing the full roof and hood livery.\n"
        "- RIGHT COLUMN: A sharp Front View and a clean Side Profile View (Left Side).",
        "VISUAL STYLE: Clean graphic illustration on a pure white background. Minimalist shading "
        "to emphasize the livery design and body lines.",
        f"LIVERY MAPPING: {mapping} {palette}",
        branding_clause(request.sponsor_logo, request.team_logo),
        "STRICT: This is a 2D technical layout. No perspective distortion. No environment.",
    ])


def _rendered_scene(request: SceneRequest) -> str:
    environment = ENVIRONMENTS.get(request.scenario, _generic_environment)(request)
    return assemble([
        RENDER_PREAMBLE,
        subject_clause(request),
        livery_source_clause(request),
        f"PERSPECTIVE: {request.perspective.strip()}." if request.perspective.strip() else "",
        f"ENVIRONMENT: {environment}",
        "VISUALS: Cinematic lighting, realistic ray-traced reflections on car paint and windows, "
        "high-fidelity textures.",
        branding_clause(request.sponsor_logo, request.team_logo),
    ])


def compile_scene_prompt(request: SceneRequest) -> str:
    if request.output_format == THREE_VIEW_SHEET:
        return _three_view_sheet(request)
    return _rendered_scene(request)
