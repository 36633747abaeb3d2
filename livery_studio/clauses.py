"""
Prompt clauses shared by every sub-compiler.

Each compiled prompt is assembled in the same order:
  preamble → subject → treatment → branding (only with logos) → constraints
"""

from __future__ import annotations

from typing import Iterable, Optional

# Appended verbatim to every prompt, whatever the branch.
CONSTRAINT_CLAUSE = (
    "STRICT: NO TEXT, NO TITLES, NO SLOGANS. The generated image MUST NOT contain any words, "
    "fonts, titles, or slogans other than the provided brand logos.\n"
    "STRICT FRAMING: The entire subject must be fully visible and centered within the frame. No clipping."
)

SPONSOR_PLACEMENT = (
    "SPONSOR LOGO: Must be placed on core body positions, specifically the large side door "
    "panels and the center of the front hood."
)
TEAM_PLACEMENT = (
    "TEAM LOGO: Must be placed on the rear wing endplates, above the front badge, on both sides "
    "of the front nose, and centered on the roof."
)
EVENT_PLACEMENT = (
    "EVENT LOGO: Integrate as a clean graphic overlay element of the composition, never as a car decal."
)


def branding_clause(
    sponsor_logo: Optional[str] = None,
    team_logo: Optional[str] = None,
    event_logo: Optional[str] = None,
) -> str:
    """Logo placement rules for the logos actually supplied. Empty when there are none."""
    rules = []
    if sponsor_logo:
        rules.append(SPONSOR_PLACEMENT)
    if team_logo:
        rules.append(TEAM_PLACEMENT)
    if event_logo:
        rules.append(EVENT_PLACEMENT)
    if not rules:
        return ""
    return "LOGO PLACEMENT RULES:\n" + "\n".join(f"- {r}" for r in rules)


def assemble(blocks: Iterable[str]) -> str:
    """Join non-empty clause blocks and always finish with CONSTRAINT_CLAUSE."""
    body = [b.strip() for b in blocks if b and b.strip()]
    body.append(CONSTRAINT_CLAUSE)
    return "\n".join(body)


def quoted_note(label: str, text: Optional[str]) -> str:
    if not text or not text.strip():
        return ""
    return f'{label}: "{text.strip()}".'
