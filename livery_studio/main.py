"""
Livery Studio — command line

Usage:
  python -m livery_studio.main generate briefs/paddock.json [briefs/coffee.json ...] --output outputs
  python -m livery_studio.main prompt   briefs/paddock.json
  python -m livery_studio.main analyze  refs/poster.jpg --lang zh

Brief files are JSON objects with a "kind" of scene / art / merch. Image
fields may hold a data URI or a path relative to the brief file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from .admission import check_admission
from .analyzer import LANGUAGE_NAMES, StyleDnaExtractor
from .aspect import default_merch_aspect_ratio, is_supported
from .compiler import compile_request
from .config import StudioConfig
from .errors import StudioError
from .images import load_image_file
from .models import AssetRecord, GenerationResult, design_request_adapter
from .orchestrator import GenerationOrchestrator

console = Console()
logger = logging.getLogger(__name__)

OUTPUTS_ROOT = Path("outputs")

_IMAGE_SUFFIXES = ("_image", "_logo")


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Livery Studio — motorsport poster & merch generator"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate one asset per brief file")
    gen.add_argument("briefs", nargs="+", type=Path, help="Brief JSON file(s)")
    gen.add_argument("--output", type=Path, default=OUTPUTS_ROOT, help="Output directory (default: outputs/)")
    gen.add_argument("--workers", type=int, default=4, help="Parallel generations (default: 4)")

    prm = sub.add_parser("prompt", help="Print the compiled prompt without calling Gemini")
    prm.add_argument("brief", type=Path)

    ana = sub.add_parser("analyze", help="Extract style DNA from a reference image")
    ana.add_argument("image", type=Path)
    ana.add_argument("--lang", default="en", help=f"Answer language ({' | '.join(LANGUAGE_NAMES)})")

    return parser.parse_args(argv)


# ── Brief loading ─────────────────────────────────────────────────────────────

def load_brief(path: Path):
    """Read a brief JSON file, inline image paths as data URIs and validate it."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: brief must be a JSON object")

    for key, value in list(raw.items()):
        if key.endswith(_IMAGE_SUFFIXES) and isinstance(value, str) and value and not value.startswith("data:"):
            raw[key] = load_image_file(path.parent / value)

    if raw.get("kind") == "merch" and not raw.get("aspect_ratio"):
        raw["aspect_ratio"] = default_merch_aspect_ratio(raw.get("item_type", ""))

    return design_request_adapter.validate_python(raw)


def _load_briefs(paths: List[Path]) -> Dict[str, object]:
    requests: Dict[str, object] = {}
    for path in paths:
        try:
            request = load_brief(path)
            check_admission(request)
        except (OSError, ValueError, ValidationError, StudioError) as e:
            console.print(f"  [red]✗ {path.name}: {e}[/red]")
            continue
        if not is_supported(request.aspect_ratio):
            console.print(
                f"  [yellow]⚠ {path.name}: aspect ratio {request.aspect_ratio} is not in the "
                f"supported list — passing it through[/yellow]"
            )
        requests[path.stem] = request
    return requests


# ── Commands ──────────────────────────────────────────────────────────────────

def _save_asset(name: str, result: GenerationResult, request, output_dir: Path) -> AssetRecord:
    record = AssetRecord.from_result(result, request)
    record.save_image(output_dir / f"{name}.png")
    (output_dir / f"{name}.prompt.txt").write_text(result.prompt_text, encoding="utf-8")
    (output_dir / f"{name}.asset.json").write_text(
        json.dumps(record.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
    )
    return record


def cmd_generate(args: argparse.Namespace) -> int:
    requests = _load_briefs(args.briefs)
    if not requests:
        console.print("[red]No valid briefs to generate.[/red]")
        return 1

    config = StudioConfig.from_env()
    orchestrator = GenerationOrchestrator(config)
    args.output.mkdir(parents=True, exist_ok=True)

    console.print(
        f"\n[bold cyan]→ Generating {len(requests)} asset(s) with {config.generation_model}...[/bold cyan]"
    )
    results = orchestrator.generate_many(requests, max_workers=args.workers)

    failures = 0
    for name in requests:
        outcome = results.get(name)
        if isinstance(outcome, GenerationResult):
            record = _save_asset(name, outcome, requests[name], args.output)
            console.print(f"  [green]✓ {name}[/green] ({record.asset_type}) → {args.output / (name + '.png')}")
        elif outcome is None:
            failures += 1
            console.print(f"  [yellow]⚠ {name}: no image returned[/yellow]")
        else:
            failures += 1
            console.print(f"  [red]✗ {name}: {outcome.code} — {outcome}[/red]")

    console.print(Panel(
        f"[bold]{len(requests) - failures}[/bold] generated, [bold]{failures}[/bold] failed\n"
        f"Output: {args.output}",
        title="Livery Studio",
        border_style="green" if not failures else "yellow",
    ))
    return 0 if not failures else 2


def cmd_prompt(args: argparse.Namespace) -> int:
    request = load_brief(args.brief)
    compiled = compile_request(request)
    console.print(Rule(f"{args.brief.name} — {request.kind}"))
    console.print(compiled.text, markup=False, highlight=False)
    console.print(Rule("attachments"))
    for i, role in enumerate(compiled.roles, 1):
        console.print(f"  {i}. {role.value}")
    if not compiled.attachments:
        console.print("  [dim](none)[/dim]")
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    image = load_image_file(args.image)
    extractor = StyleDnaExtractor(StudioConfig.from_env())
    console.print(f"\n[bold cyan]→ Extracting style DNA from {args.image.name}...[/bold cyan]")
    dna = extractor.extract(image, args.lang)
    if not dna:
        console.print("  [yellow]⚠ Gemini returned no description[/yellow]")
        return 2
    console.print(Panel(dna, title="Style DNA", border_style="cyan"))
    return 0


_COMMANDS = {
    "generate": cmd_generate,
    "prompt": cmd_prompt,
    "analyze": cmd_analyze,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s — %(levelname)s — %(name)s — %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    try:
        return _COMMANDS[args.command](args)
    except StudioError as e:
        console.print(f"[red]✗ {e.code}: {e}[/red]")
        return 1
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
