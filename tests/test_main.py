"""Tests for the command line: brief loading, prompt preview and batch generation."""

import json

import pytest

from livery_studio import config as config_module
from livery_studio import main as cli
from livery_studio.images import split_data_uri
from livery_studio.models import MerchRequest, SceneRequest
from livery_studio.orchestrator import GenerationOrchestrator


@pytest.fixture
def brief_dir(tmp_path, png_bytes):
    (tmp_path / "refs").mkdir()
    (tmp_path / "refs" / "car.png").write_bytes(png_bytes)
    return tmp_path


def _write_brief(directory, name, payload):
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_brief_inlines_relative_images(brief_dir, png_bytes):
    path = _write_brief(
        brief_dir,
        "paddock.json",
        {"kind": "scene", "aspect_ratio": "9:16", "scenario": "PADDOCK", "primary_car_image": "refs/car.png"},
    )
    request = cli.load_brief(path)
    assert isinstance(request, SceneRequest)
    assert split_data_uri(request.primary_car_image) == ("image/png", png_bytes)


def test_load_brief_defaults_merch_ratio(brief_dir):
    cups = cli.load_brief(_write_brief(brief_dir, "cups.json", {"kind": "merch", "item_type": "BEVERAGE"}))
    drop = cli.load_brief(_write_brief(brief_dir, "drop.json", {"kind": "merch", "item_type": "COLLECTION"}))
    assert isinstance(cups, MerchRequest)
    assert cups.aspect_ratio == "4:3"
    assert drop.aspect_ratio == "9:16"


def test_load_brief_rejects_non_objects(brief_dir):
    with pytest.raises(ValueError):
        cli.load_brief(_write_brief(brief_dir, "list.json", [1, 2]))


def test_prompt_command(brief_dir, capsys):
    path = _write_brief(
        brief_dir,
        "sheet.json",
        {"kind": "scene", "aspect_ratio": "16:9", "output_format": "THREE_VIEW_SHEET", "primary_car_image": "refs/car.png"},
    )
    assert cli.main(["prompt", str(path)]) == 0
    out = capsys.readouterr().out
    assert "orthographic" in out
    assert "primary_car" in out


def test_prompt_command_reports_bad_brief(brief_dir):
    path = _write_brief(brief_dir, "bad.json", {"kind": "scene"})
    assert cli.main(["prompt", str(path)]) == 1


def test_generate_writes_assets(brief_dir, monkeypatch, fake_client, make_image_response, png_bytes):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(cli, "GenerationOrchestrator", lambda config: GenerationOrchestrator(config, client=fake_client))
    fake_client.models.generate_content.return_value = make_image_response()

    scene = _write_brief(brief_dir, "paddock.json", {"kind": "scene", "aspect_ratio": "9:16", "primary_car_image": "refs/car.png"})
    merch = _write_brief(brief_dir, "cups.json", {"kind": "merch", "item_type": "BEVERAGE"})
    output = brief_dir / "out"

    assert cli.main(["generate", str(scene), str(merch), "--output", str(output)]) == 0

    assert (output / "paddock.png").read_bytes() == png_bytes
    assert (output / "cups.prompt.txt").read_text(encoding="utf-8").startswith("(Professional Motorsport Merchandise")
    record = json.loads((output / "paddock.asset.json").read_text(encoding="utf-8"))
    assert record["asset_type"] == "POSTER"
    assert "primary_car_image" not in record["request"]


def test_generate_skips_inadmissible_briefs(brief_dir):
    scene = _write_brief(brief_dir, "nocar.json", {"kind": "scene", "aspect_ratio": "9:16"})
    assert cli.main(["generate", str(scene), "--output", str(brief_dir / "out")]) == 1
