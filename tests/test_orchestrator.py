"""Tests for GenerationOrchestrator."""

import base64
import logging
from types import SimpleNamespace

import pytest
from google.genai import types

from livery_studio.compiler import compile_request
from livery_studio.errors import GenerationFailed, NoImageInResponse
from livery_studio.images import split_data_uri
from livery_studio.models import ArtRequest, CompiledPrompt, GenerationResult, MerchRequest, SceneRequest
from livery_studio.orchestrator import GenerationOrchestrator, build_contents, extract_image_url

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def scene(images):
    return SceneRequest(
        aspect_ratio="9:16",
        primary_model="GT3 RS",
        scenario="PADDOCK",
        primary_car_image=images["car"],
        pattern_image=images["pattern"],
        team_logo=images["team"],
    )


@pytest.fixture
def orchestrator(config, fake_client):
    return GenerationOrchestrator(config, client=fake_client)


# ── Happy path ────────────────────────────────────────────────────────────────

def test_generate_returns_image_and_prompt(orchestrator, fake_client, make_image_response, png_bytes, scene):
    fake_client.models.generate_content.return_value = make_image_response()

    result = orchestrator.generate(scene)

    assert isinstance(result, GenerationResult)
    assert result.prompt_text == compile_request(scene).text
    mime, data = split_data_uri(result.image_url)
    assert mime == "image/png"
    assert data == png_bytes


def test_payload_is_text_then_images_in_compiler_order(orchestrator, fake_client, make_image_response, scene):
    fake_client.models.generate_content.return_value = make_image_response()

    orchestrator.generate(scene)

    kwargs = fake_client.models.generate_content.call_args.kwargs
    contents = kwargs["contents"]
    assert contents[0].text == compile_request(scene).text
    assert len(contents) == 1 + len(compile_request(scene).attachments)
    for part in contents[1:]:
        assert part.inline_data.mime_type == "image/png"
        assert part.inline_data.data.startswith(PNG_SIGNATURE)


def test_request_config(orchestrator, fake_client, make_image_response, scene, config):
    fake_client.models.generate_content.return_value = make_image_response()

    orchestrator.generate(scene)

    kwargs = fake_client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == config.generation_model
    gen_config = kwargs["config"]
    assert gen_config.image_config.aspect_ratio == "9:16"
    assert gen_config.image_config.image_size == "1K"
    assert "IMAGE" in gen_config.response_modalities


def test_unknown_aspect_ratio_is_passed_through(orchestrator, fake_client, make_image_response):
    fake_client.models.generate_content.return_value = make_image_response()

    orchestrator.generate(MerchRequest(aspect_ratio="5:4", item_type="BEVERAGE"))

    assert fake_client.models.generate_content.call_args.kwargs["config"].image_config.aspect_ratio == "5:4"


def test_jpeg_attachments_are_sent_as_png(orchestrator, fake_client, make_image_response, jpeg_uri):
    fake_client.models.generate_content.return_value = make_image_response()

    orchestrator.generate(ArtRequest(aspect_ratio="1:1", style="NEON_NIGHT", primary_car_image=jpeg_uri))

    image_part = fake_client.models.generate_content.call_args.kwargs["contents"][1]
    assert image_part.inline_data.mime_type == "image/png"
    assert image_part.inline_data.data.startswith(PNG_SIGNATURE)


def test_generate_compiled_uses_caller_prompt(orchestrator, fake_client, make_image_response, images):
    fake_client.models.generate_content.return_value = make_image_response()
    compiled = CompiledPrompt(text="edited DNA prompt")

    result = orchestrator.generate_compiled(compiled, "3:4")

    assert result.prompt_text == "edited DNA prompt"
    assert fake_client.models.generate_content.call_args.kwargs["contents"][0].text == "edited DNA prompt"


# ── Empty responses ───────────────────────────────────────────────────────────

def test_no_image_returns_none(orchestrator, fake_client, make_text_response, scene):
    fake_client.models.generate_content.return_value = make_text_response("I can't draw that.")
    assert orchestrator.generate(scene) is None


def test_no_candidates_returns_none(orchestrator, fake_client, scene):
    fake_client.models.generate_content.return_value = types.GenerateContentResponse(candidates=[])
    assert orchestrator.generate(scene) is None


def test_no_image_can_raise(orchestrator, fake_client, make_text_response, scene):
    fake_client.models.generate_content.return_value = make_text_response("nope")
    with pytest.raises(NoImageInResponse) as exc_info:
        orchestrator.generate(scene, raise_on_empty=True)
    assert isinstance(exc_info.value, GenerationFailed)
    assert exc_info.value.code == "NO_IMAGE_IN_RESPONSE"


def test_only_first_candidate_is_read(png_bytes):
    response = SimpleNamespace(candidates=[
        SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(inline_data=None, text="no")])),
        SimpleNamespace(content=SimpleNamespace(parts=[
            SimpleNamespace(inline_data=SimpleNamespace(data=png_bytes, mime_type="image/png")),
        ])),
    ])
    assert extract_image_url(response) is None


def test_base64_string_inline_data_is_decoded(png_bytes):
    encoded = base64.b64encode(png_bytes).decode("ascii")
    response = SimpleNamespace(candidates=[
        SimpleNamespace(content=SimpleNamespace(parts=[
            SimpleNamespace(inline_data=SimpleNamespace(data=encoded, mime_type=None)),
        ])),
    ])
    url = extract_image_url(response)
    assert split_data_uri(url) == ("image/png", png_bytes)


# ── Failures ──────────────────────────────────────────────────────────────────

def test_transport_error_is_classified_and_logged(orchestrator, fake_client, scene, caplog):
    boom = ConnectionError("socket closed")
    fake_client.models.generate_content.side_effect = boom

    with caplog.at_level(logging.ERROR, logger="livery_studio.orchestrator"):
        with pytest.raises(GenerationFailed) as exc_info:
            orchestrator.generate(scene)

    assert exc_info.value.code == "GENERATION_FAILED"
    assert exc_info.value.__cause__ is boom
    assert "socket closed" in caplog.text


def test_generate_is_called_once_per_request(orchestrator, fake_client, scene):
    fake_client.models.generate_content.side_effect = RuntimeError("503")
    with pytest.raises(GenerationFailed):
        orchestrator.generate(scene)
    assert fake_client.models.generate_content.call_count == 1


# ── Concurrency ───────────────────────────────────────────────────────────────

def test_generate_many_keeps_going_after_a_failure(orchestrator, fake_client, make_image_response, make_text_response, images):
    def _respond(model, contents, config):
        text = contents[0].text
        if "Merchandise" in text:
            raise RuntimeError("quota exceeded")
        if "Holographic" in text:
            return make_text_response("no image today")
        return make_image_response()

    fake_client.models.generate_content.side_effect = _respond
    requests = {
        "poster": SceneRequest(aspect_ratio="9:16", primary_car_image=images["car"]),
        "merch": MerchRequest(aspect_ratio="4:3", item_type="BEVERAGE"),
        "holo": ArtRequest(aspect_ratio="1:1", style="HOLOGRAPHIC"),
    }

    results = orchestrator.generate_many(requests, max_workers=3)

    assert set(results) == {"poster", "merch", "holo"}
    assert isinstance(results["poster"], GenerationResult)
    assert isinstance(results["merch"], GenerationFailed)
    assert results["holo"] is None


def test_generate_many_empty(orchestrator):
    assert orchestrator.generate_many({}) == {}


def test_build_contents_without_attachments():
    parts = build_contents(CompiledPrompt(text="just text"))
    assert len(parts) == 1
    assert parts[0].text == "just text"
