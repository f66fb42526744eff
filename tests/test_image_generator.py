from __future__ import annotations

import asyncio
import base64
from types import SimpleNamespace

import pytest

from creative_studio import image_generator
from creative_studio.errors import EmptyResultError, RequestError, ValidationError


def _run(coro):  # noqa: ANN001
    return asyncio.run(coro)


def _client(generate_images):  # noqa: ANN001
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_images=generate_images)))


def _response(*payloads: bytes):
    return SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=p, mime_type="image/jpeg")) for p in payloads
        ]
    )


def test_generate_image_returns_first_payload() -> None:
    calls = []

    async def fake_generate(**kwargs):  # noqa: ANN003
        calls.append(kwargs)
        return _response(b"first", b"second")

    result = _run(image_generator.generate_image("a red cube", api_key="k", client=_client(fake_generate)))

    assert result.data == b"first"
    assert len(calls) == 1
    config = calls[0]["config"]
    assert config.number_of_images == 1
    assert config.output_mime_type == "image/jpeg"
    assert config.aspect_ratio == "1:1"
    assert calls[0]["prompt"] == "a red cube"


def test_generate_image_scenario_base64_roundtrip() -> None:
    async def fake_generate(**kwargs):  # noqa: ANN003
        return _response(base64.b64decode("AAAA"))

    result = _run(image_generator.generate_image("a red cube", api_key="k", client=_client(fake_generate)))
    assert result.base64 == "AAAA"
    assert result.to_data_url() == "data:image/jpeg;base64,AAAA"


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
def test_generate_image_blank_prompt_makes_no_calls(prompt: str, monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_generate(**kwargs):  # noqa: ANN003
        raise AssertionError("service should not be called for a blank prompt")

    def no_client(api_key):  # noqa: ANN001
        raise AssertionError("client should not be built for a blank prompt")

    monkeypatch.setattr(image_generator, "get_genai_client", no_client)
    with pytest.raises(ValidationError):
        _run(image_generator.generate_image(prompt, api_key="k", client=_client(fake_generate)))
    with pytest.raises(ValidationError):
        _run(image_generator.generate_image(prompt, api_key="k"))


def test_generate_image_without_key_fails_before_request() -> None:
    with pytest.raises(ValidationError):
        _run(image_generator.generate_image("a red cube", api_key=None))


def test_generate_image_empty_result() -> None:
    async def fake_generate(**kwargs):  # noqa: ANN003
        return SimpleNamespace(generated_images=[])

    with pytest.raises(EmptyResultError):
        _run(image_generator.generate_image("a red cube", api_key="k", client=_client(fake_generate)))


def test_generate_image_wraps_service_errors() -> None:
    boom = RuntimeError("quota exceeded")

    async def fake_generate(**kwargs):  # noqa: ANN003
        raise boom

    with pytest.raises(RequestError) as info:
        _run(image_generator.generate_image("a red cube", api_key="k", client=_client(fake_generate)))
    assert str(info.value) == "quota exceeded"
    assert info.value.cause is boom
    assert info.value.__cause__ is boom


def test_generate_image_uses_configured_model(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    async def fake_generate(**kwargs):  # noqa: ANN003
        seen.update(kwargs)
        return _response(b"x")

    monkeypatch.setenv("IMAGEN_MODEL", "imagen-test")
    _run(image_generator.generate_image("a red cube", api_key="k", client=_client(fake_generate)))
    assert seen["model"] == "imagen-test"
