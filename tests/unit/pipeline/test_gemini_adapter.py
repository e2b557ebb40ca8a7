from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gemini_study.core.types import BinaryPart, TextPart
from gemini_study.pipeline.adapters.base import (
    EmbeddingAdapter,
    GenerationAdapter,
    ModelAdapter,
)
from gemini_study.pipeline.adapters.gemini import GoogleGenAIAdapter

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.embed_content = AsyncMock()
    return client


def test_adapter_satisfies_protocols(mock_client):
    adapter = GoogleGenAIAdapter("key", client=mock_client)

    assert isinstance(adapter, GenerationAdapter)
    assert isinstance(adapter, EmbeddingAdapter)
    assert isinstance(adapter, ModelAdapter)


def test_client_is_built_from_api_key_when_not_given():
    with patch("gemini_study.pipeline.adapters.gemini.genai.Client") as client_cls:
        GoogleGenAIAdapter("secret-key")

    client_cls.assert_called_once_with(api_key="secret-key")


@pytest.mark.asyncio
async def test_generate_sends_text_and_binary_parts(mock_client):
    mock_client.aio.models.generate_content.return_value = MagicMock(text='{"a": 1}')
    adapter = GoogleGenAIAdapter("key", client=mock_client)
    audio = b"\xff\xfb\x90audio"

    text = await adapter.generate(
        model_name="gemini-2.5-flash",
        api_parts=(TextPart("instr"), BinaryPart(audio, "audio/mpeg")),
    )

    assert text == '{"a": 1}'
    call = mock_client.aio.models.generate_content.await_args
    assert call.kwargs["model"] == "gemini-2.5-flash"
    text_part, blob_part = call.kwargs["contents"]
    assert text_part.text == "instr"
    # Bytes are handed over raw, not pre-encoded
    assert blob_part.inline_data.data == audio
    assert blob_part.inline_data.mime_type == "audio/mpeg"


@pytest.mark.asyncio
async def test_generate_returns_empty_string_when_no_text(mock_client):
    mock_client.aio.models.generate_content.return_value = MagicMock(text=None)
    adapter = GoogleGenAIAdapter("key", client=mock_client)

    assert await adapter.generate(model_name="m", api_parts=(TextPart("x"),)) == ""


@pytest.mark.asyncio
async def test_sdk_errors_propagate_unchanged(mock_client):
    error = RuntimeError("429 RESOURCE_EXHAUSTED")
    mock_client.aio.models.generate_content.side_effect = error
    adapter = GoogleGenAIAdapter("key", client=mock_client)

    with pytest.raises(RuntimeError) as exc_info:
        await adapter.generate(model_name="m", api_parts=(TextPart("x"),))

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_embed_returns_first_vector(mock_client):
    embedding = MagicMock(values=[0.5, -0.25])
    mock_client.aio.models.embed_content.return_value = MagicMock(
        embeddings=[embedding]
    )
    adapter = GoogleGenAIAdapter("key", client=mock_client)

    assert await adapter.embed(model_name="gemini-embedding-001", text="t") == [
        0.5,
        -0.25,
    ]
    mock_client.aio.models.embed_content.assert_awaited_once_with(
        model="gemini-embedding-001", contents="t"
    )


@pytest.mark.asyncio
async def test_embed_without_embeddings_returns_empty_list(mock_client):
    mock_client.aio.models.embed_content.return_value = MagicMock(embeddings=None)
    adapter = GoogleGenAIAdapter("key", client=mock_client)

    assert await adapter.embed(model_name="m", text="t") == []


def test_unknown_part_type_is_rejected():
    with pytest.raises(TypeError, match="Unsupported part type"):
        GoogleGenAIAdapter._to_sdk_part("not a part")
