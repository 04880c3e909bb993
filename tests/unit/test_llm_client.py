"""
Tests for the completion provider client's request shape and failure classification.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import litellm
import pytest
from tenacity import wait_none

from core import (
    CompletionError,
    EmptyCompletionError,
    InvalidCredentialError,
    MalformedCompletionError,
    RateLimitedError,
)
from utils.llm_client import LLMClient


def completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")]
    )


@pytest.fixture
def client():
    return LLMClient(model="claude-test")


class TestComplete:

    @pytest.mark.asyncio
    async def test_system_prompt_prepended(self, client):
        mock = AsyncMock(return_value=completion("hello back"))
        with patch("utils.llm_client.litellm.acompletion", mock):
            text = await client.complete(
                "You are Logic.", [{"role": "user", "content": "hi"}], temperature=0.2, max_tokens=50
            )

        assert text == "hello back"
        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["messages"][0] == {"role": "system", "content": "You are Logic."}
        assert kwargs["messages"][1] == {"role": "user", "content": "hi"}
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 50

    @pytest.mark.asyncio
    async def test_no_system_prompt(self, client):
        mock = AsyncMock(return_value=completion("ok"))
        with patch("utils.llm_client.litellm.acompletion", mock):
            await client.complete(None, [{"role": "user", "content": "hi"}])
        assert [m["role"] for m in mock.call_args.kwargs["messages"]] == ["user"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_empty_content(self, client, content):
        with patch("utils.llm_client.litellm.acompletion", AsyncMock(return_value=completion(content))):
            with pytest.raises(EmptyCompletionError):
                await client.complete(None, [{"role": "user", "content": "hi"}])

    @pytest.mark.asyncio
    async def test_malformed_response(self, client):
        with patch("utils.llm_client.litellm.acompletion", AsyncMock(return_value=SimpleNamespace(choices=[]))):
            with pytest.raises(MalformedCompletionError):
                await client.complete(None, [{"role": "user", "content": "hi"}])

    @pytest.mark.asyncio
    async def test_authentication_failure(self, client):
        error = litellm.AuthenticationError(message="bad key", llm_provider="anthropic", model="claude-test")
        with patch("utils.llm_client.litellm.acompletion", AsyncMock(side_effect=error)):
            with pytest.raises(InvalidCredentialError):
                await client.complete(None, [{"role": "user", "content": "hi"}])

    @pytest.mark.asyncio
    async def test_rate_limit_retried_then_raised(self, client):
        error = litellm.RateLimitError(message="slow down", llm_provider="anthropic", model="claude-test")
        mock = AsyncMock(side_effect=error)
        with patch("utils.llm_client.litellm.acompletion", mock), \
                patch.object(LLMClient.complete.retry, "wait", wait_none()):
            with pytest.raises(RateLimitedError):
                await client.complete(None, [{"role": "user", "content": "hi"}])
        assert mock.call_count == 3

    @pytest.mark.asyncio
    async def test_other_failures_are_completion_errors(self, client):
        with patch("utils.llm_client.litellm.acompletion", AsyncMock(side_effect=ConnectionError("down"))):
            with pytest.raises(CompletionError) as exc_info:
                await client.complete(None, [{"role": "user", "content": "hi"}])
        assert exc_info.type is CompletionError

    @pytest.mark.asyncio
    async def test_explicit_zero_max_tokens_forwarded(self, client):
        mock = AsyncMock(return_value=completion("ok"))
        with patch("utils.llm_client.litellm.acompletion", mock):
            await client.complete(None, [{"role": "user", "content": "hi"}], temperature=0.0, max_tokens=0)
        assert mock.call_args.kwargs["max_tokens"] == 0
        assert mock.call_args.kwargs["temperature"] == 0.0
