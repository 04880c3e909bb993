"""
Completion Provider client using LiteLLM for multi-provider support.

Switch providers by changing the model string, e.g.
    - "claude-sonnet-4-20250514" (Anthropic)
    - "gpt-4o" (OpenAI)

Provider failures are translated into the CompletionError family so callers
never see a provider-specific exception.
"""

from typing import List, Dict, Optional

import litellm
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config.settings import settings
from core import (
    get_logger,
    CompletionError,
    InvalidCredentialError,
    RateLimitedError,
    MalformedCompletionError,
    EmptyCompletionError,
)

logger = get_logger(__name__)

# Configure LiteLLM
litellm.set_verbose = False  # Set True for debugging


def _extract_text(response, model: str) -> str:
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise MalformedCompletionError(model=model, details=str(e)) from e
    if content is not None and not isinstance(content, str):
        raise MalformedCompletionError(model=model, details=f"content is {type(content).__name__}")
    if not content or not content.strip():
        raise EmptyCompletionError(model=model)
    return content


class LLMClient:
    """
    Unified completion client.

    Usage:
        client = LLMClient()
        text = await client.complete("You are Logic.", [{"role": "user", "content": "hi"}])
    """

    def __init__(self, model: Optional[str] = None, api_key: Optional[str] = None):
        """
        Args:
            model: Model identifier, defaults to settings.MODEL_CONVERSATION
            api_key: Explicit key; LiteLLM reads provider env vars when omitted
        """
        self.model = model or settings.MODEL_CONVERSATION
        self.api_key = api_key
        logger.info("LLM client initialized", model=self.model)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(RateLimitedError),
        reraise=True,
    )
    async def complete(
        self,
        system_prompt: Optional[str],
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate a completion.

        Args:
            system_prompt: Optional system prompt, sent as the first message
            messages: Role-tagged messages in conversation order
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Returns:
            Generated response text

        Raises:
            InvalidCredentialError: Provider rejected the API key
            RateLimitedError: Still rate-limited after retries
            MalformedCompletionError: Response could not be interpreted
            EmptyCompletionError: Response carried no text
            CompletionError: Any other provider failure
        """
        request: List[Dict[str, str]] = []
        if system_prompt:
            request.append({"role": "system", "content": system_prompt})
        request.extend(messages)

        kwargs = {}
        if self.api_key:
            kwargs["api_key"] = self.api_key

        logger.debug("LLM request", model=self.model, message_count=len(request))

        try:
            response = await litellm.acompletion(
                model=self.model,
                messages=request,
                temperature=settings.COMPLETION_TEMPERATURE if temperature is None else temperature,
                max_tokens=settings.COMPLETION_MAX_TOKENS if max_tokens is None else max_tokens,
                **kwargs,
            )
        except litellm.AuthenticationError as e:
            logger.error("LLM authentication failed", model=self.model)
            raise InvalidCredentialError(model=self.model, details=str(e)) from e
        except litellm.RateLimitError as e:
            logger.warning("LLM rate limited", model=self.model)
            raise RateLimitedError(model=self.model, details=str(e)) from e
        except Exception as e:
            logger.error("LLM request failed", model=self.model, error=str(e))
            raise CompletionError(model=self.model, details=str(e)) from e

        content = _extract_text(response, self.model)
        logger.debug("LLM response", model=self.model, response_length=len(content))
        return content
