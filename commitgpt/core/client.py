#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Module for requesting commit message candidates from OpenAI."""

import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx
import openai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.outputs import LLMResult
from langchain_openai import ChatOpenAI

from commitgpt.config import DEFAULT_TIMEOUT
from commitgpt.errors import CompletionTimeoutError, FetchDataError, MissingContentError
from commitgpt.logger import commitgpt_logger
from commitgpt.schemas import CompletionRequest, CompletionResponse, PromptMessages


@dataclass(frozen=True)
class ClientConfig:
    """Transport settings for CompletionClient.

    Attributes:
        api_key: Bearer token for the completion endpoint.
        base_url: Alternative endpoint; ``None`` uses OpenAI's default.
        timeout: Deadline for one request, in seconds.
        http_client: Pre-built httpx client, mainly for tests.
    """

    api_key: str
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    http_client: Optional[httpx.Client] = None

    def __repr__(self) -> str:
        return f"ClientConfig(api_key='***', base_url={self.base_url!r}, timeout={self.timeout})"


class CompletionClient:
    """Send one chat completion request and return the candidate texts.

    Every call is a single exchange: no retries and no backoff. The request
    is bounded by ``ClientConfig.timeout``.

    Attributes:
        config (ClientConfig): Explicit transport configuration.
    """

    # --- Initialization ---
    def __init__(
        self,
        config: ClientConfig,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or commitgpt_logger(__name__)
        self.config = config
        self._logger.debug("Initializing CompletionClient with %r", config)

    # --- Public methods ---
    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Request ``request.n`` commit message candidates.

        Args:
            request: Model, choice count, token cap and prompt messages.

        Returns:
            Candidate texts in the order the service returned them.

        Raises:
            FetchDataError: If the service answers with a non-success status
                or cannot be reached.
            CompletionTimeoutError: If the request exceeds its deadline.
            MissingContentError: If any choice has no generated text.
        """
        self._logger.debug(
            "Requesting %d candidate(s) from %s (max tokens: %d)",
            request.n,
            request.model.value,
            request.max_tokens,
        )

        llm = self._build_model(request)
        messages = self._build_messages(request.messages)

        try:
            result = llm.generate([messages])
        except openai.APITimeoutError as exc:
            self._logger.error("Completion request timed out after %.1fs", self.config.timeout)
            raise CompletionTimeoutError(
                f"no response from openai within {self.config.timeout:g} seconds"
            ) from exc
        except openai.APIStatusError as exc:
            body = exc.response.text
            self._logger.error("Completion request failed with status %d", exc.status_code)
            raise FetchDataError(body) from exc
        except openai.APIConnectionError as exc:
            self._logger.error("Unable to reach the completion service: %s", exc)
            raise FetchDataError(str(exc)) from exc

        candidates = self._extract_candidates(result)
        self._logger.debug("Received %d candidate(s)", len(candidates))
        return candidates

    # --- Private methods ---
    def _build_model(self, request: CompletionRequest) -> BaseChatModel:
        """Build a ChatOpenAI instance configured for *request*."""

        self._logger.debug("Building ChatOpenAI model with name: %s", request.model.value)

        return ChatOpenAI(
            model=request.model.value,
            n=request.n,
            # ChatOpenAI sends its own max_tokens as max_completion_tokens.
            extra_body={"max_tokens": request.max_tokens},
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
            http_client=self.config.http_client,
        )

    def _build_messages(self, prompt: PromptMessages) -> List[BaseMessage]:
        return [
            SystemMessage(content=prompt.system),
            HumanMessage(content=prompt.user),
        ]

    def _extract_candidates(self, result: LLMResult) -> CompletionResponse:
        generations = result.generations[0] if result.generations else []
        if not generations:
            self._logger.error("Completion response contained no choices")
            raise MissingContentError("response from openai contains no choices")

        candidates: CompletionResponse = []
        for index, generation in enumerate(generations):
            text = generation.text
            if not text:
                self._logger.error("Choice %d has no generated content", index)
                raise MissingContentError(f"choice {index} from openai has no message content")
            candidates.append(text)

        return candidates

    # --- Dunder methods ---
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config!r})"
