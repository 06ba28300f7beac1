from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commitgpt.config import (
    DEFAULT_CONTEXT_PREFIX,
    DEFAULT_IGNORE_SPACE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SUGGESTIONS,
    MAX_MAX_TOKENS,
    MAX_SUGGESTIONS,
    MIN_MAX_TOKENS,
    MIN_SUGGESTIONS,
)


class Model(str, Enum):
    """Completion models commitgpt can ask for. Values are wire names."""

    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_3_5_TURBO_16K = "gpt-3.5-turbo-16k"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"

    @classmethod
    def parse(cls, name: str) -> "Model":
        """Look *name* up in the alias table, rejecting anything unknown."""

        try:
            return MODEL_ALIASES[name.strip().lower()]
        except KeyError:
            known = ", ".join(sorted(MODEL_ALIASES))
            raise ValueError(f"unknown model {name!r}, expected one of: {known}") from None

    def __str__(self) -> str:
        return self.value


MODEL_ALIASES: dict[str, Model] = {
    "gpt-3.5-turbo": Model.GPT_3_5_TURBO,
    "gpt-3.5": Model.GPT_3_5_TURBO,
    "chat-3.5-turbo": Model.GPT_3_5_TURBO,
    "gpt-3.5-turbo-16k": Model.GPT_3_5_TURBO_16K,
    "gpt-3.5-16k": Model.GPT_3_5_TURBO_16K,
    "gpt-4": Model.GPT_4,
    "gpt-4-turbo": Model.GPT_4_TURBO,
    "gpt-4o": Model.GPT_4O,
    "gpt-4o-mini": Model.GPT_4O_MINI,
}

DEFAULT_MODEL = Model.GPT_3_5_TURBO


def coerce_model(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, Model):
        return Model.parse(value)
    return value


class Settings(BaseModel):
    """Effective settings for one run, frozen once resolved."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    context_prefix: str = DEFAULT_CONTEXT_PREFIX
    suggestions: int = Field(DEFAULT_SUGGESTIONS, ge=MIN_SUGGESTIONS, le=MAX_SUGGESTIONS)
    ignore_space: bool = DEFAULT_IGNORE_SPACE
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=MIN_MAX_TOKENS, le=MAX_MAX_TOKENS)
    model: Model = DEFAULT_MODEL

    @field_validator("model", mode="before")
    @classmethod
    def parse_model(cls, value: Any) -> Any:
        return coerce_model(value)

    def __repr__(self) -> str:
        return (
            f"Settings(api_key='***', suggestions={self.suggestions}, "
            f"ignore_space={self.ignore_space}, max_tokens={self.max_tokens}, "
            f"model={self.model.value!r})"
        )

    __str__ = __repr__


class Overrides(BaseModel):
    """Invocation-time values; ``None`` means "not given"."""

    model_config = ConfigDict(frozen=True)

    suggestions: Optional[int] = Field(None, ge=MIN_SUGGESTIONS, le=MAX_SUGGESTIONS)
    ignore_space: Optional[bool] = None
    max_tokens: Optional[int] = Field(None, ge=MIN_MAX_TOKENS, le=MAX_MAX_TOKENS)
    model: Optional[Model] = None

    @field_validator("model", mode="before")
    @classmethod
    def parse_model(cls, value: Any) -> Any:
        return coerce_model(value)


class PromptMessages(BaseModel):
    """The system/user message pair sent to the completion service."""

    model_config = ConfigDict(frozen=True)

    system: str
    user: str


class CompletionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: Model
    n: int = Field(ge=MIN_SUGGESTIONS, le=MAX_SUGGESTIONS)
    max_tokens: int = Field(ge=MIN_MAX_TOKENS, le=MAX_MAX_TOKENS)
    messages: PromptMessages

    @classmethod
    def from_settings(cls, settings: Settings, messages: PromptMessages) -> "CompletionRequest":
        return cls(
            model=settings.model,
            n=settings.suggestions,
            max_tokens=settings.max_tokens,
            messages=messages,
        )


CompletionResponse = List[str]
