from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SAMPLING_METHOD = "sampling/createMessage"

DEFAULT_SYSTEM_PROMPT = (
    "You are an experienced financial analyst. Base every statement on the data "
    "provided, separate facts from interpretation, and call out missing data "
    "explicitly instead of guessing."
)
DEFAULT_MAX_TOKENS = 2000
DEFAULT_MODEL_HINTS = ("claude-3-5-sonnet", "gpt-4o")


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TextContent(_WireModel):
    kind: Literal["text"] = Field("text", alias="type")
    text: str


class SamplingMessage(_WireModel):
    role: Literal["user"] = "user"
    content: TextContent

    @classmethod
    def user_text(cls, text: str) -> "SamplingMessage":
        return cls(content=TextContent(text=text))


class ModelHint(_WireModel):
    name: str


class ModelPreferences(_WireModel):
    """Soft preferences for the client's model choice; the priorities are independent."""

    hints: tuple[ModelHint, ...] = ()
    intelligence_priority: float = Field(0.8, ge=0.0, le=1.0)
    speed_priority: float = Field(0.5, ge=0.0, le=1.0)
    cost_priority: float = Field(0.3, ge=0.0, le=1.0)


def default_model_preferences() -> ModelPreferences:
    return ModelPreferences(hints=tuple(ModelHint(name=n) for n in DEFAULT_MODEL_HINTS))


class GenerationRequest(_WireModel):
    """
    Value object handed to the sampling transport.

    Built fresh per tool invocation and immutable afterwards. ``to_params``
    yields the ``sampling/createMessage`` params using the protocol's field
    names (messages, systemPrompt, modelPreferences, maxTokens).
    """

    messages: tuple[SamplingMessage, ...] = Field(min_length=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    model_preferences: ModelPreferences = Field(default_factory=default_model_preferences)
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)

    @property
    def prompt_text(self) -> str:
        return "\n\n".join(m.content.text for m in self.messages)

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
