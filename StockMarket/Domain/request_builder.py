"""
Sampling request builder.

Turns upstream JSON blobs, an analysis type and optional free-text context
into an immutable GenerationRequest. Pure construction, no I/O.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from StockMarket.Domain.analysis_type_enum import CompanyAnalysisType, MarketInsightType, parse_choice
from StockMarket.Domain.generation_request import (
    DEFAULT_MAX_TOKENS,
    GenerationRequest,
    ModelPreferences,
    SamplingMessage,
    default_model_preferences,
)
from StockMarket.Domain.prompts import analysis_templates  # noqa: F401  (registers templates)
from StockMarket.Domain.prompts.registry import REGISTRY


@dataclass(frozen=True)
class UnavailableData:
    """Placeholder for a sub-component whose upstream fetch failed."""

    reason: str


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _label(value: str) -> str:
    return value.replace("_", " ")


def _render_section(title: str, value: Any) -> str:
    if isinstance(value, UnavailableData):
        return f"{title}:\nData unavailable: {value.reason}"
    return f"{title}:\n{to_pretty_json(value)}"


def _compose_text(header: str, data: Mapping[str, Any], instruction: str, context: str) -> str:
    parts = [header]
    parts.extend(_render_section(title, value) for title, value in data.items())
    parts.append(f"Analysis Instructions:\n{instruction}")
    if context and context.strip():
        parts.append(f"Additional Context:\n{context}")
    return "\n\n".join(parts)


def _build(
    text: str,
    analysis_type: str,
    subject: str,
    system_prompt: str | None,
    model_preferences: ModelPreferences | None,
    max_tokens: int,
) -> GenerationRequest:
    if system_prompt is None:
        system_prompt = REGISTRY.get("analysis.system").render(
            analysis_type=_label(analysis_type), subject=subject
        )
    return GenerationRequest(
        messages=(SamplingMessage.user_text(text),),
        system_prompt=system_prompt,
        model_preferences=model_preferences or default_model_preferences(),
        max_tokens=max_tokens,
    )


def build_company_analysis_request(
    ticker: str,
    data: Mapping[str, Any],
    analysis_type: CompanyAnalysisType | str = CompanyAnalysisType.COMPREHENSIVE,
    context: str = "",
    *,
    system_prompt: str | None = None,
    model_preferences: ModelPreferences | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> GenerationRequest:
    """
    Build the request for a single-company analysis.

    ``data`` maps a section title to a JSON-serialisable value, or to
    UnavailableData when that sub-component could not be fetched. Sections
    are embedded in insertion order.
    """
    kind = parse_choice(CompanyAnalysisType, analysis_type, "analysis_type")
    ticker = ticker.upper()
    instruction = REGISTRY.get(f"company_analysis.{kind.value}").render(ticker=ticker)
    header = f"Company: {ticker}\nRequested analysis: {_label(kind.value)}"
    text = _compose_text(header, data, instruction, context)
    return _build(text, kind.value, ticker, system_prompt, model_preferences, max_tokens)


def build_market_insights_request(
    data: Mapping[str, Any],
    market_focus: MarketInsightType | str = MarketInsightType.OVERALL_MARKET,
    context: str = "",
    *,
    system_prompt: str | None = None,
    model_preferences: ModelPreferences | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> GenerationRequest:
    kind = parse_choice(MarketInsightType, market_focus, "market_focus")
    instruction = REGISTRY.get(f"market_insights.{kind.value}").render()
    header = f"Market focus: {_label(kind.value)}"
    text = _compose_text(header, data, instruction, context)
    return _build(text, kind.value, "the market", system_prompt, model_preferences, max_tokens)
