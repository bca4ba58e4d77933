# StockMarket/Domain/prompts/registry.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

PromptKind = Literal["system", "user"]
logger = logging.getLogger(__name__)


class _MissingAsEmpty(dict):
    """
    Mapping for str.format_map that renders any missing key as an empty string,
    so optional sections can be left out of render(...) calls.
    """

    def __missing__(self, key: str) -> str:
        return ""


@dataclass(frozen=True)
class PromptSpec:
    id: str
    kind: PromptKind = "user"
    template: str = ""
    required_vars: frozenset[str] = field(default_factory=frozenset)
    version: str = "v1"

    def render(self, **kwargs: Any) -> str:
        """
        Render the template.

        Non-string values are JSON-encoded (indent=2) before substitution.
        Every name in ``required_vars`` must be passed, anything else that the
        template references but is not passed renders as an empty string.
        """
        missing = self.required_vars - kwargs.keys()
        if missing:
            raise KeyError(f"Prompt {self.id!r} is missing variables: {sorted(missing)}")

        safe_mapping = _MissingAsEmpty()
        for k, v in kwargs.items():
            if isinstance(v, str):
                safe_mapping[k] = v
            else:
                safe_mapping[k] = json.dumps(v, ensure_ascii=False, indent=2, default=str)

        return self.template.format_map(safe_mapping)


class PromptRegistry:
    def __init__(self) -> None:
        self._by_key: dict[tuple[str, str], PromptSpec] = {}

    def register(self, spec: PromptSpec) -> PromptSpec:
        key = (spec.id, spec.version)
        if key in self._by_key:
            raise KeyError(f"Duplicate prompt: {key}")
        self._by_key[key] = spec
        return spec

    def get(self, id: str, version: str = "v1") -> PromptSpec:
        try:
            return self._by_key[(id, version)]
        except KeyError as e:
            raise KeyError(
                f"Unknown prompt id/version: ({id!r}, {version!r}), registered prompts are {self.debug_keys()}"
            ) from e

    def debug_keys(self) -> list[tuple[str, str]]:
        return sorted(self._by_key.keys())


REGISTRY = PromptRegistry()


def register_prompt(id: str, *, kind: PromptKind = "user", required_vars: set[str] | None = None, version: str = "v1"):
    """Decorator-style helper: ``register_prompt("x")(TEMPLATE)`` registers and returns the spec."""

    def _register(template: str) -> PromptSpec:
        return REGISTRY.register(
            PromptSpec(
                id=id,
                kind=kind,
                template=template,
                required_vars=frozenset(required_vars or ()),
                version=version,
            )
        )

    return _register
