"""Tools exposing the engine and the prompt store through ToolRegistry.dispatch.

Every tool returns JSON text in ToolResult.output, or an error string when the
engine or the store rejects the call.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..domains import Domain, Template, Tone
from ..engine import PromptEngine
from ..exceptions import PromptEngineError
from ..models import Severity
from ..storage import PromptStore
from .tool_base import BaseTool, ToolRegistry, ToolResult

logger = logging.getLogger(__name__)

DOMAIN_VALUES = [domain.value for domain in Domain]
TEMPLATE_VALUES = [template.value for template in Template]
TONE_VALUES = [tone.value for tone in Tone]

# Findings at or above this severity make a prompt invalid
BLOCKING_SEVERITY = Severity.HIGH


class ProcessPromptTool(BaseTool):
    """Classify, template, refine and score a raw prompt."""

    name: str = "process_prompt"
    description: str = (
        "Turn a raw prompt into a structured, domain-optimized prompt and score it. "
        "The domain is detected from the text unless one is given."
    )
    parameters: Dict = {
        "type": "object",
        "properties": {
            "raw": {"type": "string", "description": "The raw prompt text"},
            "domain": {"type": "string", "enum": DOMAIN_VALUES, "description": "Domain hint"},
            "style": {"type": "string", "description": f"Template id or style hint ({', '.join(TEMPLATE_VALUES)})"},
            "tone": {"type": "string", "enum": TONE_VALUES, "default": "professional"},
            "target_score": {"type": "number", "minimum": 0, "maximum": 1},
            "max_iterations": {"type": "integer", "minimum": 1},
        },
        "required": ["raw"],
    }

    engine: PromptEngine = Field(exclude=True)

    async def execute(
        self,
        raw: str,
        domain: Optional[str] = None,
        style: Optional[str] = None,
        tone: Optional[str] = None,
        target_score: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> ToolResult:
        try:
            result = self.engine.process(
                raw,
                domain_hint=domain,
                style_hint=style,
                tone=tone,
                target_score=target_score,
                max_iterations=max_iterations,
            )
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response(result.to_dict())


class EvaluatePromptTool(BaseTool):
    """Score a prompt and explain each dimension."""

    name: str = "evaluate_prompt"
    description: str = (
        "Score a prompt on clarity, specificity, structure and completeness. "
        "Pass the original text to see the improvement over it."
    )
    parameters: Dict = {
        "type": "object",
        "properties": {
            "prompt": {"type": "string", "description": "The prompt text to evaluate"},
            "domain": {"type": "string", "enum": DOMAIN_VALUES, "description": "Domain to score against"},
            "original": {"type": "string", "description": "Optional raw text the prompt was refined from"},
        },
        "required": ["prompt"],
    }

    engine: PromptEngine = Field(exclude=True)

    async def execute(self, prompt: str, domain: Optional[str] = None, original: Optional[str] = None) -> ToolResult:
        if not isinstance(prompt, str):
            return self.fail_response("Invalid prompt: must be a string")
        try:
            resolved = domain if domain is not None else self.engine.classify(prompt)
            breakdown = self.engine.score_breakdown(original or "", prompt, resolved)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response({"domain": Domain.parse(resolved).value, **breakdown})


class ValidatePromptTool(BaseTool):
    """List anti-pattern findings for a prompt."""

    name: str = "validate_prompt"
    description: str = "Check a prompt for common issues and domain anti-patterns."
    parameters: Dict = {
        "type": "object",
        "properties": {
            "prompt": {"type": "string", "description": "The prompt text to validate"},
            "domain": {"type": "string", "enum": DOMAIN_VALUES, "description": "Domain context for validation"},
        },
        "required": ["prompt"],
    }

    engine: PromptEngine = Field(exclude=True)

    async def execute(self, prompt: str, domain: Optional[str] = None) -> ToolResult:
        try:
            resolved = domain if domain is not None else self.engine.classify(prompt if isinstance(prompt, str) else "")
            findings = self.engine.validate(prompt, resolved)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response({
            "domain": Domain.parse(resolved).value,
            "valid": not any(f.severity.rank >= BLOCKING_SEVERITY.rank for f in findings),
            "findings": [f.to_dict() for f in findings],
        })


class ComparePromptsTool(BaseTool):
    """Rank prompt variants by overall score."""

    name: str = "compare_prompts"
    description: str = "Refine and score several prompt variants and report which one performs best."
    parameters: Dict = {
        "type": "object",
        "properties": {
            "variants": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "description": "Prompt variants to compare",
            },
            "domain": {"type": "string", "enum": DOMAIN_VALUES, "description": "Domain for every variant"},
        },
        "required": ["variants"],
    }

    engine: PromptEngine = Field(exclude=True)

    async def execute(self, variants: List[str], domain: Optional[str] = None) -> ToolResult:
        try:
            result = self.engine.compare(variants, domain)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response(result.to_dict())


class SavePromptTool(BaseTool):
    """Process a prompt and keep the result in the store."""

    name: str = "save_prompt"
    description: str = "Refine a prompt and save the result to the prompt library for reuse."
    parameters: Dict = {
        "type": "object",
        "properties": {
            "prompt": {"type": "string", "description": "The prompt text to refine and save"},
            "domain": {"type": "string", "enum": DOMAIN_VALUES},
            "description": {"type": "string", "description": "What the prompt is for"},
            "tags": {"type": "array", "items": {"type": "string"}},
            "is_public": {"type": "boolean", "default": False},
        },
        "required": ["prompt"],
    }

    engine: PromptEngine = Field(exclude=True)
    store: PromptStore = Field(exclude=True)

    async def execute(
        self,
        prompt: str,
        domain: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_public: bool = False,
    ) -> ToolResult:
        try:
            result = self.engine.process(prompt, domain_hint=domain)
            metadata: Dict[str, Any] = {"tags": tags or [], "is_public": is_public}
            if description:
                metadata["description"] = description
            prompt_id = self.store.save(result, metadata)
            record = self.store.get(prompt_id, record_usage=False)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response({"id": prompt_id, "record": record.to_dict()})


class SearchPromptsTool(BaseTool):
    """Search saved prompts."""

    name: str = "search_prompts"
    description: str = "Search the prompt library by text, domain, tags and minimum score."
    parameters: Dict = {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Text to look for in the original or refined prompt"},
            "domain": {"type": "string", "enum": DOMAIN_VALUES},
            "tags": {"type": "array", "items": {"type": "string"}},
            "min_score": {"type": "number", "minimum": 0, "maximum": 1},
            "limit": {"type": "integer", "minimum": 1, "maximum": 100, "default": 20},
        },
    }

    store: PromptStore = Field(exclude=True)

    async def execute(
        self,
        query: str = "",
        domain: Optional[str] = None,
        tags: Optional[List[str]] = None,
        min_score: Optional[float] = None,
        limit: int = 20,
    ) -> ToolResult:
        try:
            records = self.store.search(query, domain=domain, tags=tags, min_score=min_score, limit=limit)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response({"count": len(records), "results": [r.to_dict() for r in records]})


class GetPromptTool(BaseTool):
    name: str = "get_prompt"
    description: str = "Retrieve a saved prompt by its id."
    parameters: Dict = {
        "type": "object",
        "properties": {"id": {"type": "string", "description": "The prompt id"}},
        "required": ["id"],
    }

    store: PromptStore = Field(exclude=True)

    async def execute(self, id: str) -> ToolResult:
        try:
            record = self.store.get(id)
        except PromptEngineError as e:
            return self.fail_response(str(e))
        return self.success_response(record.to_dict())


class GetStatsTool(BaseTool):
    name: str = "get_stats"
    description: str = "Report how many prompts are saved and their average scores per domain."
    parameters: Dict = {"type": "object", "properties": {}}

    store: PromptStore = Field(exclude=True)

    async def execute(self) -> ToolResult:
        return self.success_response(self.store.stats())


def create_tool_registry(engine: PromptEngine, store: PromptStore) -> ToolRegistry:
    """Build a registry holding every prompt tool bound to one engine and store."""
    registry = ToolRegistry()
    for tool in (
        ProcessPromptTool(engine=engine),
        EvaluatePromptTool(engine=engine),
        ValidatePromptTool(engine=engine),
        ComparePromptsTool(engine=engine),
        SavePromptTool(engine=engine, store=store),
        SearchPromptsTool(store=store),
        GetPromptTool(store=store),
        GetStatsTool(store=store),
    ):
        registry.register(tool)
    logger.info(f"Registered {len(registry.tools)} prompt tools")
    return registry
