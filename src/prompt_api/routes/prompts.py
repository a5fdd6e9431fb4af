"""
Prompt API routes.

Refinement, scoring, validation and comparison, plus the saved prompt library.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from prompt_engine import Domain, PromptEngine
from prompt_engine.storage import PromptStore
from prompt_engine.tools.prompt_tools import BLOCKING_SEVERITY

from ..dependencies import get_engine, get_store
from ..schemas import (
    CompareRequest,
    EvaluateRequest,
    ProcessRequest,
    SavePromptRequest,
    ValidateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/process")
async def process_prompt(request: ProcessRequest, engine: PromptEngine = Depends(get_engine)):
    """
    Refine a raw prompt.

    Classifies the prompt, picks a template and runs the improvement loop.
    """
    result = engine.process(
        request.raw,
        domain_hint=request.domain,
        style_hint=request.style,
        tone=request.tone,
        target_score=request.target_score,
        max_iterations=request.max_iterations,
    )
    return result.to_dict()


@router.post("/evaluate")
async def evaluate_prompt(request: EvaluateRequest, engine: PromptEngine = Depends(get_engine)):
    """Score a refined prompt against an explicit domain, with per-dimension factors."""
    engine.evaluate(request.raw, request.refined, request.domain)
    return engine.score_breakdown(request.raw, request.refined, request.domain)


@router.post("/validate")
async def validate_prompt(request: ValidateRequest, engine: PromptEngine = Depends(get_engine)):
    domain = request.domain if request.domain is not None else engine.classify(request.prompt)
    findings = engine.validate(request.prompt, domain)
    return {
        "domain": Domain.parse(domain).value,
        "valid": not any(f.severity.rank >= BLOCKING_SEVERITY.rank for f in findings),
        "findings": [f.to_dict() for f in findings],
    }


@router.post("/compare")
async def compare_prompts(request: CompareRequest, engine: PromptEngine = Depends(get_engine)):
    return engine.compare(request.variants, request.domain).to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_prompt(
    request: SavePromptRequest,
    engine: PromptEngine = Depends(get_engine),
    store: PromptStore = Depends(get_store),
):
    """Refine a prompt and save the result to the library."""
    result = engine.process(request.prompt, domain_hint=request.domain)
    metadata = {"tags": request.tags, "is_public": request.is_public}
    if request.description:
        metadata["description"] = request.description
    prompt_id = store.save(result, metadata)
    logger.info(f"Saved prompt {prompt_id} via API")
    return {"id": prompt_id, "record": store.get(prompt_id, record_usage=False).to_dict()}


@router.get("")
async def search_prompts(
    query: str = Query("", description="Text to look for in the original or refined prompt"),
    domain: Optional[str] = Query(None, description="Filter by domain"),
    tags: Optional[List[str]] = Query(None, description="Require every tag"),
    min_score: Optional[float] = Query(None, ge=0.0, le=1.0),
    limit: int = Query(20, ge=1, le=100),
    store: PromptStore = Depends(get_store),
):
    records = store.search(query, domain=domain, tags=tags, min_score=min_score, limit=limit)
    return {"count": len(records), "results": [record.to_dict() for record in records]}


# Declared before /{prompt_id} so "stats" is not taken for an id
@router.get("/stats")
async def prompt_stats(store: PromptStore = Depends(get_store)):
    return store.stats()


@router.get("/{prompt_id}")
async def get_prompt(prompt_id: str, store: PromptStore = Depends(get_store)):
    return store.get(prompt_id).to_dict()
