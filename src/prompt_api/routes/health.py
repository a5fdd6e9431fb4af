"""
Health and discovery routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from prompt_engine import PromptEngine

from ..config import settings
from ..dependencies import get_engine

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns application status and version information.
    """
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME,
    }


@router.get("/domains")
async def list_domains(engine: PromptEngine = Depends(get_engine)):
    """List supported domains with their default templates."""
    domains = engine.domains()
    return {"domains": domains, "total": len(domains)}


@router.get("/domains/{domain}/system-prompt")
async def get_system_prompt(domain: str, tone: Optional[str] = None, engine: PromptEngine = Depends(get_engine)):
    """System message for a model answering prompts in this domain."""
    return {"domain": domain, "tone": tone, "system_prompt": engine.system_prompt(domain, tone)}
