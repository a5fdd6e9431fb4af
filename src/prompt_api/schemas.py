"""
Pydantic schemas for the prompt API.

Responses are the engine's own ``to_dict()`` payloads; only requests are
modeled here.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ProcessRequest(BaseModel):
    """Request schema for refining a raw prompt."""

    raw: str = Field(..., description="The raw prompt text")
    domain: Optional[str] = Field(None, description="Domain hint; ignored when unrecognized")
    style: Optional[str] = Field(None, description="Template id or style hint")
    tone: Optional[str] = Field(None, description="Tone of the output section")
    target_score: Optional[float] = Field(None, ge=0.0, le=1.0)
    max_iterations: Optional[int] = Field(None, ge=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"raw": "make a sql query to get users", "tone": "technical"}
            ]
        }
    }


class EvaluateRequest(BaseModel):
    """Request schema for scoring an already refined prompt."""

    refined: str = Field(..., description="The refined prompt to score")
    raw: str = Field("", description="Original text the prompt was refined from")
    domain: str = Field(..., description="Domain to score against")


class ValidateRequest(BaseModel):
    prompt: str = Field(..., description="The prompt text to validate")
    domain: Optional[str] = Field(None, description="Domain context; detected when omitted")


class CompareRequest(BaseModel):
    variants: List[str] = Field(..., min_length=1, description="Prompt variants to compare")
    domain: Optional[str] = Field(None, description="Domain for every variant")


class SavePromptRequest(BaseModel):
    """Request schema for refining a prompt and saving the result."""

    prompt: str = Field(..., min_length=1, description="The prompt text to refine and save")
    domain: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_public: bool = False


class ToolCallRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Registered tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict)
