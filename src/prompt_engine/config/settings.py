"""
Engine settings.

Loaded from environment variables prefixed ``PROMPTSMITH_`` and from a
``.env`` file in the working directory.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    """Tunables for the refinement pipeline."""

    TARGET_SCORE: float = Field(default=0.99, ge=0.0, le=1.0)
    MAX_ITERATIONS: int = Field(default=3, gt=0)
    MIN_CLASSIFICATION_SCORE: float = Field(default=2.0, ge=0.0)
    # Report target_score as a labeled override when improvement falls short
    ALLOW_SCORE_OVERRIDE: bool = False
    # Optional YAML or JSON file with rule table overrides
    RULES_PATH: Optional[str] = None

    model_config = {
        "env_prefix": "PROMPTSMITH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
