"""
Prompt persistence interface.

The engine never calls a store itself; the tool layer and the API save and
look up the RefinedPrompt values the engine produces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..domains import Domain, Template
from ..models import QualityScore


@dataclass(frozen=True)
class PromptRecord:
    """A stored refined prompt plus its persistence fields."""

    id: str
    original: str
    refined: str
    domain: Domain
    template: Template
    score: QualityScore
    created_at: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)
    tags: Sequence[str] = ()
    is_public: bool = False
    usage_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original,
            "refined": self.refined,
            "domain": self.domain.value,
            "template": self.template.value,
            "score": self.score.to_dict(),
            "metadata": dict(self.metadata),
            "tags": list(self.tags),
            "is_public": self.is_public,
            "usage_count": self.usage_count,
            "created_at": self.created_at.isoformat(),
        }


class PromptStore(ABC):
    """
    Interface for prompt persistence.

    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def save(self, refined_prompt, metadata: Optional[Dict[str, Any]] = None) -> str:
        """
        Persist a RefinedPrompt.

        Args:
            refined_prompt: The RefinedPrompt to store
            metadata: Optional extra fields; ``tags`` and ``is_public`` are
                lifted onto the record

        Returns:
            The new record id
        """
        pass

    @abstractmethod
    def get(self, prompt_id: str, record_usage: bool = True) -> PromptRecord:
        """
        Fetch a record and, unless record_usage is False, count the use.

        Raises:
            PromptNotFoundError: If no record has this id
        """
        pass

    @abstractmethod
    def search(
        self,
        query: str = "",
        domain: Optional[Domain] = None,
        tags: Optional[Sequence[str]] = None,
        min_score: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[PromptRecord]:
        """
        Find records, best overall score first, newest first on ties.

        Args:
            query: Case-insensitive substring of the original or refined text
            domain: Only records of this domain
            tags: Only records carrying every one of these tags
            min_score: Only records with overall score at or above this
            limit: Maximum number of records to return
        """
        pass

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        """Record counts and average score, overall and per domain."""
        pass
