"""
Domain model for a single prompt taken from assistant history.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PromptRecord:
    """
    A raw user prompt with the metadata the report layer needs.

    Attributes:
        text: Prompt exactly as submitted
        timestamp: When the prompt was submitted, if known
        session_id: Session the prompt belongs to
        project: Working directory / project path of the session
    """
    text: str
    timestamp: Optional[datetime] = None
    session_id: Optional[str] = None
    project: Optional[str] = None

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp is not None
