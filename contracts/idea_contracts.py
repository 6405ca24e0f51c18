"""Idea contracts: generated ideas, their enrichments and batch snapshots."""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class IdeaStatus(str, Enum):
    """Verification lifecycle of an idea."""
    GENERATED = "GENERATED"
    VERIFYING = "VERIFYING"
    VERIFIED = "VERIFIED"
    FAILED = "FAILED"


class LogType(str, Enum):
    """Severity of a session log event."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SimilarProject(BaseModel):
    """An existing project that overlaps with an idea."""
    name: str
    url: Optional[str] = None
    description: Optional[str] = None


class VerificationResult(BaseModel):
    """Outcome of a uniqueness check."""
    is_unique: bool = True
    similar_projects: List[SimilarProject] = Field(default_factory=list)
    notes: str = ""
    pivot_suggestion: Optional[str] = None


class Blueprint(BaseModel):
    """Expanded technical and business writeup for one idea."""
    overview: str
    tokenomics: str
    roadmap: str
    technical_architecture: str
    contract_code: Optional[str] = None
    frontend_snippet: Optional[str] = None
    deployment_url: Optional[str] = None


class Idea(BaseModel):
    """One generated project concept."""
    id: str
    title: str
    tagline: str = ""
    description: str = ""
    ecosystem: str = "Unknown"
    sector: str = "Unspecified"
    degen_score: int = Field(50, ge=0, le=100)
    features: List[str] = Field(default_factory=list)
    status: IdeaStatus = IdeaStatus.GENERATED
    verification_result: Optional[VerificationResult] = None
    blueprint: Optional[Blueprint] = None
    language: Optional[str] = None


class IdeaBatch(BaseModel):
    """Snapshot of one generation run. Never mutated after creation."""
    id: str
    label: str
    created_at: int = Field(..., description="Epoch milliseconds")
    ideas: List[Idea] = Field(default_factory=list)


class LogMessage(BaseModel):
    """A single entry of the session's event log."""
    id: str
    text: str
    type: LogType = LogType.INFO
    timestamp: int = Field(..., description="Epoch milliseconds")
