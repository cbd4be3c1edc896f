# src/storycred/normalize/schema.py
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple, Union
from pydantic import BaseModel, Field, field_validator


class VerificationStatus(str, Enum):
    FAKE = "fake"
    REAL = "real"
    UNVERIFIED = "unverified"
    INVESTIGATING = "investigating"
    DEBUNKED = "debunked"


class VoteChoice(str, Enum):
    CREDIBLE = "credible"
    SUSPICIOUS = "suspicious"
    FAKE = "fake"


class Tally(BaseModel):
    credible: int = Field(default=0, ge=0, description="Votes finding the story credible")
    suspicious: int = Field(default=0, ge=0, description="Votes finding it suspicious")
    fake: int = Field(default=0, ge=0, description="Votes finding it fake")

    @property
    def total(self) -> int:
        return self.credible + self.suspicious + self.fake

    def count(self, choice: Union[VoteChoice, str]) -> int:
        return getattr(self, VoteChoice(choice).value)

    def incremented(self, choice: Union[VoteChoice, str], delta: int = 1) -> "Tally":
        """Return a new Tally with `delta` added to one counter (validated, never negative)."""
        counts = self.model_dump()
        counts[VoteChoice(choice).value] += delta
        return Tally(**counts)

    class Config:
        frozen = True


class Story(BaseModel):
    id: str = Field(..., description="Stable, opaque story identifier")
    title: str = Field(default="", description="Headline shown to users")
    description: str = Field(default="", description="Short summary of the claim")
    sources: List[str] = Field(
        default_factory=list, description="Source identifiers, in publication order"
    )
    spread: float = Field(..., ge=0, le=100, description="Audience penetration (%)")
    confidence: float = Field(..., ge=0, le=1, description="Prior confidence (0-1)")
    region: str = Field(default="Global", description="Region the story circulates in")
    coordinates: Tuple[float, float] = Field(default=(0.0, 0.0))
    verification_status: VerificationStatus = Field(..., alias="verificationStatus")
    date_detected: Optional[datetime] = Field(None, alias="dateDetected")
    votes: Tally = Field(default_factory=Tally)
    category: str = Field(default="", description="Display label only")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("story id must not be empty")
        return v

    def with_votes(self, votes: Tally) -> "Story":
        """Return a copy of this story carrying a different tally."""
        return self.model_copy(update={"votes": votes})

    class Config:
        frozen = True
        populate_by_name = True


class Factor(BaseModel):
    name: str
    score: float = Field(..., ge=0, le=1)
    description: str

    class Config:
        frozen = True


class Explanation(BaseModel):
    factors: List[Factor] = Field(default_factory=list)
    evidence: List[str] = Field(default_factory=list)
    conclusion: str = ""

    class Config:
        frozen = True


class AnalysisResult(BaseModel):
    sentiment: float
    topics: List[str]
    entities: List[str]
    credibility_score: float = Field(..., ge=0, le=1)
    explanation: Explanation

    class Config:
        frozen = True


class VoteRecord(BaseModel):
    user_id: str
    story_id: str
    choice: VoteChoice
    cast_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> Tuple[str, str]:
        return (self.user_id, self.story_id)

    class Config:
        frozen = True
