"""
Data models for smart suggestions about an in-progress business journey.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["high", "medium", "low"]


class NextAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    priority: Priority = "medium"
    estimatedTime: str = ""


class ImprovementOpportunity(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: str
    suggestion: str
    impact: Priority = "medium"


class RiskItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk: str
    severity: Priority = "medium"
    mitigation: str = ""


class ResourceRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    type: str = ""
    description: str = ""
    url: Optional[str] = None


class MilestoneAdjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    stageId: Optional[str] = None
    suggestion: str
    reason: str = ""


class SmartSuggestionBundle(BaseModel):
    """Structured suggestions returned for the user's current journey."""

    model_config = ConfigDict(frozen=True)

    nextActions: List[NextAction] = Field(default_factory=list)
    improvementOpportunities: List[ImprovementOpportunity] = Field(default_factory=list)
    riskItems: List[RiskItem] = Field(default_factory=list)
    resourceRecommendations: List[ResourceRecommendation] = Field(default_factory=list)
    milestoneAdjustments: List[MilestoneAdjustment] = Field(default_factory=list)
