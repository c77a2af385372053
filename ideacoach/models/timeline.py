"""
Data models for AI-generated journey timelines and their modification plans.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimelineStage(BaseModel):
    """One ordered stage of a business journey."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    durationLabel: str = Field(..., alias="duration")
    keyTasks: List[str]
    successMetrics: List[str]
    emoji: str


class ChangeOp(BaseModel):
    """A single edit to an existing timeline."""

    model_config = ConfigDict(frozen=True)

    action: Literal["add", "remove", "reorder", "modify"]
    targetStageId: Optional[str] = None
    newStage: Optional[TimelineStage] = None
    newPosition: Optional[int] = Field(default=None, ge=0)


class SuggestedReminder(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    message: str = ""
    daysFromNow: int = Field(default=1, ge=0)


class SuggestedNote(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    category: str = "Planning"


class TimelineModificationPlan(BaseModel):
    """The model's plan for changing a timeline in response to a user request."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["add", "remove", "reorder", "modify", "restructure"]
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str
    changes: List[ChangeOp] = Field(default_factory=list)
    suggestedReminders: List[SuggestedReminder] = Field(default_factory=list)
    suggestedNotes: List[SuggestedNote] = Field(default_factory=list)


class OptimizationOrder(BaseModel):
    """A proposed ordering of existing stages, by stage id."""

    model_config = ConfigDict(frozen=True)

    optimizedOrder: List[str]
    reasoning: str = ""
