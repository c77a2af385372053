"""
Read-only snapshot of the user's accumulated behavioral and preference data.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    response: str = ""


class NoteEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    category: Optional[str] = None


class BehaviorSnapshot(BaseModel):
    """Everything the prompt context block can draw on. All fields are optional."""

    model_config = ConfigDict(frozen=True)

    activityCounts: Dict[str, int] = Field(default_factory=dict)
    featureUsage: Dict[str, int] = Field(default_factory=dict)
    focusKeywords: List[str] = Field(default_factory=list)
    preferredIndustries: List[str] = Field(default_factory=list)
    recentConversations: List[ConversationEntry] = Field(default_factory=list)
    recentNotes: List[NoteEntry] = Field(default_factory=list)
    goalCompletionRate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    aiInteractionCount: Optional[int] = Field(default=None, ge=0)
    preferredReminderHours: List[int] = Field(default_factory=list)
