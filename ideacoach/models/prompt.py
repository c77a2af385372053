"""
Data models describing an outbound request to the generative-language provider.
"""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TaskKind(str, Enum):
    IDEAS = "ideas"
    ADVICE = "advice"
    QUIZ_OPTIONS = "quiz_options"
    SWOT_ANALYSIS = "swot_analysis"
    TIMELINE = "timeline"
    TIMELINE_MODIFICATION = "timeline_modification"
    SMART_SUGGESTIONS = "smart_suggestions"
    OPTIMIZATION = "optimization"
    DAILY_GOALS = "daily_goals"
    IDEA_SUGGESTIONS = "idea_suggestions"
    BRAIN_DUMP = "brain_dump"
    ASSISTANT_CHAT = "assistant_chat"
    PROGRESS_QUESTION = "progress_question"


class GenerationConfig(BaseModel):
    """Sampling parameters, serialized with the provider's field names."""

    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    topK: Optional[int] = Field(default=None, ge=1)
    topP: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    maxOutputTokens: Optional[int] = Field(default=None, ge=1)

    def to_payload(self) -> Dict[str, Union[int, float]]:
        return self.model_dump(exclude_none=True)


TemplateValue = Union[str, List[str]]


class PromptRequest(BaseModel):
    """A rendered task template plus the behavioral context block."""

    model_config = ConfigDict(frozen=True)

    taskKind: TaskKind
    templateParameters: Dict[str, TemplateValue] = Field(default_factory=dict)
    templateText: str = ""
    contextBlock: str = ""

    def render(self) -> str:
        """Return the final prompt text; the context block always comes last."""
        if not self.contextBlock:
            return self.templateText
        return f"{self.templateText}\n\n{self.contextBlock}"
