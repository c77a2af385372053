"""
Shared data models for business ideas and idea analysis.
"""

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class IdeaCategory(str, Enum):
    TECHNOLOGY = "Technology"
    SERVICE = "Service"
    CREATIVE = "Creative"
    RETAIL = "Retail"
    CONSULTING = "Consulting"
    EDUCATION = "Education"
    GENERAL = "General"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Level(str, Enum):
    """Market demand and competition scale."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class BusinessIdeaDraft(BaseModel):
    """Model representing a generated business idea before the user saves it."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    title: str = Field(..., min_length=1, description="Concise business name")
    description: str = Field(..., min_length=1, description="2-3 sentences on the concept and value proposition")
    category: IdeaCategory
    difficulty: Difficulty
    estimatedRevenueRange: str = Field(..., description="e.g. $50K - $150K/year")
    launchTimeframe: str = Field(..., description="e.g. 6-8 weeks")
    requiredSkills: List[str] = Field(default_factory=list)
    startupCostRange: str = Field(..., description="e.g. $5K - $15K")
    profitMarginRange: str = Field(..., description="e.g. 40-60%")
    marketDemand: Level
    competitionLevel: Level
    personalNote: str = Field(..., description="Why this idea fits the user's profile")


class QuizOptionSet(BaseModel):
    """Options offered for one onboarding quiz step."""

    model_config = ConfigDict(frozen=True)

    stepCategory: Literal["skills", "personality", "interests"]
    options: List[str] = Field(default_factory=list)


class SWOTAnalysis(BaseModel):
    """Viability score plus SWOT-style lists for a business idea."""

    model_config = ConfigDict(frozen=True)

    viabilityScore: int = Field(..., ge=0, le=100)
    strengths: List[str] = Field(..., min_length=1)
    weaknesses: List[str] = Field(..., min_length=1)
    opportunities: List[str] = Field(..., min_length=1)
    threats: List[str] = Field(..., min_length=1)
    recommendations: List[str] = Field(..., min_length=1)
