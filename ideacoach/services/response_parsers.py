"""
Parsers that turn raw provider text into typed models.

The line-based parsers (ideas, quiz options, SWOT, daily goals) and the
brain-dump parser are tolerant: they never raise and backfill defaults
instead. The JSON parsers (timeline, timeline modification, smart suggestions,
optimization) are strict and raise SerializationError on any decode failure.
"""

import json
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ideacoach.constants import (
    BRAIN_DUMP_IDEA_DEFAULTS,
    DAILY_GOAL_COUNT,
    DEFAULT_VIABILITY_SCORE,
    IDEA_DEFAULTS,
    SWOT_DEFAULTS,
)
from ideacoach.exceptions import SerializationError
from ideacoach.models.idea import BusinessIdeaDraft, Difficulty, IdeaCategory, Level, QuizOptionSet, SWOTAnalysis
from ideacoach.models.suggestions import SmartSuggestionBundle
from ideacoach.models.timeline import OptimizationOrder, TimelineModificationPlan, TimelineStage
from ideacoach.utils.logger import logger

ModelT = TypeVar("ModelT", bound=BaseModel)

ORDINAL_PREFIX = re.compile(r"^(?:\d+[.)]|[•●▪◦])\s+")
BULLET_PREFIX = re.compile(r"^[-•*]\s*")
FIRST_NUMBER = re.compile(r"\d+")


def _clean_lines(text: Optional[str]) -> Iterator[str]:
    """Yield trimmed, non-empty lines."""
    for line in (text or "").splitlines():
        trimmed = line.strip()
        if trimmed:
            yield trimmed


# =============================================================================
# Business ideas
# =============================================================================

class IdeaField(str, Enum):
    """The closed set of keys recognized inside an IDEA block."""

    TITLE = "title"
    DESCRIPTION = "description"
    CATEGORY = "category"
    DIFFICULTY = "difficulty"
    REVENUE = "revenue"
    LAUNCH = "launch"
    SKILLS = "skills"
    COST = "cost"
    MARGIN = "margin"
    DEMAND = "demand"
    COMPETITION = "competition"
    NOTE = "note"


@dataclass
class IdeaRecord:
    """An idea being assembled from `Key: value` lines."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    revenue: Optional[str] = None
    launch: Optional[str] = None
    skills: Optional[str] = None
    cost: Optional[str] = None
    margin: Optional[str] = None
    demand: Optional[str] = None
    competition: Optional[str] = None
    note: Optional[str] = None

    def set(self, key: str, value: str) -> None:
        """Assign a value if the key is recognized; unknown keys and empty values are ignored."""
        try:
            selected = IdeaField(key)
        except ValueError:
            return
        if value:
            setattr(self, selected.value, value)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_draft(self) -> Optional[BusinessIdeaDraft]:
        """Backfill defaults; records without a title are dropped."""
        if not self.title:
            return None
        return BusinessIdeaDraft(
            title=self.title,
            description=self.description or IDEA_DEFAULTS["description"],
            category=normalize_choice(self.category, IdeaCategory, IDEA_DEFAULTS["category"]),
            difficulty=normalize_choice(self.difficulty, Difficulty, IDEA_DEFAULTS["difficulty"]),
            estimatedRevenueRange=self.revenue or IDEA_DEFAULTS["estimatedRevenueRange"],
            launchTimeframe=self.launch or IDEA_DEFAULTS["launchTimeframe"],
            requiredSkills=split_skills(self.skills),
            startupCostRange=self.cost or IDEA_DEFAULTS["startupCostRange"],
            profitMarginRange=self.margin or IDEA_DEFAULTS["profitMarginRange"],
            marketDemand=normalize_choice(self.demand, Level, IDEA_DEFAULTS["marketDemand"]),
            competitionLevel=normalize_choice(self.competition, Level, IDEA_DEFAULTS["competitionLevel"]),
            personalNote=self.note or IDEA_DEFAULTS["personalNote"],
        )


def normalize_choice(value: Optional[str], choices: Type[Enum], default: str) -> str:
    """Match a free-text value onto an enum's values, case-insensitively."""
    if not value:
        return default
    lowered = value.strip().lower()
    for choice in choices:
        if choice.value.lower() == lowered:
            return choice.value
    words = set(re.findall(r"[a-z]+", lowered))
    for choice in choices:
        if choice.value.lower() in words:
            return choice.value
    return default


def split_skills(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [skill.strip() for skill in value.split(",") if skill.strip()]


def _is_idea_header(line: str) -> bool:
    return line.lstrip("#* ").upper().startswith("IDEA")


def _split_key_value(line: str):
    key, _, value = line.partition(":")
    key = key.strip().strip("*_").strip().lower()
    value = value.strip().strip("*").strip()
    return key, value


def parse_ideas(text: Optional[str]) -> List[BusinessIdeaDraft]:
    """
    Parse IDEA blocks into drafts, in the order they appear.

    Args:
        text: Raw model output

    Returns:
        The parsed drafts; an empty list means the caller should use fallback ideas
    """
    ideas: List[BusinessIdeaDraft] = []
    current = IdeaRecord()

    def flush():
        draft = current.to_draft()
        if draft is not None:
            ideas.append(draft)
        elif not current.is_empty():
            logger.debug("Dropping idea record without a title")

    for line in _clean_lines(text):
        if _is_idea_header(line):
            flush()
            current = IdeaRecord()
        elif ":" in line:
            key, value = _split_key_value(line)
            current.set(key, value)

    flush()
    return ideas


# =============================================================================
# Brain dump
# =============================================================================

def _json_string(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def parse_brain_dump_idea(text: Optional[str], brain_dump: str) -> Optional[BusinessIdeaDraft]:
    """
    Build one draft from the JSON object between the first '{' and the last '}'.

    Missing or non-string fields fall back to the brain dump and fixed defaults.

    Returns:
        The draft, or None when the reply holds no decodable JSON object
    """
    text = text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except ValueError:
        logger.debug("Brain dump reply is not valid JSON")
        return None
    if not isinstance(data, dict):
        return None

    return BusinessIdeaDraft(
        **{
            **BRAIN_DUMP_IDEA_DEFAULTS,
            "title": _json_string(data, "name") or BRAIN_DUMP_IDEA_DEFAULTS["title"],
            "description": _json_string(data, "description") or brain_dump.strip() or IDEA_DEFAULTS["description"],
            "personalNote": _json_string(data, "tagline"),
        }
    )


# =============================================================================
# Quiz options and goal lists
# =============================================================================

def parse_quiz_options(text: Optional[str], step_category: str) -> QuizOptionSet:
    """One option per line; dash and asterisk lines are skipped, ordinals stripped."""
    options = []
    for line in _clean_lines(text):
        if line.startswith("-") or line.startswith("*"):
            continue
        option = ORDINAL_PREFIX.sub("", line).strip()
        if option:
            options.append(option)
    return QuizOptionSet(stepCategory=step_category, options=options)


def parse_goal_list(text: Optional[str], limit: int = DAILY_GOAL_COUNT) -> List[str]:
    """The first `limit` non-empty lines, with ordinals and bullets removed."""
    goals = []
    for line in _clean_lines(text):
        goal = BULLET_PREFIX.sub("", ORDINAL_PREFIX.sub("", line)).strip()
        if goal:
            goals.append(goal)
        if len(goals) >= limit:
            break
    return goals


# =============================================================================
# SWOT analysis
# =============================================================================

VIABILITY = "VIABILITY"
SECTION_KEYWORDS = ("VIABILITY", "STRENGTHS", "WEAKNESSES", "OPPORTUNITIES", "THREATS", "RECOMMENDATIONS")


@dataclass
class _SwotSections:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    opportunities: List[str] = field(default_factory=list)
    threats: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def extract_viability_score(line: str) -> int:
    """First run of digits on the line; out-of-range or missing scores use the default."""
    match = FIRST_NUMBER.search(line)
    if not match:
        return DEFAULT_VIABILITY_SCORE
    score = int(match.group())
    if 0 <= score <= 100:
        return score
    return DEFAULT_VIABILITY_SCORE


def parse_swot(text: Optional[str]) -> SWOTAnalysis:
    """Parse VIABILITY plus five bulleted sections; empty sections get generic defaults."""
    viability = DEFAULT_VIABILITY_SCORE
    sections = _SwotSections()
    current: Optional[str] = None

    for line in _clean_lines(text):
        upper = line.upper()
        keyword = next((k for k in SECTION_KEYWORDS if k in upper), None)
        if keyword == VIABILITY:
            current = VIABILITY
            viability = extract_viability_score(line)
        elif keyword:
            current = keyword.lower()
        elif BULLET_PREFIX.match(line) and current and current != VIABILITY:
            item = BULLET_PREFIX.sub("", line).strip()
            if item:
                getattr(sections, current).append(item)

    return SWOTAnalysis(
        viabilityScore=viability,
        **{
            name: getattr(sections, name) or list(SWOT_DEFAULTS[name])
            for name in SWOT_DEFAULTS
        },
    )


# =============================================================================
# Strict JSON
# =============================================================================

def parse_timeline(text: Optional[str]) -> List[TimelineStage]:
    """
    Decode the JSON array between the first '[' and the last ']'.

    Raises:
        SerializationError: When no array is present or it does not decode into stages
    """
    text = text or ""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end < start:
        raise SerializationError("Timeline response does not contain a JSON array")

    try:
        raw = json.loads(text[start:end + 1])
    except ValueError as e:
        raise SerializationError("Timeline response is not valid JSON", e)
    if not isinstance(raw, list):
        raise SerializationError("Timeline response is not a JSON array")

    try:
        return [TimelineStage.model_validate(item) for item in raw]
    except ValidationError as e:
        raise SerializationError("Timeline stage does not match the expected shape", e)


def _decode_strict(text: Optional[str], model: Type[ModelT]) -> ModelT:
    try:
        return model.model_validate_json(text or "")
    except ValidationError as e:
        raise SerializationError(f"Could not decode {model.__name__}", e)


def parse_timeline_modification(text: Optional[str]) -> TimelineModificationPlan:
    return _decode_strict(text, TimelineModificationPlan)


def parse_smart_suggestions(text: Optional[str]) -> SmartSuggestionBundle:
    return _decode_strict(text, SmartSuggestionBundle)


def parse_optimization_order(text: Optional[str]) -> OptimizationOrder:
    return _decode_strict(text, OptimizationOrder)
