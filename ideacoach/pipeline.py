"""
AI coaching pipeline: prompt rendering, one provider call, parsing, and fallback.
"""

from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from ideacoach.constants import (
    CHAT_GENERATION,
    CHAT_IDEA_LIMIT,
    DEFAULT_TIMELINE_STAGES,
    IDEA_GENERATION,
    LIST_GENERATION,
    MAX_TIMELINE_STAGES,
    QUIZ_STEP_CATEGORIES,
    RECENT_PROGRESS_NOTES,
    STRUCTURED_GENERATION,
)
from ideacoach.exceptions import AIServiceError, UnusableResponseError
from ideacoach.models.context import BehaviorSnapshot
from ideacoach.models.idea import BusinessIdeaDraft, QuizOptionSet, SWOTAnalysis
from ideacoach.models.prompt import GenerationConfig, TaskKind
from ideacoach.models.suggestions import SmartSuggestionBundle
from ideacoach.models.timeline import OptimizationOrder, TimelineModificationPlan, TimelineStage
from ideacoach.services import response_parsers
from ideacoach.services.ai_service import AIService
from ideacoach.services.fallback_service import FallbackService
from ideacoach.services.prompt_templates import PromptTemplateEngine
from ideacoach.utils.logger import logger

T = TypeVar("T")


async def with_fallback(call: Callable[[], Awaitable[T]], fallback_factory: Callable[[], T], task: str = "") -> T:
    """
    Run an AI call and substitute fallback content if it fails.

    Only AIServiceError is recovered from; anything else is a bug and propagates.
    """
    try:
        return await call()
    except AIServiceError as e:
        logger.warning(f"Using fallback for {task or 'task'} after {e.kind} error: {e}")
        return fallback_factory()


def _stage_lines(stages: Sequence[tuple]) -> List[str]:
    return [f"{stage_id}: {title}" for stage_id, title in stages]


class CoachingPipeline:
    """Runs each AI task end-to-end against an injected AIService."""

    def __init__(
        self,
        ai_service: AIService,
        template_engine: Optional[PromptTemplateEngine] = None,
        fallback_service: Optional[FallbackService] = None,
    ):
        """
        Initialize the coaching pipeline.

        Args:
            ai_service: Provider client; one call per task invocation
            template_engine: Renders task prompts and the context block
            fallback_service: Local substitute content for ideas and timelines
        """
        self.ai_service = ai_service
        self.template_engine = template_engine or PromptTemplateEngine()
        self.fallback_service = fallback_service or FallbackService()

    async def _complete(
        self,
        task_kind: TaskKind,
        parameters: dict,
        preset: dict,
        snapshot: Optional[BehaviorSnapshot] = None,
        request_text: Optional[str] = None,
    ) -> str:
        request = self.template_engine.render(task_kind, parameters, snapshot, request_text)
        logger.info(f"Running AI task: {task_kind.value}")
        return await self.ai_service.generate_text(request.render(), GenerationConfig(**preset))

    async def generate_ideas(
        self,
        skills: List[str],
        personality: List[str],
        interests: List[str],
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> List[BusinessIdeaDraft]:
        """Personalized ideas; falls back to the stock ideas when the call or parsing fails."""
        async def call():
            text = await self._complete(
                TaskKind.IDEAS,
                {"skills": skills, "personality": personality, "interests": interests},
                IDEA_GENERATION,
                snapshot,
            )
            ideas = response_parsers.parse_ideas(text)
            if not ideas:
                raise UnusableResponseError(TaskKind.IDEAS.value)
            logger.info(f"Parsed {len(ideas)} ideas")
            return ideas

        return await with_fallback(call, self.fallback_service.ideas, TaskKind.IDEAS.value)

    async def get_advice(
        self,
        context: str,
        goals: List[str],
        snapshot: Optional[BehaviorSnapshot] = None,
        request_text: Optional[str] = None,
    ) -> str:
        """Free-form coaching advice; the raw text is the result."""
        return await self._complete(
            TaskKind.ADVICE, {"context": context, "goals": goals}, CHAT_GENERATION, snapshot, request_text
        )

    async def get_idea_suggestions(self, idea: BusinessIdeaDraft, snapshot: Optional[BehaviorSnapshot] = None) -> str:
        """Sectioned next steps and pitfalls for one idea; the raw text is the result."""
        return await self._complete(
            TaskKind.IDEA_SUGGESTIONS,
            {"title": idea.title, "description": idea.description, "category": idea.category},
            CHAT_GENERATION,
            snapshot,
        )

    async def generate_quiz_options(
        self,
        step: int,
        previous_answers: Optional[dict] = None,
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> QuizOptionSet:
        """
        Options for one onboarding quiz step.

        Args:
            step: 1 (skills), 2 (personality) or 3 (interests)
            previous_answers: Answers so far, keyed by "skills" and "personality"
            snapshot: Optional behavior snapshot
        """
        if step not in QUIZ_STEP_CATEGORIES:
            raise ValueError(f"Unsupported quiz step: {step}")
        previous_answers = previous_answers or {}
        text = await self._complete(
            TaskKind.QUIZ_OPTIONS,
            {
                "step": str(step),
                "skills": list(previous_answers.get("skills", [])),
                "personality": list(previous_answers.get("personality", [])),
            },
            LIST_GENERATION,
            snapshot,
        )
        return response_parsers.parse_quiz_options(text, QUIZ_STEP_CATEGORIES[step])

    async def analyze_idea(self, idea: BusinessIdeaDraft, snapshot: Optional[BehaviorSnapshot] = None) -> SWOTAnalysis:
        """Viability score and SWOT lists; every list is non-empty."""
        text = await self._complete(
            TaskKind.SWOT_ANALYSIS,
            {"title": idea.title, "description": idea.description, "category": idea.category},
            STRUCTURED_GENERATION,
            snapshot,
        )
        return response_parsers.parse_swot(text)

    async def generate_daily_goals(
        self,
        idea: BusinessIdeaDraft,
        progress: int = 0,
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> List[str]:
        text = await self._complete(
            TaskKind.DAILY_GOALS,
            {"title": idea.title, "description": idea.description, "progress": str(progress)},
            LIST_GENERATION,
            snapshot,
        )
        return response_parsers.parse_goal_list(text)

    async def generate_timeline(
        self,
        title: str,
        description: str,
        stage_count: int = DEFAULT_TIMELINE_STAGES,
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> List[TimelineStage]:
        """Ordered journey stages; falls back to the canonical stages on any failure."""
        stage_count = max(1, min(stage_count, MAX_TIMELINE_STAGES))

        async def call():
            text = await self._complete(
                TaskKind.TIMELINE,
                {"title": title, "description": description, "stage_count": str(stage_count)},
                STRUCTURED_GENERATION,
                snapshot,
            )
            stages = response_parsers.parse_timeline(text)
            if not stages:
                raise UnusableResponseError(TaskKind.TIMELINE.value)
            return stages

        return await with_fallback(
            call,
            lambda: self.fallback_service.timeline(stage_count, subject=title),
            TaskKind.TIMELINE.value,
        )

    async def modify_timeline(
        self,
        request: str,
        stages: Sequence[tuple],
        title: str = "",
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> TimelineModificationPlan:
        """
        Plan changes to an existing timeline.

        Args:
            request: What the user asked for
            stages: (stage id, stage title) pairs in their current order
            title: The business idea title
            snapshot: Optional behavior snapshot

        Raises:
            SerializationError: When the model's reply is not the expected JSON object
        """
        text = await self._complete(
            TaskKind.TIMELINE_MODIFICATION,
            {"request": request, "title": title, "stages": _stage_lines(stages)},
            STRUCTURED_GENERATION,
            snapshot,
            request_text=request,
        )
        return response_parsers.parse_timeline_modification(text)

    async def get_smart_suggestions(
        self,
        title: str,
        stages: Sequence[tuple],
        current_stage: str = "",
        completed_stages: Optional[List[str]] = None,
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> SmartSuggestionBundle:
        text = await self._complete(
            TaskKind.SMART_SUGGESTIONS,
            {
                "title": title,
                "current_stage": current_stage,
                "completed_stages": list(completed_stages or []),
                "stages": _stage_lines(stages),
            },
            STRUCTURED_GENERATION,
            snapshot,
        )
        return response_parsers.parse_smart_suggestions(text)

    async def optimize_order(
        self,
        title: str,
        stages: Sequence[tuple],
        goal: str = "",
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> OptimizationOrder:
        text = await self._complete(
            TaskKind.OPTIMIZATION,
            {"title": title, "goal": goal, "stages": _stage_lines(stages)},
            STRUCTURED_GENERATION,
            snapshot,
        )
        return response_parsers.parse_optimization_order(text)

    async def brain_dump_to_idea(self, brain_dump: str, snapshot: Optional[BehaviorSnapshot] = None) -> BusinessIdeaDraft:
        """One idea distilled from free-form thoughts; falls back to a draft built from the thoughts themselves."""
        async def call():
            text = await self._complete(TaskKind.BRAIN_DUMP, {"brain_dump": brain_dump}, IDEA_GENERATION, snapshot)
            idea = response_parsers.parse_brain_dump_idea(text, brain_dump)
            if idea is None:
                raise UnusableResponseError(TaskKind.BRAIN_DUMP.value)
            return idea

        return await with_fallback(
            call,
            lambda: self.fallback_service.brain_dump_idea(brain_dump),
            TaskKind.BRAIN_DUMP.value,
        )

    async def assistant_chat(
        self,
        question: str,
        ideas: Sequence[tuple] = (),
        current_idea: Optional[BusinessIdeaDraft] = None,
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> str:
        """
        Answer a free-form question with the user's ideas as context.

        Args:
            question: What the user asked
            ideas: (title, description, progress percent) for the user's saved ideas
            current_idea: The idea the user is working on, if any
            snapshot: Optional behavior snapshot

        Returns:
            The model's reply, or a fixed apology when the call fails
        """
        parameters = {
            "question": question,
            "ideas": [
                f"{title}: {description} (Progress: {int(progress)}%)"
                for title, description, progress in list(ideas)[:CHAT_IDEA_LIMIT]
            ],
        }
        if current_idea is not None:
            parameters["current_idea"] = current_idea.title
            parameters["current_description"] = current_idea.description

        return await with_fallback(
            lambda: self._complete(TaskKind.ASSISTANT_CHAT, parameters, CHAT_GENERATION, snapshot),
            self.fallback_service.assistant_reply,
            TaskKind.ASSISTANT_CHAT.value,
        )

    async def ask_about_progress(
        self,
        question: str,
        title: str,
        current_stage: int,
        stage_count: int,
        completed_count: int = 0,
        recent_notes: Sequence[str] = (),
        snapshot: Optional[BehaviorSnapshot] = None,
    ) -> str:
        """Encouraging answer about the user's journey; current_stage is 0-based."""
        progress = int(completed_count / stage_count * 100) if stage_count > 0 else 0
        parameters = {
            "question": question,
            "title": title,
            "progress": str(progress),
            "current_stage": str(current_stage + 1),
            "stage_count": str(stage_count),
            "completed_count": str(completed_count),
            "recent_notes": list(recent_notes)[-RECENT_PROGRESS_NOTES:],
        }
        return await with_fallback(
            lambda: self._complete(TaskKind.PROGRESS_QUESTION, parameters, CHAT_GENERATION, snapshot),
            self.fallback_service.progress_reply,
            TaskKind.PROGRESS_QUESTION.value,
        )
