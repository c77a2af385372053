"""
Deterministic stand-in content for when an AI call or its parsing fails.
Never touches the network.
"""

from typing import List, Optional

from ideacoach.constants import (
    ASSISTANT_FALLBACK_REPLY,
    BRAIN_DUMP_IDEA_DEFAULTS,
    DEFAULT_TIMELINE_STAGES,
    IDEA_DEFAULTS,
    MAX_TIMELINE_STAGES,
    PROGRESS_FALLBACK_REPLY,
)
from ideacoach.models.idea import BusinessIdeaDraft
from ideacoach.models.timeline import TimelineStage

FALLBACK_IDEAS = (
    {
        "title": "AI-Powered Consulting Services",
        "description": "Leverage AI and your expertise to provide consulting services to businesses looking to modernize.",
        "category": "Technology",
        "difficulty": "Medium",
        "estimatedRevenueRange": "$75,000 - $150,000/year",
        "launchTimeframe": "2-3 months",
        "requiredSkills": ["Business Analysis", "AI/ML", "Communication"],
        "startupCostRange": "$2,000 - $5,000",
        "profitMarginRange": "60-80%",
        "marketDemand": "High",
        "competitionLevel": "Medium",
        "personalNote": "Perfect for leveraging modern technology trends",
    },
    {
        "title": "Digital Content Creation Studio",
        "description": "Create and monetize digital content across multiple platforms, from courses to social media.",
        "category": "Creative",
        "difficulty": "Easy",
        "estimatedRevenueRange": "$30,000 - $100,000/year",
        "launchTimeframe": "1-2 months",
        "requiredSkills": ["Content Creation", "Marketing", "Video Editing"],
        "startupCostRange": "$500 - $2,000",
        "profitMarginRange": "70-90%",
        "marketDemand": "High",
        "competitionLevel": "High",
        "personalNote": "Low barrier to entry with high growth potential",
    },
    {
        "title": "Specialized E-Learning Platform",
        "description": "Build a niche online learning platform focused on high-demand skills in your area of expertise.",
        "category": "Education",
        "difficulty": "Hard",
        "estimatedRevenueRange": "$50,000 - $200,000/year",
        "launchTimeframe": "3-4 months",
        "requiredSkills": ["Teaching", "Course Design", "Marketing"],
        "startupCostRange": "$3,000 - $10,000",
        "profitMarginRange": "50-70%",
        "marketDemand": "High",
        "competitionLevel": "Medium",
        "personalNote": "Scalable model with recurring revenue potential",
    },
)

CANONICAL_STAGES = (
    {
        "title": "Foundation",
        "description": "Define the problem, the target customer and the value proposition for {subject}.",
        "duration": "1-2 weeks",
        "keyTasks": ["Write a one-page business summary", "Identify your target customer", "Research 3-5 competitors"],
        "successMetrics": ["Problem statement written", "Customer profile documented"],
        "emoji": "🧱",
    },
    {
        "title": "MVP",
        "description": "Build the smallest version of {subject} that delivers the core value.",
        "duration": "3-4 weeks",
        "keyTasks": ["List must-have features", "Build the first version", "Set up a landing page"],
        "successMetrics": ["Working prototype", "Landing page live"],
        "emoji": "🛠️",
    },
    {
        "title": "Validate",
        "description": "Put the MVP in front of real users and learn what resonates.",
        "duration": "2-3 weeks",
        "keyTasks": ["Interview 10 potential customers", "Collect feedback on the MVP", "Test pricing assumptions"],
        "successMetrics": ["10 customer conversations", "First paying or committed user"],
        "emoji": "🔍",
    },
    {
        "title": "Launch",
        "description": "Open {subject} to the public with a focused launch plan.",
        "duration": "2 weeks",
        "keyTasks": ["Prepare launch announcement", "Activate your first marketing channel", "Onboard early adopters"],
        "successMetrics": ["Public launch completed", "First 25 customers"],
        "emoji": "🚀",
    },
    {
        "title": "Scale",
        "description": "Systematize operations so growth does not depend on manual effort.",
        "duration": "1-2 months",
        "keyTasks": ["Automate repetitive work", "Document core processes", "Double down on the best channel"],
        "successMetrics": ["Repeatable acquisition channel", "Monthly revenue growing"],
        "emoji": "📈",
    },
    {
        "title": "Growth",
        "description": "Expand the offering and reach new customer segments.",
        "duration": "Ongoing",
        "keyTasks": ["Explore a second customer segment", "Add a complementary product", "Build partnerships"],
        "successMetrics": ["New revenue stream", "Sustainable profit margin"],
        "emoji": "🌱",
    },
)


class FallbackService:
    """Synthesizes fully-populated ideas and timeline stages locally."""

    def ideas(self) -> List[BusinessIdeaDraft]:
        """Three pre-authored ideas spanning categories and difficulty levels."""
        return [BusinessIdeaDraft(**idea) for idea in FALLBACK_IDEAS]

    def timeline(self, stage_count: int = DEFAULT_TIMELINE_STAGES, subject: Optional[str] = None) -> List[TimelineStage]:
        """
        The canonical Foundation -> Growth stages, truncated to stage_count.

        Args:
            stage_count: Number of stages wanted; clamped to 1..6
            subject: Idea title used in stage descriptions

        Returns:
            Ordered list of timeline stages
        """
        count = max(1, min(stage_count, MAX_TIMELINE_STAGES))
        subject = subject.strip() if subject and subject.strip() else "your business"
        return [
            TimelineStage.model_validate({**stage, "description": stage["description"].format(subject=subject)})
            for stage in CANONICAL_STAGES[:count]
        ]

    def brain_dump_idea(self, brain_dump: str) -> BusinessIdeaDraft:
        """A generic draft that keeps the user's own words as its description."""
        return BusinessIdeaDraft(
            **BRAIN_DUMP_IDEA_DEFAULTS,
            description=brain_dump.strip() or IDEA_DEFAULTS["description"],
            personalNote="",
        )

    def assistant_reply(self) -> str:
        return ASSISTANT_FALLBACK_REPLY

    def progress_reply(self) -> str:
        return PROGRESS_FALLBACK_REPLY
