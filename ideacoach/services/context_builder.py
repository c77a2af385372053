"""
Builds the behavioral context block appended to every outbound prompt.
"""

from datetime import time
from typing import List, Optional

from ideacoach.constants import (
    CONVERSATION_RESPONSE_CHARS,
    MAX_CONTEXT_CHARS,
    NOTE_CONTENT_CHARS,
    RECENT_CONVERSATION_COUNT,
    RECENT_NOTE_COUNT,
    TOP_FEATURE_COUNT,
)
from ideacoach.models.context import BehaviorSnapshot

CONTEXT_HEADER = "USER CONTEXT & BEHAVIORAL INSIGHTS:"


def format_hour(hour: int) -> str:
    """Render an hour of day as a short clock time, e.g. 9 -> '9:00 AM'."""
    return time(hour=hour).strftime("%I:%M %p").lstrip("0")


def _truncate(text: str, limit: int) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


class PromptContextBuilder:
    """Turns a BehaviorSnapshot into a bounded text block. Pure, never raises."""

    def __init__(
        self,
        max_chars: int = MAX_CONTEXT_CHARS,
        top_features: int = TOP_FEATURE_COUNT,
        recent_conversations: int = RECENT_CONVERSATION_COUNT,
        recent_notes: int = RECENT_NOTE_COUNT,
    ):
        self.max_chars = max_chars
        self.top_features = top_features
        self.recent_conversations = recent_conversations
        self.recent_notes = recent_notes

    def build(self, snapshot: Optional[BehaviorSnapshot]) -> str:
        """
        Build the context block for a snapshot.

        Args:
            snapshot: The user's behavior snapshot, or None when nothing is known

        Returns:
            The context block, or an empty string when the snapshot has no data
        """
        if snapshot is None:
            return ""

        sections = [
            self._activity_section(snapshot),
            self._feature_section(snapshot),
            self._list_section("Business Focus Areas", snapshot.focusKeywords),
            self._list_section("Preferred Industries", snapshot.preferredIndustries),
            self._conversation_section(snapshot),
            self._notes_section(snapshot),
            self._behavior_section(snapshot),
        ]
        sections = [section for section in sections if section]
        if not sections:
            return ""

        block = "\n\n".join([CONTEXT_HEADER] + sections)
        if len(block) > self.max_chars:
            block = block[: self.max_chars]
        return block

    def _activity_section(self, snapshot: BehaviorSnapshot) -> str:
        if not snapshot.activityCounts:
            return ""
        summary = ", ".join(f"{name}: {count}" for name, count in snapshot.activityCounts.items())
        return f"Recent Activity Patterns:\n- {summary}"

    def _feature_section(self, snapshot: BehaviorSnapshot) -> str:
        if not snapshot.featureUsage or self.top_features <= 0:
            return ""
        # Stable on ties: most used first, then by name
        ranked = sorted(snapshot.featureUsage.items(), key=lambda item: (-item[1], item[0]))
        top = ", ".join(f"{name} ({count})" for name, count in ranked[: self.top_features])
        return f"Most Used Features: {top}"

    @staticmethod
    def _list_section(title: str, values: List[str]) -> str:
        values = [value.strip() for value in values if value and value.strip()]
        if not values:
            return ""
        return f"{title}: {', '.join(values)}"

    def _conversation_section(self, snapshot: BehaviorSnapshot) -> str:
        if self.recent_conversations <= 0:
            return ""
        # Blank queries are skipped; a blank response drops only the AI line
        conversations = [entry for entry in snapshot.recentConversations if entry.query.strip()]
        entries = []
        for entry in conversations[-self.recent_conversations:]:
            lines = [f"User: {entry.query.strip()}"]
            if entry.response.strip():
                lines.append(f"AI: {_truncate(entry.response, CONVERSATION_RESPONSE_CHARS)}")
            entries.append("\n".join(lines))
        if not entries:
            return ""
        return "Recent Conversations:\n" + "\n---\n".join(entries)

    def _notes_section(self, snapshot: BehaviorSnapshot) -> str:
        if self.recent_notes <= 0:
            return ""
        notes = [note for note in snapshot.recentNotes if note.content.strip()]
        entries = [
            f"[{(note.category or '').strip() or 'general'}] {_truncate(note.content, NOTE_CONTENT_CHARS)}"
            for note in notes[-self.recent_notes:]
        ]
        if not entries:
            return ""
        return "Recent Notes:\n- " + "\n- ".join(entries)

    def _behavior_section(self, snapshot: BehaviorSnapshot) -> str:
        lines = []
        if snapshot.goalCompletionRate is not None:
            lines.append(f"- Goal completion rate: {int(snapshot.goalCompletionRate * 100)}%")
        if snapshot.aiInteractionCount is not None:
            lines.append(f"- AI interactions in last 30 days: {snapshot.aiInteractionCount}")
        hours = sorted({hour for hour in snapshot.preferredReminderHours if 0 <= hour <= 23})
        if hours:
            lines.append(f"- Preferred reminder times: {', '.join(format_hour(hour) for hour in hours)}")
        if not lines:
            return ""
        return "User Behavior Insights:\n" + "\n".join(lines)
