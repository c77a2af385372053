"""
Task-specific prompt templates.

The response parsers depend on the output formats these templates ask for:
IDEA blocks with `Key: value` lines, one quiz option per line, fixed SWOT
section headers with bullets, a JSON array for timelines, and a single JSON
object for the structured timeline tasks and the brain-dump idea.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ideacoach.constants import DAILY_GOAL_COUNT, DEFAULT_TIMELINE_STAGES, IDEAS_PER_REQUEST
from ideacoach.models.context import BehaviorSnapshot
from ideacoach.models.prompt import PromptRequest, TaskKind
from ideacoach.services.context_builder import PromptContextBuilder

Parameters = Mapping[str, Union[str, List[str]]]


def _text(params: Parameters, key: str) -> str:
    """Read a parameter as text; lists are comma-joined and missing keys are empty."""
    value = params.get(key)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def _lines(params: Parameters, key: str) -> str:
    """Read a list parameter as one `- item` line per entry."""
    value = params.get(key)
    if not value:
        return ""
    if isinstance(value, str):
        value = [value]
    return "\n".join(f"- {item}" for item in value)


def _normalize(params: Optional[Mapping[str, Any]]) -> Dict[str, Union[str, List[str]]]:
    """Drop None values and coerce the rest to text or lists of text."""
    normalized: Dict[str, Union[str, List[str]]] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            normalized[key] = [str(item) for item in value if item is not None]
        else:
            normalized[key] = str(value)
    return normalized


def ideas_template(params: Parameters) -> str:
    return f"""You are an expert business advisor. Based on this profile, generate {IDEAS_PER_REQUEST} highly personalized business ideas:

Skills: {_text(params, "skills")}
Personality: {_text(params, "personality")}
Interests: {_text(params, "interests")}

CRITICAL: For EACH of the {IDEAS_PER_REQUEST} ideas, use this EXACT format with NO VARIATIONS:

IDEA 1
Title: [Concise business name]
Description: [2-3 compelling sentences explaining the business concept and value proposition]
Category: [MUST be ONE of: Technology, Service, Creative, Retail, Consulting]
Difficulty: [MUST be: Easy, Medium, or Hard]
Revenue: $[X]K - $[Y]K/year
Launch: [X] weeks
Skills: [skill1], [skill2], [skill3]
Cost: $[X]K - $[Y]K
Margin: [X]-[Y]%
Demand: [MUST be: High, Medium, or Low]
Competition: [MUST be: High, Medium, or Low]
Note: [One personalized sentence explaining why this business fits their specific profile]

IMPORTANT FORMATTING RULES:
- Start every idea with a line containing only IDEA and its number
- Each field MUST be on its own line
- Each field MUST start with the exact label followed by a colon
- Revenue format: Use K for thousands (e.g., $50K - $150K/year)
- Launch format: Use weeks or months (e.g., 6-8 weeks or 3-4 months)
- Skills: Comma-separated list
- Cost format: Use K for thousands (e.g., $5K - $15K)
- Margin format: Range with dash (e.g., 40-60%)
- DO NOT add extra spacing or blank lines between fields
- REPEAT this exact structure for all {IDEAS_PER_REQUEST} ideas

Make ideas specific, innovative, and tailored to their unique combination of traits."""


def advice_template(params: Parameters) -> str:
    return f"""User Context: {_text(params, "context")}
Current Goals: {_text(params, "goals")}

Provide personalized, actionable advice in a clear, readable format:

📊 CURRENT SITUATION:
[Brief assessment]

🚀 PRIORITY ACTIONS:
1. [Most important next step]
2. [Second priority]
3. [Third priority]

💪 ENCOURAGEMENT:
[Specific, motivating message based on their context]

Be specific, encouraging, and action-oriented. Keep it concise (2-3 short paragraphs total)."""


def idea_suggestions_template(params: Parameters) -> str:
    return f"""Provide practical, actionable advice for this business idea:

Business: {_text(params, "title")}
Description: {_text(params, "description")}
Category: {_text(params, "category")}

Format your response with clear sections:

🎯 NEXT STEPS:
- [Step 1]
- [Step 2]
- [Step 3]

💡 KEY RECOMMENDATIONS:
- [Recommendation 1]
- [Recommendation 2]

⚠️ WATCH OUT FOR:
- [Potential pitfall to avoid]

Keep it concise, specific, and actionable."""


_QUIZ_RULES = """CRITICAL: Return ONLY the {noun}, one per line.
Do NOT include:
- Numbers (1., 2., etc.)
- Bullets (-, *, •)
- Headers
- Explanations"""


def quiz_options_template(params: Parameters) -> str:
    step = _text(params, "step").strip()
    if step == "1":
        return f"""Generate 8 diverse skill options for an entrepreneurship quiz.

{_QUIZ_RULES.format(noun="skill names")}

Make them varied: technical, creative, business, interpersonal, etc.

Example format:
Data Analysis
Graphic Design
Public Speaking"""
    if step == "2":
        return f"""User selected skills: {_text(params, "skills")}
Generate 6 personality traits relevant for entrepreneurship that complement these skills.

{_QUIZ_RULES.format(noun="trait names")}

Example format:
Analytical
Creative
Risk-Taker"""
    if step == "3":
        return f"""User profile - Skills: {_text(params, "skills")}, Personality: {_text(params, "personality")}
Generate 8 business interest areas that align with this profile.

{_QUIZ_RULES.format(noun="interest areas")}

Example format:
Technology
E-commerce
Consulting"""
    return ""


def swot_template(params: Parameters) -> str:
    return f"""Analyze this business idea thoroughly:
Title: {_text(params, "title")}
Description: {_text(params, "description")}
Category: {_text(params, "category")}

Provide analysis in this EXACT format:

VIABILITY: [score 0-100]

STRENGTHS:
- [strength 1]
- [strength 2]
- [strength 3]

WEAKNESSES:
- [weakness 1]
- [weakness 2]

OPPORTUNITIES:
- [opportunity 1]
- [opportunity 2]
- [opportunity 3]

THREATS:
- [threat 1]
- [threat 2]

RECOMMENDATIONS:
- [recommendation 1]
- [recommendation 2]
- [recommendation 3]"""


def daily_goals_template(params: Parameters) -> str:
    return f"""Generate {DAILY_GOAL_COUNT} specific, actionable daily goals for someone working on: {_text(params, "title")}
Description: {_text(params, "description")}
Current Progress: {_text(params, "progress")}%

Make each goal SMART (Specific, Measurable, Achievable, Relevant, Time-bound).

Format your response as exactly {DAILY_GOAL_COUNT} lines, each starting with a number:
1. [Specific action to take today]
2. [Specific action to take today]
3. [Specific action to take today]

Do not include any other text, headers, or explanations."""


_STAGE_SCHEMA = """{
    "title": "Short stage name",
    "description": "What this stage achieves",
    "duration": "e.g. 2-3 weeks",
    "keyTasks": ["task 1", "task 2", "task 3"],
    "successMetrics": ["metric 1", "metric 2"],
    "emoji": "🚀"
  }"""


def timeline_template(params: Parameters) -> str:
    stage_count = _text(params, "stage_count") or str(DEFAULT_TIMELINE_STAGES)
    return f"""Create a step-by-step launch timeline for this business idea:
Business: {_text(params, "title")}
Description: {_text(params, "description")}

Break the journey into exactly {stage_count} sequential stages, from first foundations to growth.

Respond with ONLY a JSON array, no markdown and no commentary. Each element must look like:
[
  {_STAGE_SCHEMA}
]"""


def timeline_modification_template(params: Parameters) -> str:
    return f"""The user wants to change their business journey timeline.

User request: "{_text(params, "request")}"
Business: {_text(params, "title")}

Current stages (id: title), in order:
{_lines(params, "stages")}

Decide how to change the timeline to satisfy the request.
Respond with ONLY a single JSON object, no markdown and no commentary, with this shape:
{{
  "kind": "add | remove | reorder | modify | restructure",
  "confidence": 0.0-1.0,
  "reasoning": "One or two sentences",
  "changes": [
    {{
      "action": "add | remove | reorder | modify",
      "targetStageId": "existing stage id, or null when adding",
      "newStage": {_STAGE_SCHEMA},
      "newPosition": 0
    }}
  ],
  "suggestedReminders": [{{"title": "...", "message": "...", "daysFromNow": 3}}],
  "suggestedNotes": [{{"content": "...", "category": "Planning"}}]
}}
Use null for newStage or newPosition when they do not apply."""


def smart_suggestions_template(params: Parameters) -> str:
    return f"""Review this entrepreneur's progress and suggest what to do next.

Business: {_text(params, "title")}
Current stage: {_text(params, "current_stage")}
Completed stages: {_text(params, "completed_stages")}
Timeline stages (id: title), in order:
{_lines(params, "stages")}

Respond with ONLY a single JSON object, no markdown and no commentary, with this shape:
{{
  "nextActions": [{{"title": "...", "description": "...", "priority": "high | medium | low", "estimatedTime": "e.g. 2 hours"}}],
  "improvementOpportunities": [{{"area": "...", "suggestion": "...", "impact": "high | medium | low"}}],
  "riskItems": [{{"risk": "...", "severity": "high | medium | low", "mitigation": "..."}}],
  "resourceRecommendations": [{{"title": "...", "type": "article | tool | course | community", "description": "...", "url": null}}],
  "milestoneAdjustments": [{{"stageId": "existing stage id or null", "suggestion": "...", "reason": "..."}}]
}}"""


def optimization_template(params: Parameters) -> str:
    return f"""Reorder these business journey stages into the most effective sequence.

Business: {_text(params, "title")}
Goal: {_text(params, "goal")}
Stages (id: title), in their current order:
{_lines(params, "stages")}

Respond with ONLY a single JSON object, no markdown and no commentary, with this shape:
{{
  "optimizedOrder": ["stage id", "stage id"],
  "reasoning": "Why this order works better"
}}
Include every stage id exactly once."""


def brain_dump_template(params: Parameters) -> str:
    return f"""Analyze this brain dump and generate a business idea:

{_text(params, "brain_dump")}

Create a structured business idea with:
- Name (catchy, memorable)
- Tagline (one sentence value proposition)
- Description (2-3 paragraphs)
- Target market
- Key problems it solves
- Unique value proposition

Return as JSON with keys: name, tagline, description, targetMarket, problems (array), valueProposition"""


def assistant_chat_template(params: Parameters) -> str:
    sections = ["Context about the user:"]
    ideas = _lines(params, "ideas")
    if ideas:
        sections.append(f"Business Ideas:\n{ideas}")
    if _text(params, "current_idea"):
        sections.append(
            f"Currently working on: {_text(params, 'current_idea')}\n"
            f"Description: {_text(params, 'current_description')}"
        )
    sections.append(f"User question: {_text(params, 'question')}")
    sections.append(
        "Provide a helpful, specific response based on the context above. Be conversational and actionable."
    )
    return "\n\n".join(sections)


def progress_question_template(params: Parameters) -> str:
    return f"""User is on a stage-by-stage journey to build their business: {_text(params, "title") or "business"}

Current Progress:
- {_text(params, "progress")}% complete
- On stage {_text(params, "current_stage")} of {_text(params, "stage_count")}
- Completed stages: {_text(params, "completed_count")}
- Recent notes: {_text(params, "recent_notes")}

User's question: {_text(params, "question")}

Provide a helpful, encouraging response with specific actionable advice.
Keep it conversational and motivating. Use emojis where appropriate."""


TEMPLATES: Dict[TaskKind, Callable[[Parameters], str]] = {
    TaskKind.IDEAS: ideas_template,
    TaskKind.ADVICE: advice_template,
    TaskKind.IDEA_SUGGESTIONS: idea_suggestions_template,
    TaskKind.QUIZ_OPTIONS: quiz_options_template,
    TaskKind.SWOT_ANALYSIS: swot_template,
    TaskKind.DAILY_GOALS: daily_goals_template,
    TaskKind.TIMELINE: timeline_template,
    TaskKind.TIMELINE_MODIFICATION: timeline_modification_template,
    TaskKind.SMART_SUGGESTIONS: smart_suggestions_template,
    TaskKind.OPTIMIZATION: optimization_template,
    TaskKind.BRAIN_DUMP: brain_dump_template,
    TaskKind.ASSISTANT_CHAT: assistant_chat_template,
    TaskKind.PROGRESS_QUESTION: progress_question_template,
}


class PromptTemplateEngine:
    """Renders task templates and appends the behavioral context block."""

    def __init__(self, context_builder: Optional[PromptContextBuilder] = None):
        self.context_builder = context_builder or PromptContextBuilder()

    def render(
        self,
        task_kind: TaskKind,
        parameters: Optional[Mapping[str, Any]] = None,
        snapshot: Optional[BehaviorSnapshot] = None,
        request_text: Optional[str] = None,
    ) -> PromptRequest:
        """
        Build the prompt request for a task.

        Args:
            task_kind: Which AI task to render
            parameters: Template parameters; missing keys render as empty text
            snapshot: Behavior snapshot for the context block
            request_text: The user's literal request, placed after the context block

        Returns:
            PromptRequest whose render() is the final prompt text
        """
        parameters = _normalize(parameters)
        template_text = TEMPLATES[task_kind](parameters)

        context_parts = []
        context_block = self.context_builder.build(snapshot)
        if context_block:
            context_parts.append(context_block)
        if request_text and request_text.strip():
            context_parts.append(f"CURRENT REQUEST: {request_text.strip()}")

        return PromptRequest(
            taskKind=task_kind,
            templateParameters=parameters,
            templateText=template_text,
            contextBlock="\n\n".join(context_parts),
        )
