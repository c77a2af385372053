"""
Tests for the response parsers.
"""

import pytest

from ideacoach.constants import BRAIN_DUMP_IDEA_DEFAULTS
from ideacoach.exceptions import SerializationError
from ideacoach.services.response_parsers import (
    IdeaRecord,
    extract_viability_score,
    parse_brain_dump_idea,
    parse_goal_list,
    parse_ideas,
    parse_optimization_order,
    parse_quiz_options,
    parse_smart_suggestions,
    parse_swot,
    parse_timeline,
    parse_timeline_modification,
)


def idea_block(number, title, **overrides):
    """Build one well-formed IDEA block."""
    values = {
        "Title": title,
        "Description": f"{title} helps small teams do more.",
        "Category": "Technology",
        "Difficulty": "Hard",
        "Revenue": "$50K - $150K/year",
        "Launch": "6-8 weeks",
        "Skills": "Coding, Sales, Design",
        "Cost": "$5K - $15K",
        "Margin": "40-60%",
        "Demand": "High",
        "Competition": "Low",
        "Note": "Fits your analytical side.",
    }
    values.update(overrides)
    lines = [f"IDEA {number}"] + [f"{key}: {value}" for key, value in values.items() if value is not None]
    return "\n".join(lines)


@pytest.fixture
def five_ideas_text():
    """Fixture providing a well-formed five-idea response."""
    titles = ["Code Review Bot", "Data Dashboard Studio", "API Monitoring SaaS", "Dev Bootcamp", "Analytics Audits"]
    return "Here are your ideas:\n\n" + "\n\n".join(
        idea_block(index, title) for index, title in enumerate(titles, start=1)
    )


class TestParseIdeas:
    """Tests for the IDEA block parser."""

    def test_parses_all_ideas_in_order(self, five_ideas_text):
        ideas = parse_ideas(five_ideas_text)

        assert [idea.title for idea in ideas] == [
            "Code Review Bot", "Data Dashboard Studio", "API Monitoring SaaS", "Dev Bootcamp", "Analytics Audits"
        ]
        first = ideas[0]
        assert first.category == "Technology"
        assert first.difficulty == "Hard"
        assert first.estimatedRevenueRange == "$50K - $150K/year"
        assert first.requiredSkills == ["Coding", "Sales", "Design"]
        assert first.marketDemand == "High"
        assert first.competitionLevel == "Low"
        assert first.personalNote == "Fits your analytical side."

    def test_header_is_case_insensitive(self):
        ideas = parse_ideas("idea 1\nTitle: Lowercase Header\nidea 2\nTitle: Second")

        assert [idea.title for idea in ideas] == ["Lowercase Header", "Second"]

    def test_value_split_on_first_colon_only(self):
        ideas = parse_ideas("IDEA 1\nTitle: Ratio: The App\nNote: Works at 9:00 AM")

        assert ideas[0].title == "Ratio: The App"
        assert ideas[0].personalNote == "Works at 9:00 AM"

    def test_missing_fields_are_backfilled(self):
        ideas = parse_ideas("IDEA 1\nTitle: Bare Idea")

        idea = ideas[0]
        assert idea.description == "Explore this business opportunity"
        assert idea.category == "General"
        assert idea.difficulty == "Medium"
        assert idea.estimatedRevenueRange == "$10,000 - $50,000/year"
        assert idea.launchTimeframe == "3-6 months"
        assert idea.startupCostRange == "$1,000 - $5,000"
        assert idea.profitMarginRange == "30-50%"
        assert idea.marketDemand == "Medium"
        assert idea.competitionLevel == "Medium"
        assert idea.personalNote == "Great opportunity for growth"
        assert idea.requiredSkills == []

    def test_defaulting_is_deterministic(self):
        text = "IDEA 1\nTitle: Repeatable\nSkills: Writing"

        assert parse_ideas(text) == parse_ideas(text)

    def test_empty_values_and_unknown_keys_are_ignored(self):
        ideas = parse_ideas("IDEA 1\nTitle: Keeper\nDifficulty:\nMood: cheerful\nDescription:   ")

        assert ideas[0].difficulty == "Medium"
        assert ideas[0].description == "Explore this business opportunity"

    def test_out_of_set_values_are_normalized(self):
        ideas = parse_ideas(
            "IDEA 1\nTitle: Odd Values\nDifficulty: moderate\nDemand: very high\nCompetition: LOW\nCategory: Technology / SaaS"
        )

        idea = ideas[0]
        assert idea.difficulty == "Medium"
        assert idea.marketDemand == "High"
        assert idea.competitionLevel == "Low"
        assert idea.category == "Technology"

    def test_record_without_title_is_dropped(self):
        text = idea_block(1, None) + "\n" + idea_block(2, "Has Title")

        ideas = parse_ideas(text)

        assert [idea.title for idea in ideas] == ["Has Title"]

    def test_no_usable_records_returns_empty_list(self):
        assert parse_ideas("Sorry, I can't help with that.") == []
        assert parse_ideas("IDEA 1\nDescription: no title here") == []
        assert parse_ideas("") == []
        assert parse_ideas(None) == []

    def test_markdown_decoration_is_tolerated(self):
        ideas = parse_ideas("**IDEA 1**\n**Title**: Bold Idea\nDifficulty: Easy")

        assert ideas[0].title == "Bold Idea"
        assert ideas[0].difficulty == "Easy"

    @pytest.mark.parametrize("text", [
        "IDEA\nTitle: x\nDifficulty: impossible\nDemand: ???\nCompetition: fierce",
        "IDEA 1\nTitle: y\nCategory: Underwater Basket Weaving",
        "random: stuff\nTitle: z",
    ])
    def test_every_record_is_fully_populated(self, text):
        for idea in parse_ideas(text):
            assert idea.title and idea.description and idea.category
            assert idea.difficulty in {"Easy", "Medium", "Hard"}
            assert idea.marketDemand in {"High", "Medium", "Low"}
            assert idea.competitionLevel in {"High", "Medium", "Low"}

    def test_idea_record_ignores_unrecognized_keys(self):
        record = IdeaRecord()
        record.set("budget", "$1")
        record.set("title", "Named")

        assert record.title == "Named"
        assert record.to_draft().title == "Named"


class TestParseQuizOptions:
    """Tests for the quiz option parser."""

    def test_cleans_ordinals_and_bullets(self):
        options = parse_quiz_options("1. Data Analysis\n• Creative\n\n2) Public Speaking\nGraphic Design", "skills")

        assert options.stepCategory == "skills"
        assert options.options == ["Data Analysis", "Creative", "Public Speaking", "Graphic Design"]

    def test_skips_dash_and_asterisk_lines(self):
        options = parse_quiz_options("- Header-ish\n* Another\nAnalytical", "personality")

        assert options.options == ["Analytical"]

    def test_keeps_duplicates_in_order(self):
        options = parse_quiz_options("Tech\nRetail\nTech", "interests")

        assert options.options == ["Tech", "Retail", "Tech"]

    def test_empty_input_gives_no_options(self):
        assert parse_quiz_options("", "skills").options == []


class TestParseGoalList:
    """Tests for the daily goal parser."""

    def test_keeps_first_three_cleaned_lines(self):
        goals = parse_goal_list("1. Call a supplier\n2. Draft pricing\n3. Post on LinkedIn\n4. Extra")

        assert goals == ["Call a supplier", "Draft pricing", "Post on LinkedIn"]


class TestParseSwot:
    """Tests for the SWOT parser."""

    def test_parses_all_sections(self):
        text = """VIABILITY: 82

STRENGTHS:
- Clear niche
• Low cost

WEAKNESSES:
* Solo founder

OPPORTUNITIES:
- Remote work trend

THREATS:
- Big incumbents

RECOMMENDATIONS:
- Run a pilot
Some stray prose that is ignored
"""
        analysis = parse_swot(text)

        assert analysis.viabilityScore == 82
        assert analysis.strengths == ["Clear niche", "Low cost"]
        assert analysis.weaknesses == ["Solo founder"]
        assert analysis.opportunities == ["Remote work trend"]
        assert analysis.threats == ["Big incumbents"]
        assert analysis.recommendations == ["Run a pilot"]

    def test_viability_only_backfills_every_list(self):
        analysis = parse_swot("VIABILITY: 85")

        assert analysis.viabilityScore == 85
        assert analysis.strengths == ["Strong market fit", "Innovative approach"]
        assert analysis.weaknesses == ["Needs market validation"]
        assert analysis.opportunities == ["Growing market demand", "Digital transformation"]
        assert analysis.threats == ["Competition"]
        assert analysis.recommendations == ["Start with MVP", "Validate with customers", "Build audience"]

    def test_missing_score_defaults_to_70(self):
        assert parse_swot("STRENGTHS:\n- Something").viabilityScore == 70
        assert parse_swot("VIABILITY: strong").viabilityScore == 70

    def test_bullets_before_any_section_are_ignored(self):
        analysis = parse_swot("- orphan bullet\nSTRENGTHS:\n- kept")

        assert analysis.strengths == ["kept"]

    def test_backfilled_lists_are_independent_copies(self):
        first = parse_swot("")
        second = parse_swot("")

        assert first.strengths == second.strengths
        assert first.strengths is not second.strengths

    @pytest.mark.parametrize("line,expected", [
        ("VIABILITY: 85", 85),
        ("Viability score: 64/100", 64),
        ("VIABILITY SCORE: 2024 market", 70),
        ("VIABILITY", 70),
    ])
    def test_extract_viability_score(self, line, expected):
        assert extract_viability_score(line) == expected


class TestParseTimeline:
    """Tests for the strict timeline parser."""

    def test_extracts_array_from_surrounding_prose(self):
        text = ('Here you go: [{"title":"A","description":"d","duration":"1w",'
                '"keyTasks":[],"successMetrics":[],"emoji":"🚀"}] thanks')

        stages = parse_timeline(text)

        assert len(stages) == 1
        assert stages[0].title == "A"
        assert stages[0].durationLabel == "1w"
        assert stages[0].emoji == "🚀"

    def test_preserves_stage_order(self):
        text = """```json
[
  {"title": "One", "description": "a", "duration": "1w", "keyTasks": ["x"], "successMetrics": ["y"], "emoji": "1"},
  {"title": "Two", "description": "b", "duration": "2w", "keyTasks": ["x"], "successMetrics": ["y"], "emoji": "2"}
]
```"""
        assert [stage.title for stage in parse_timeline(text)] == ["One", "Two"]

    @pytest.mark.parametrize("text", [
        '[{"title":"A","description":"d"',
        'no array here',
        '] backwards [',
        '[{"title": "A"}]',
        '[not json]',
        '',
    ])
    def test_malformed_input_raises(self, text):
        with pytest.raises(SerializationError):
            parse_timeline(text)


class TestStructuredParsers:
    """Tests for the strict JSON object parsers."""

    def test_timeline_modification(self):
        text = """{
  "kind": "add",
  "confidence": 0.8,
  "reasoning": "User wants a marketing stage",
  "changes": [
    {"action": "add", "targetStageId": null, "newPosition": 2,
     "newStage": {"title": "Marketing", "description": "Spread the word", "duration": "2 weeks",
                  "keyTasks": ["Plan campaign"], "successMetrics": ["100 signups"], "emoji": "📣"}}
  ],
  "suggestedReminders": [{"title": "Start campaign", "message": "Kick off", "daysFromNow": 3}],
  "suggestedNotes": [{"content": "Budget $500", "category": "Planning"}]
}"""
        plan = parse_timeline_modification(text)

        assert plan.kind == "add"
        assert plan.confidence == 0.8
        assert plan.changes[0].targetStageId is None
        assert plan.changes[0].newStage.title == "Marketing"
        assert plan.changes[0].newPosition == 2
        assert plan.suggestedReminders[0].daysFromNow == 3
        assert plan.suggestedNotes[0].content == "Budget $500"

    def test_timeline_modification_rejects_out_of_range_confidence(self):
        with pytest.raises(SerializationError):
            parse_timeline_modification('{"kind": "add", "confidence": 1.5, "reasoning": "x"}')

    def test_structured_parsers_do_not_strip_prose(self):
        with pytest.raises(SerializationError):
            parse_optimization_order('Sure! {"optimizedOrder": ["a"], "reasoning": "r"}')

    def test_smart_suggestions(self):
        text = """{
  "nextActions": [{"title": "Call 5 leads", "description": "Warm list", "priority": "high", "estimatedTime": "1 hour"}],
  "improvementOpportunities": [{"area": "Pricing", "suggestion": "Add a tier", "impact": "medium"}],
  "riskItems": [{"risk": "Cash flow", "severity": "high", "mitigation": "Pre-sell"}],
  "resourceRecommendations": [{"title": "Lean Startup", "type": "book", "description": "Classic", "url": null}],
  "milestoneAdjustments": [{"stageId": "s2", "suggestion": "Extend by a week", "reason": "Holidays"}]
}"""
        bundle = parse_smart_suggestions(text)

        assert bundle.nextActions[0].priority == "high"
        assert bundle.improvementOpportunities[0].area == "Pricing"
        assert bundle.riskItems[0].mitigation == "Pre-sell"
        assert bundle.resourceRecommendations[0].url is None
        assert bundle.milestoneAdjustments[0].stageId == "s2"

    def test_optimization_order(self):
        order = parse_optimization_order('{"optimizedOrder": ["s2", "s1"], "reasoning": "Validate first"}')

        assert order.optimizedOrder == ["s2", "s1"]
        assert order.reasoning == "Validate first"

    def test_invalid_json_raises(self):
        with pytest.raises(SerializationError):
            parse_smart_suggestions("not json")


class TestParseBrainDumpIdea:
    """Tests for the brain dump parser."""

    def test_object_is_found_inside_prose(self):
        text = 'Here you go:\n{"name": "Dog Walk Co", "tagline": "Happy dogs", "description": "Walks on demand."}\nEnjoy!'

        idea = parse_brain_dump_idea(text, "I like dogs")

        assert idea.title == "Dog Walk Co"
        assert idea.personalNote == "Happy dogs"
        assert idea.description == "Walks on demand."
        assert idea.category == "General"

    def test_missing_fields_use_defaults_and_brain_dump(self):
        idea = parse_brain_dump_idea("{}", "  I like dogs  ")

        assert idea.title == BRAIN_DUMP_IDEA_DEFAULTS["title"]
        assert idea.description == "I like dogs"
        assert idea.personalNote == ""
        assert idea.estimatedRevenueRange == BRAIN_DUMP_IDEA_DEFAULTS["estimatedRevenueRange"]

    def test_non_string_fields_are_ignored(self):
        idea = parse_brain_dump_idea('{"name": 5, "description": ["x"], "problems": ["a"]}', "Dogs")

        assert idea.title == BRAIN_DUMP_IDEA_DEFAULTS["title"]
        assert idea.description == "Dogs"

    @pytest.mark.parametrize("text", [None, "", "no json here", "{not json}", "[1, 2]", "} {"])
    def test_no_decodable_object_returns_none(self, text):
        assert parse_brain_dump_idea(text, "Dogs") is None


if __name__ == "__main__":
    # This allows running the tests directly with python
    import sys
    sys.exit(pytest.main(["-v", __file__]))
