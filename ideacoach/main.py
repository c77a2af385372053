import asyncio
from typing import List

import typer
from rich import print
from rich.table import Table

from ideacoach.constants import IDEA_DEFAULTS
from ideacoach.exceptions import AIServiceError
from ideacoach.factory import create_pipeline
from ideacoach.models.idea import BusinessIdeaDraft, IdeaCategory
from ideacoach.services.response_parsers import normalize_choice

app = typer.Typer(help="Try the ideacoach AI tasks from the terminal.")


def _run(coro):
    try:
        return asyncio.run(coro)
    except AIServiceError as e:
        print(f"[bold red]{e.user_message}[/bold red] ({e.kind}: {e})")
        raise typer.Exit(code=1)


def _idea(title: str, description: str, category: str) -> BusinessIdeaDraft:
    return BusinessIdeaDraft(
        title=title,
        description=description.strip() or IDEA_DEFAULTS["description"],
        category=normalize_choice(category, IdeaCategory, IDEA_DEFAULTS["category"]),
        difficulty="Medium",
        estimatedRevenueRange="",
        launchTimeframe="",
        startupCostRange="",
        profitMarginRange="",
        marketDemand="Medium",
        competitionLevel="Medium",
        personalNote="",
    )


@app.command()
def ideas(
    skill: List[str] = typer.Option(..., "--skill", "-s"),
    personality: List[str] = typer.Option(..., "--personality", "-p"),
    interest: List[str] = typer.Option(..., "--interest", "-i"),
):
    """Generate business ideas for a skills/personality/interests profile."""
    drafts = _run(create_pipeline().generate_ideas(skill, personality, interest))
    table = Table(title="Business ideas")
    for column in ("Title", "Category", "Difficulty", "Revenue", "Demand", "Competition"):
        table.add_column(column)
    for draft in drafts:
        table.add_row(
            draft.title, draft.category, draft.difficulty,
            draft.estimatedRevenueRange, draft.marketDemand, draft.competitionLevel,
        )
    print(table)


@app.command()
def quiz(step: int = typer.Argument(..., min=1, max=3), skill: List[str] = typer.Option([], "--skill", "-s")):
    """Generate options for a quiz step (1 skills, 2 personality, 3 interests)."""
    options = _run(create_pipeline().generate_quiz_options(step, {"skills": skill}))
    print(f"[bold]{options.stepCategory}[/bold]")
    for option in options.options:
        typer.echo(f"  {option}")


@app.command()
def analyze(title: str, description: str, category: str = "General"):
    """Run a SWOT-style analysis of an idea."""
    analysis = _run(create_pipeline().analyze_idea(_idea(title, description, category)))
    print(f"[bold]Viability:[/bold] {analysis.viabilityScore}/100")
    for section in ("strengths", "weaknesses", "opportunities", "threats", "recommendations"):
        print(f"[bold]{section.title()}[/bold]")
        for item in getattr(analysis, section):
            typer.echo(f"  - {item}")


@app.command()
def advise(context: str, goal: List[str] = typer.Option([], "--goal", "-g")):
    """Ask for personalized coaching advice."""
    typer.echo(_run(create_pipeline().get_advice(context, goal)))


@app.command()
def timeline(title: str, description: str, stages: int = typer.Option(6, min=1, max=6)):
    """Generate a launch timeline for an idea."""
    for index, stage in enumerate(_run(create_pipeline().generate_timeline(title, description, stages)), start=1):
        print(f"{stage.emoji} [bold]{index}. {stage.title}[/bold] ({stage.durationLabel})")
        typer.echo(f"   {stage.description}")


@app.command()
def goals(title: str, description: str, progress: int = typer.Option(0, min=0, max=100)):
    """Suggest today's goals for an idea."""
    for goal in _run(create_pipeline().generate_daily_goals(_idea(title, description, "General"), progress)):
        typer.echo(f"- {goal}")


@app.command()
def braindump(thoughts: str):
    """Turn free-form thoughts into one business idea."""
    draft = _run(create_pipeline().brain_dump_to_idea(thoughts))
    print(f"[bold]{draft.title}[/bold]")
    if draft.personalNote:
        typer.echo(draft.personalNote)
    typer.echo(draft.description)


@app.command()
def ask(question: str):
    """Ask the assistant a free-form question."""
    typer.echo(_run(create_pipeline().assistant_chat(question)))


if __name__ == "__main__":
    app()
