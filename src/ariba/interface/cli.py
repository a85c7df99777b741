"""ariba CLI — deck management, reviews, analytics and export."""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from ariba.application.config import resolve_config
from ariba.domain.errors import AribaError, InvalidGrade

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="ariba: spaced-repetition flashcards with SM-2 scheduling.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage ariba configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _fail(message: str, code: int = 1) -> typer.Exit:
    typer.secho(message, fg="red", err=True)
    return typer.Exit(code)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    deck: Annotated[
        Path | None, typer.Option("--deck", help="Deck file. Defaults to 'deck_path' in config.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for ariba."""
    ctx.ensure_object(dict)
    ctx.obj["deck_path"] = deck
    if verbose:
        logging.getLogger("ariba").setLevel(logging.DEBUG)


def _config(ctx: typer.Context):
    obj = ctx.obj or {}
    return resolve_config({"deck_path": obj.get("deck_path")})


# ---------------------------------------------------------------------------
# Deck commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    front: Annotated[str, typer.Argument(help="Prompt side of the card.")],
    back: Annotated[str, typer.Argument(help="Answer side of the card.")],
    tag: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Tag; repeatable.")] = None,
    difficulty: Annotated[float, typer.Option(help="Initial difficulty estimate.")] = 0.0,
):
    """[bold green]Add[/bold green] a new card to the deck."""
    from ariba.application.card_service import new_card
    from ariba.application.factory import get_card_service

    config = _config(ctx)
    card = new_card(
        front,
        back,
        tags=tag or [],
        difficulty=difficulty,
        easiness_factor=config.default_easiness,
    )
    try:
        get_card_service(config).add(card)
    except AribaError as e:
        raise _fail(str(e)) from e
    typer.echo(card.id)


@app.command()
def review(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Id of the reviewed card.")],
    grade: Annotated[int, typer.Argument(help="Recall quality, 0 (blackout) to 5 (perfect).")],
):
    """Record a review and schedule the card's next one."""
    from ariba.application.factory import get_card_service

    config = _config(ctx)
    try:
        card = get_card_service(config).review(card_id, grade)
    except InvalidGrade as e:
        raise _fail(str(e), code=2) from e
    except KeyError as e:
        raise _fail(f"Unknown card: {card_id}") from e
    except AribaError as e:
        raise _fail(str(e)) from e

    typer.secho(
        f"Next review in {card.interval} day(s) "
        f"(repetitions {card.repetitions}, easiness {card.easiness_factor:.2f})",
        fg="green",
    )


@app.command()
def due(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List cards due for review, most overdue first."""
    from ariba.application.analytics import due_cards
    from ariba.application.clock import system_clock
    from ariba.application.factory import get_card_store

    config = _config(ctx)
    try:
        cards = due_cards(get_card_store(config).load(), now=system_clock())
    except AribaError as e:
        raise _fail(str(e)) from e

    if json_output:
        typer.echo(json.dumps([asdict(c) for c in cards], indent=2))
        return

    if not cards:
        typer.secho("Nothing due.", fg="green")
        return
    for card in cards:
        typer.echo(f"{card.id}  {card.front_text}")


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show learning analytics for the deck."""
    from ariba.application.analytics import analyze
    from ariba.application.factory import get_card_store, get_review_log
    from ariba.domain.errors import EmptyCollection

    config = _config(ctx)
    try:
        cards = get_card_store(config).load()
        analytics = analyze(cards, reviews=get_review_log(config).events())
    except EmptyCollection as e:
        raise _fail("Deck is empty; add cards first.") from e
    except AribaError as e:
        raise _fail(str(e)) from e

    if json_output:
        typer.echo(json.dumps(asdict(analytics), indent=2))
        return

    typer.echo(f"Cards: {analytics.total_cards}  Mastered: {analytics.mastered_cards}")
    typer.echo(f"Success rate: {analytics.success_rate:.0%}")
    typer.echo(f"Average difficulty: {analytics.avg_response_time:.2f}")
    typer.echo(f"Study streak: {analytics.study_streak} day(s)")


@app.command()
def export(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Destination file.")],
    fmt: Annotated[
        str | None,
        typer.Option("--format", help="Output format: json or yaml. Defaults to the file suffix."),
    ] = None,
):
    """Export the deck to a JSON or YAML file."""
    from ariba.application.deck_exporter import export_deck
    from ariba.application.factory import get_card_store

    config = _config(ctx)
    try:
        message = export_deck(get_card_store(config).load(), path, fmt)
    except AribaError as e:
        raise _fail(str(e)) from e
    typer.secho(message, fg="green")


@app.command()
def remind(
    ctx: typer.Context,
    message: Annotated[str, typer.Argument(help="Reminder text.")],
):
    """Send a study reminder."""
    from ariba.application.factory import get_notifier

    get_notifier(_config(ctx)).send(message)


@app.command()
def serve(
    port: Annotated[int | None, typer.Option(help="Port to bind the server to.")] = None,
    host: Annotated[str | None, typer.Option(help="Host to bind the server to.")] = None,
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API."""
    import uvicorn

    config = resolve_config({"port": port, "host": host})
    uvicorn.run("ariba.server:app", host=config.host, port=config.port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()
