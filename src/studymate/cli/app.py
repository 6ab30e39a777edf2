"""Main CLI application using Typer."""
import asyncio
import logging
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..assistant import Mode, StudyAssistant, sketch_filename
from ..llm import ImageInput
from ..prompts import load_prompt
from ..render import render_markdown_text
from ..schedule import schedule_to_json, schedule_to_text
from ..service import StudyService
from ..tutor import ChatHistory
from .providers import get_api_key, get_language, require_model

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="studymate",
    help="Study assistant: homework solver, sketcher, scheduler and tutor",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

_PROMPT_NAMES = (
    "detect_language",
    "solver",
    "cheat_sheet",
    "practice_problems",
    "practice_request",
    "sketch",
    "schedule",
    "tutor",
)


def configure_logging(level: str) -> None:
    """Route all records through one RichHandler on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # SDK transport logs are noise at our INFO level
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        os.getenv("STUDYMATE_LOG_LEVEL", "warning"),
        "--log-level",
        help="Logging level: debug, info, warning, error"
    ),
):
    """Configure logging before any command runs."""
    configure_logging(log_level)


def _assistant(language: str | None, on_chat_change=None) -> StudyAssistant:
    model = require_model(console)
    return StudyAssistant(StudyService(model), get_language(language), on_chat_change=on_chat_change)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(code=1)


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--panel-level",
        "-l",
        help="Show the log panel at this level (debug/info/warning/error)"
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        help="UI locale: en or ru (default from STUDYMATE_LANGUAGE or LANG)"
    ),
):
    """Launch the interactive terminal UI."""
    from ..ui import run_tui

    model = require_model(console)
    asyncio.run(run_tui(model, get_language(language), log_level=log_level))


@app.command()
def solve(
    prompt: str = typer.Argument("", help="Homework question"),
    image: Path | None = typer.Option(
        None,
        "--image",
        "-i",
        exists=True,
        dir_okay=False,
        help="Photo or screenshot of the problem"
    ),
    cheat_sheet: bool = typer.Option(False, "--cheat-sheet", help="Also create a cheat sheet"),
    practice: bool = typer.Option(False, "--practice", help="Also generate practice problems"),
    language: str | None = typer.Option(None, "--language", help="UI locale: en or ru"),
):
    """Solve a homework problem and print the answer."""
    async def _solve():
        assistant = _assistant(language)
        t = assistant.language.translate
        try:
            assistant.prompt = prompt.strip()
            if image is not None and not assistant.attach_image(image):
                _fail(assistant.solver.error)

            with console.status(t("solutionDisplay.generating")):
                await assistant.solve()
            if assistant.solver.error:
                _fail(assistant.solver.error)

            console.print(Panel(render_markdown_text(assistant.solver.solution), title=t("solutionDisplay.solution")))

            if cheat_sheet:
                with console.status(t("solutionDisplay.creatingCheatSheet")):
                    await assistant.create_cheat_sheet()
                if assistant.solver.cheat_sheet_error:
                    console.print(f"[red]{assistant.solver.cheat_sheet_error}[/red]")
                elif assistant.solver.cheat_sheet:
                    console.print(Panel(render_markdown_text(assistant.solver.cheat_sheet), title=t("buttons.cheatSheet")))

            if practice:
                with console.status(t("solutionDisplay.generatingPracticeProblems")):
                    await assistant.generate_practice_problems()
                if assistant.solver.practice_problems_error:
                    console.print(f"[red]{assistant.solver.practice_problems_error}[/red]")
                elif assistant.solver.practice_problems:
                    console.print(Panel(
                        render_markdown_text(assistant.solver.practice_problems),
                        title=t("solutionDisplay.practiceProblems"),
                    ))
        finally:
            await assistant.service.model.close()

    asyncio.run(_solve())


@app.command()
def sketch(
    prompt: str = typer.Argument(..., help="Concept to illustrate"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the JPEG"),
    language: str | None = typer.Option(None, "--language", help="UI locale: en or ru"),
):
    """Generate a textbook-style sketch and save it."""
    async def _sketch():
        assistant = _assistant(language)
        t = assistant.language.translate
        try:
            assistant.set_mode(Mode.SKETCHER)
            assistant.prompt = prompt.strip()
            with console.status(t("sketchDisplay.creating")):
                await assistant.generate_sketch()
            if assistant.sketcher.error:
                _fail(assistant.sketcher.error)

            path = output or Path(sketch_filename(prompt))
            path.write_bytes(assistant.sketcher.sketch)
            console.print(f"[green]Saved sketch to {path}[/green]")
        finally:
            await assistant.service.model.close()

    asyncio.run(_sketch())


@app.command(name="edit-sketch")
def edit_sketch(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Sketch to edit"),
    instruction: str = typer.Argument(..., help="How to change the sketch"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the result"),
    language: str | None = typer.Option(None, "--language", help="UI locale: en or ru"),
):
    """Apply an edit instruction to an existing sketch."""
    async def _edit():
        assistant = _assistant(language)
        t = assistant.language.translate
        try:
            assistant.set_mode(Mode.SKETCHER)
            assistant.sketcher.sketch = ImageInput.from_path(image).data
            with console.status(t("buttons.applying")):
                edited = await assistant.edit_sketch(instruction.strip())
            if not edited:
                _fail(assistant.sketcher.edit_error)

            path = output or image.with_name(f"{image.stem}_edited{image.suffix}")
            path.write_bytes(assistant.sketcher.sketch)
            console.print(f"[green]Saved edited sketch to {path}[/green]")
        finally:
            await assistant.service.model.close()

    asyncio.run(_edit())


@app.command()
def schedule(
    prompt: str = typer.Argument(..., help="Description of your week"),
    as_json: bool = typer.Option(False, "--json", help="Print the schedule as JSON"),
    language: str | None = typer.Option(None, "--language", help="UI locale: en or ru"),
):
    """Plan a weekly schedule from a description."""
    async def _schedule():
        assistant = _assistant(language)
        t = assistant.language.translate
        try:
            assistant.set_mode(Mode.SCHEDULER)
            assistant.prompt = prompt.strip()
            with console.status(t("scheduleDisplay.planning")):
                await assistant.generate_schedule()
            if assistant.scheduler.error:
                _fail(assistant.scheduler.error)

            data = assistant.scheduler.schedule
            if as_json:
                console.print_json(schedule_to_json(data))
                return

            table = Table(title=t("scheduleDisplay.weeklyPlan"), show_lines=True)
            table.add_column("Day", style="bold cyan")
            table.add_column(t("editModal.time"))
            table.add_column(t("editModal.eventTitle"), style="bold")
            table.add_column(t("editModal.description"), style="dim")
            for day in data:
                if not day.events:
                    table.add_row(day.day, "", t("scheduleDisplay.noEvents"), "")
                for position, event in enumerate(day.events):
                    table.add_row(day.day if position == 0 else "", event.time, event.title, event.description)
            console.print(table)
            logger.debug("Schedule text:\n%s", schedule_to_text(data))
        finally:
            await assistant.service.model.close()

    asyncio.run(_schedule())


@app.command()
def tutor(
    language: str | None = typer.Option(None, "--language", help="UI locale: en or ru"),
):
    """Interactive tutoring chat with streamed replies."""
    async def _tutor():
        live: Live | None = None

        def _on_change(history: ChatHistory) -> None:
            if live is not None and history and history[-1].role == "model":
                live.update(render_markdown_text(history[-1].text, is_streaming=True, inline_code=True))

        assistant = _assistant(language, on_chat_change=_on_change)
        t = assistant.language.translate
        assistant.set_mode(Mode.TUTOR)

        console.print(f"[bold cyan]{t('tutorDisplay.placeholderTitle')}[/bold cyan]")
        console.print(f"[dim]{t('tutorDisplay.placeholderText')}[/dim]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue
                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                assistant.prompt = user_input.strip()
                with Live(console=console, refresh_per_second=12) as live:
                    await assistant.send_message()
                    reply = assistant.tutor.history[-1] if assistant.tutor.history else None
                    if reply is not None and reply.role == "model":
                        live.update(render_markdown_text(reply.text, inline_code=True))
                live = None

                if assistant.tutor.error:
                    console.print(f"[red]{assistant.tutor.error}[/red]")
                console.print()
        finally:
            await assistant.service.model.close()

    asyncio.run(_tutor())


@app.command()
def health():
    """Check configuration and service reachability."""
    async def _health():
        all_healthy = True

        try:
            for name in _PROMPT_NAMES:
                load_prompt(name)
            console.print(f"[green]+[/green] Prompt templates: OK ({len(_PROMPT_NAMES)})")
        except FileNotFoundError as e:
            console.print(f"[red]x[/red] Prompt templates: FAILED ({e})")
            all_healthy = False

        if not get_api_key():
            console.print("[yellow]![/yellow] Gemini API key: NOT SET")
            raise typer.Exit(code=1)
        console.print("[green]+[/green] Gemini API key: SET")

        model = require_model(console)
        try:
            response = await model.generate_text("ping", "Reply with the single word OK.", thinking=False)
            console.print(f"[green]+[/green] Gemini text model: OK ({response.model})")
        except Exception as e:
            console.print(f"[red]x[/red] Gemini text model: FAILED ({e})")
            all_healthy = False
        finally:
            await model.close()

        if not all_healthy:
            raise typer.Exit(code=1)

    asyncio.run(_health())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
