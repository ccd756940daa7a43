"""Command-line entry points: play, solve, explore, step and settings."""

import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from tilespace.engine.generator import GoalStateHolder, StateGenerator
from tilespace.engine.search import SearchOutcome
from tilespace.engine.solver import Solver
from tilespace.errors import TileSpaceError
from tilespace.models import PuzzleState, Settings, SettingsManager
from tilespace_cli import app as frontend

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"

logger = logging.getLogger("tilespace")


# -- option types -------------------------------------------------------------


class Algorithm(StrEnum):
    astar = "astar"
    bfs = "bfs"
    dfs = "dfs"


class StepAlgorithm(StrEnum):
    bfs = "bfs"
    dfs = "dfs"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=frontend.console, rich_tracebacks=True)],
        force=True,
    )


def parse_layout(raw: str | None) -> PuzzleState | None:
    """Turn ``"1,2,3,4,5,6,7,8,0"`` into a validated state; size follows the length."""
    if raw is None:
        return None
    values = [v for v in raw.replace(" ", ",").split(",") if v]
    try:
        return PuzzleState.create(values)
    except (TileSpaceError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


class Defaults:
    """Stored settings with the global ``--size`` override applied."""

    def __init__(self, manager: SettingsManager, size: int | None) -> None:
        self.manager = manager
        self.size = size or manager.settings.grid_size

    @property
    def settings(self) -> Settings:
        return self.manager.settings

    def _stored_applies(self) -> bool:
        return self.size == self.settings.grid_size

    def start(self, raw: str | None) -> PuzzleState:
        if raw is not None:
            return parse_layout(raw)  # type: ignore[return-value]
        if self._stored_applies() and self.settings.start is not None:
            return self.settings.start_state()  # type: ignore[return-value]
        return StateGenerator.generate(self.size)

    def goals(self, raw: str | None, size: int) -> GoalStateHolder:
        even, odd = self.settings.goal_states() if size == self.settings.grid_size else (None, None)
        holder = GoalStateHolder(even or StateGenerator.solved(size), odd)
        goal = parse_layout(raw)
        if goal is not None:
            holder.set_state(goal)
        return holder

    def goal_for(self, start: PuzzleState, raw: str | None) -> PuzzleState | None:
        holder = self.goals(raw, start.size)
        holder.update_parity(start)
        return holder.goal_state


# -- CLI ----------------------------------------------------------------------

app = typer.Typer(add_completion=False, help="Explore the state space of sliding-tile puzzles.")


@app.callback()
def main(
    ctx: typer.Context,
    size: Optional[int] = typer.Option(
        None, "-s", "--size", min=2, max=8,
        help="Grid size when no layout is given (defaults to settings).",
    ),
    settings_path: Path = typer.Option(
        DATA_DIR / "settings.json", "--settings",
        help="JSON settings file.",
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None, "--log-level",
        help="Log verbosity (defaults to settings).",
    ),
) -> None:
    """Tile Space Explorer."""
    _configure_logging(log_level or "INFO")
    manager = SettingsManager(settings_path)
    if log_level is None:
        try:
            logging.getLogger().setLevel(manager.settings.log_level.upper())
        except ValueError:
            logger.warning("Unknown log level %r in settings", manager.settings.log_level)
    ctx.obj = Defaults(manager, size)


@app.command()
def play(
    ctx: typer.Context,
    start: Optional[str] = typer.Option(None, "--start", help="Comma-separated start layout."),
    goal: Optional[str] = typer.Option(None, "--goal", help="Comma-separated goal layout."),
    algorithm: Optional[Algorithm] = typer.Option(None, "-a", "--algorithm"),
) -> None:
    """Play interactively with undo, redo, hints and auto-solve."""
    defaults: Defaults = ctx.obj
    try:
        start_state = defaults.start(start)
        frontend.play(
            start=start_state,
            goals=defaults.goals(goal, start_state.size),
            algorithm=algorithm or defaults.settings.algorithm,
            history_limit=defaults.settings.history_limit,
            interval=defaults.settings.step_interval,
        )
    except TileSpaceError as exc:
        logger.error("%s", exc)
        raise typer.Exit(1) from exc


@app.command()
def solve(
    ctx: typer.Context,
    start: Optional[str] = typer.Option(None, "--start", help="Comma-separated start layout."),
    goal: Optional[str] = typer.Option(None, "--goal", help="Comma-separated goal layout."),
    algorithm: Optional[Algorithm] = typer.Option(None, "-a", "--algorithm"),
    animate: bool = typer.Option(False, "--animate", help="Replay the solution on the board."),
) -> None:
    """Print a move sequence from start to goal."""
    defaults: Defaults = ctx.obj
    try:
        start_state = defaults.start(start)
        goal_state = defaults.goal_for(start_state, goal)
        if goal_state is None:
            logger.error("No goal configured for the start state's reachability class")
            raise typer.Exit(1)
        if not Solver.is_solvable(start_state, goal_state):
            logger.error("The goal is not reachable from this start state")
            raise typer.Exit(1)

        frontend.console.print(frontend.render_board(start_state, goal_state))
        moves = Solver.solve(start_state, goal_state, algorithm or defaults.settings.algorithm)
        frontend.console.print(frontend.render_moves(moves))
        if animate:
            frontend.animate_solution(
                start_state, moves, goal_state, defaults.settings.step_interval
            )
    except TileSpaceError as exc:
        logger.error("%s", exc)
        raise typer.Exit(1) from exc


@app.command()
def explore(
    ctx: typer.Context,
    start: Optional[str] = typer.Option(None, "--start", help="Comma-separated start layout."),
    goal: Optional[str] = typer.Option(
        None, "--goal", help="Stop once this layout is found instead of exploring everything.",
    ),
    algorithm: Algorithm = typer.Option(Algorithm.bfs, "-a", "--algorithm"),
) -> None:
    """Build the exploration graph and print a depth histogram."""
    defaults: Defaults = ctx.obj
    try:
        start_state = defaults.start(start)
        frontend.console.print(frontend.render_board(start_state))
        outcome = frontend.run_explore(start_state, parse_layout(goal), algorithm)
    except TileSpaceError as exc:
        logger.error("%s", exc)
        raise typer.Exit(1) from exc
    if outcome is not SearchOutcome.COMPLETED:
        raise typer.Exit(1)


@app.command()
def step(
    ctx: typer.Context,
    start: Optional[str] = typer.Option(None, "--start", help="Comma-separated start layout."),
    goal: Optional[str] = typer.Option(None, "--goal", help="Comma-separated goal layout."),
    algorithm: StepAlgorithm = typer.Option(StepAlgorithm.bfs, "-a", "--algorithm"),
    steps: int = typer.Option(20, "-n", "--steps", min=1, help="Maximum expansions to show."),
    watch: bool = typer.Option(False, "--watch", help="Animate instead of printing a table."),
) -> None:
    """Run a search one expansion at a time."""
    defaults: Defaults = ctx.obj
    try:
        start_state = defaults.start(start)
        goal_state = defaults.goal_for(start_state, goal)
        if watch:
            frontend.watch_search(
                start_state, goal_state, algorithm, defaults.settings.step_interval
            )
        else:
            frontend.print_search_steps(start_state, goal_state, algorithm, steps)
    except TileSpaceError as exc:
        logger.error("%s", exc)
        raise typer.Exit(1) from exc


@app.command()
def settings(
    ctx: typer.Context,
    save: bool = typer.Option(False, "--save", help="Write the effective settings back to disk."),
) -> None:
    """Show the stored settings."""
    defaults: Defaults = ctx.obj
    for name, value in vars(defaults.settings).items():
        frontend.console.print(f"[cyan]{name:>14}[/cyan]  {value}")
    if save:
        defaults.manager.save()
        frontend.console.print(f"[dim]Saved to {defaults.manager.filepath}[/dim]")
