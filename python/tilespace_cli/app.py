"""Rich terminal frontend: board tables, exploration progress and playback.

Every screen is drawn from engine objects only (``Puzzle``, the search
algorithms and the two players); nothing here decides puzzle rules.
"""

from __future__ import annotations

import asyncio
import logging
import threading

import rich.box
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from tilespace.engine.generator import GoalStateHolder, StateGenerator
from tilespace.engine.playback import PlayerState, SearchProcessPlayer, SolutionPlayer
from tilespace.engine.search import GraphSummary, SearchOutcome, SearchStepResult, summarize
from tilespace.engine.session import Puzzle
from tilespace.engine.solver import Solver, create_algorithm, create_stepwise_algorithm
from tilespace.models import Direction, PuzzleState, SearchProgress, reachable_states
from tilespace_cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

console = Console()

# Popped states between progress bar refreshes.
_PROGRESS_EVERY = 1000

_DIRECTION_KEYS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- rendering ----------------------------------------------------------------


def render_board(state: PuzzleState, goal: PuzzleState | None = None) -> Table:
    """Return a Rich Table for *state*; tiles already where *goal* has them are green."""
    width = len(str(state.total_cells - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(state.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(state.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif goal is not None and goal[r, c] == val:
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def render_summary(summary: GraphSummary) -> Table:
    table = Table(
        title=f"{summary.states} states, {summary.edges} edges",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("Depth", justify="right", style="dim")
    table.add_column("States", justify="right", style="yellow")
    for depth, count in summary.depth_counts.items():
        table.add_row(str(depth), str(count))
    return table


def render_moves(moves: list[Direction]) -> Text:
    text = Text()
    text.append(f"{len(moves)} moves: ", style="bold cyan")
    text.append(" ".join(d.value for d in moves) or "(already at goal)")
    return text


def _controls(*pairs: tuple[str, str]) -> Text:
    controls = Text()
    for key, label in pairs:
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f"  {label} ", style="dim")
    return controls


def _draw(title: str, body: RenderableType, status: str = "", footer: Text | None = None,
          border: str = "bright_blue") -> None:
    console.clear()
    console.print()
    console.print(Align.center(Panel(Align.center(body), title=title,
                                     border_style=border, padding=(1, 2))))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    if footer is not None:
        console.print(Align.center(footer))


# -- exploration --------------------------------------------------------------


def run_explore(
    start: PuzzleState,
    goal: PuzzleState | None = None,
    algorithm: str = "bfs",
) -> SearchOutcome:
    """Run a bulk search in the background while drawing a progress bar.

    Ctrl-C cancels the worker at its next expansion.
    """
    search = create_algorithm(algorithm)
    cancel = threading.Event()
    total = reachable_states(start.size)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as bar:
        task = bar.add_task(f"Exploring ({search.name})", total=total)

        def report(progress: SearchProgress) -> None:
            if progress.explored_count % _PROGRESS_EVERY == 0:
                bar.update(task, completed=progress.explored_count)

        progress = SearchProgress(report, total)
        try:
            outcome = asyncio.run(search.search_async(start, goal, progress, cancel))
        except KeyboardInterrupt:
            logger.info("Exploration interrupted")
            cancel.set()
            outcome = SearchOutcome.CANCELLED
        bar.update(task, completed=progress.explored_count)

    if outcome is SearchOutcome.COMPLETED:
        summary = summarize(search.get_result())
        console.print(Align.center(render_summary(summary)))
        console.print(
            Align.center(Text(f"Deepest state: {summary.max_depth} moves", style="dim"))
        )
    elif outcome is SearchOutcome.NO_PATH:
        console.print("[red]The goal is not reachable from this start state.[/red]")
    else:
        console.print("[yellow]Exploration cancelled.[/yellow]")
    return outcome


# -- solution playback --------------------------------------------------------


def animate_solution(
    start: PuzzleState,
    moves: list[Direction],
    goal: PuzzleState | None = None,
    interval: float = 0.05,
) -> None:
    """Replay *moves* from *start*; space pauses, ``,``/``.`` step, ``r`` rewinds."""
    player = SolutionPlayer(start)
    player.set_solution(moves)
    footer = _controls(("SPACE", "play/pause"), (",  .", "step"), ("R", "rewind"), ("Q", "back"))

    while True:
        played = len(player.puzzle.visited_route()) - 1
        status = (
            f"[cyan]{player.current_state.value}[/cyan]  "
            f"move {played}/{len(moves)}"
        )
        _draw(f"[bold cyan]Solution  {start.size}×{start.size}[/bold cyan]",
              render_board(player.state, goal), status, footer, border="cyan")

        key = get_key_timeout(interval)
        if key is None:
            if player.current_state is PlayerState.PLAYING:
                player.step_forward()
            continue
        if key == "toggle":
            if player.current_state is PlayerState.PLAYING:
                player.pause()
            else:
                player.play()
        elif key in ("forward", "right"):
            player.pause()
            player.step_forward()
        elif key in ("back", "left"):
            player.pause()
            player.step_back()
        elif key == "restart":
            player.reset()
            player.set_solution(moves)
        elif key == "quit":
            return


# -- stepwise search ----------------------------------------------------------


def print_search_steps(
    start: PuzzleState,
    goal: PuzzleState | None = None,
    algorithm: str = "bfs",
    max_steps: int = 20,
) -> list[SearchStepResult]:
    """Expand up to *max_steps* states and print one table row per expansion."""
    player = SearchProcessPlayer(create_stepwise_algorithm(algorithm), start, goal)
    results: list[SearchStepResult] = []
    player.subscribe_steps(results.append)

    while player.can_step_forward and len(results) < max_steps:
        player.step_forward()

    table = Table(box=rich.box.SIMPLE_HEAD, title=f"{algorithm} expansions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Depth", justify="right", style="yellow")
    table.add_column("Parent move")
    table.add_column("State")
    for i, result in enumerate(results, 1):
        parent = result.node_data.parent
        move = parent.move_direction_to(result.expanded_state).value if parent else "-"
        table.add_row(str(i), str(result.node_data.depth), move,
                      " ".join(map(str, result.expanded_state.values)))
    console.print(table)

    algo = player.algorithm
    console.print(
        f"[dim]{len(algo.get_result())} states discovered, "
        f"{algo.pending} waiting, {algo.state.value}[/dim]"
    )
    return results


def watch_search(
    start: PuzzleState,
    goal: PuzzleState | None = None,
    algorithm: str = "bfs",
    interval: float = 0.05,
) -> None:
    """Animate a stepwise search one expansion per tick."""
    current = start
    depth = 0

    def on_step(result: SearchStepResult) -> None:
        nonlocal current, depth
        current = result.expanded_state
        depth = result.node_data.depth

    def start_player() -> SearchProcessPlayer:
        player = SearchProcessPlayer(create_stepwise_algorithm(algorithm), start, goal)
        player.subscribe_steps(on_step)
        return player

    player = start_player()
    footer = _controls(("SPACE", "play/pause"), (".", "step"), ("R", "restart"), ("Q", "back"))

    while True:
        algo = player.algorithm
        status = (
            f"[cyan]{player.current_state.value}[/cyan]  depth {depth}  "
            f"discovered {len(algo.get_result())}  waiting {algo.pending}"
        )
        _draw(f"[bold yellow]Stepwise {algorithm.upper()}[/bold yellow]",
              render_board(current, goal), status, footer, border="yellow")

        key = get_key_timeout(interval)
        if key is None:
            if player.current_state is PlayerState.PLAYING:
                player.step_forward()
            continue
        if key == "toggle":
            if player.current_state is PlayerState.PLAYING:
                player.pause()
            else:
                player.play()
        elif key in ("forward", "right"):
            player.pause()
            player.step_forward()
        elif key == "restart":
            player.reset()
            player = start_player()
            current, depth = start, 0
        elif key == "quit":
            return


# -- interactive play ---------------------------------------------------------


def _apply_hint(puzzle: Puzzle, goal: PuzzleState | None, algorithm: str) -> str:
    hint = Solver.hint(puzzle.state, goal, algorithm)
    if hint is None:
        if puzzle.state == goal:
            return "[green]Already solved![/green]"
        return "[yellow]No hint available.[/yellow]"
    puzzle.try_move(hint)
    return f"[cyan]Hint:[/cyan] moved [bold]{hint.value}[/bold]"


def play(
    start: PuzzleState | None = None,
    goals: GoalStateHolder | None = None,
    algorithm: str = "astar",
    size: int = 3,
    history_limit: int = 1000,
    interval: float = 0.05,
) -> None:
    """Interactive session: move the blank, undo/redo, ask for hints or a full solution."""
    goals = goals or GoalStateHolder(StateGenerator.solved(start.size if start else size))
    puzzle = Puzzle(start or StateGenerator.generate(size), history_limit)
    goals.update_parity(puzzle.state)
    status = ""
    footer = _controls(
        ("↑↓←→/WASD", "move blank"),
        ("U/Y", "undo/redo"),
        ("N", "hint"),
        ("V", "solve"),
        ("R", "scramble"),
        ("Q", "quit"),
    )

    while True:
        goal = goals.goal_state
        if goal is not None and puzzle.state == goal:
            status = status or "[bold green]★ Solved! ★[/bold green]"
        moves = Text.from_markup(
            f"[dim]history[/dim] [bold yellow]{len(puzzle.visited_route()) - 1}[/bold yellow]"
        )
        body = Group(Align.center(render_board(puzzle.state, goal)), Align.center(moves))
        _draw(f"[bold cyan]Tile Space  {puzzle.size}×{puzzle.size}[/bold cyan]",
              body, status, footer)
        status = ""

        key = get_key()
        if key in _DIRECTION_KEYS:
            if not puzzle.try_move(_DIRECTION_KEYS[key]):
                status = "[dim]Blocked.[/dim]"
        elif key == "undo":
            if not puzzle.undo():
                status = "[dim]Nothing to undo.[/dim]"
        elif key == "redo":
            if not puzzle.redo():
                status = "[dim]Nothing to redo.[/dim]"
        elif key == "hint":
            status = _apply_hint(puzzle, goal, algorithm)
        elif key == "solve":
            if goal is None:
                status = "[yellow]No goal set for this parity.[/yellow]"
                continue
            solution = Solver.solve(puzzle.state, goal, algorithm)
            logger.debug("Animating %d-move solution", len(solution))
            animate_solution(puzzle.state, solution, goal, interval)
        elif key == "restart":
            puzzle.set_state(StateGenerator.generate(puzzle.size))
            goals.update_parity(puzzle.state)
            status = "[yellow]Scrambled![/yellow]"
        elif key == "quit":
            console.clear()
            return
