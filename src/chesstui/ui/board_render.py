"""Rich renderables for the board, the engine report and the console log."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chesstui.core.piece import Piece
from chesstui.core.types import Relative, square_name

if TYPE_CHECKING:
    from chesstui.core.position import Position
    from chesstui.engine.search import Evaluation
    from chesstui.game.session import GameSession

LIGHT_SQUARE = "black on grey62"
DARK_SQUARE = "black on grey35"
GRABBED_SQUARE = "black on red"
TARGET_SQUARE = "black on green"

TITLE = "Chess TUI"


def square_style(
    ix: int, row: int, col: int, grabbed: int | None, targets: set[int]
) -> str:
    if ix in targets:
        return TARGET_SQUARE
    if ix == grabbed:
        return GRABBED_SQUARE
    return DARK_SQUARE if (row + col) % 2 else LIGHT_SQUARE


def render_board(position: Position, *, flipped: bool = False) -> Table:
    """8x8 grid with rank / file labels, highlighting the grabbed piece and
    its legal destinations."""
    targets = set(position.legal_destinations())
    grabbed = position.selection.square

    table = Table(
        title="Board",
        show_header=False,
        box=box.SQUARE,
        padding=0,
        pad_edge=False,
    )
    table.add_column(width=2, justify="center")
    for _ in range(8):
        table.add_column(width=3, justify="center")

    for row in range(8):
        rank_label = square_name(Relative(0, row, flipped).ix)[1]
        cells: list[RenderableType] = [Text(rank_label)]
        for col in range(8):
            ix = Relative(col, row, flipped).ix
            value = position.board[ix]
            glyph = Piece.decode(value).symbol if value else " "
            style = square_style(ix, row, col, grabbed, targets)
            cells.append(Text(f" {glyph} ", style=style))
        table.add_row(*cells)

    files = [Text(square_name(Relative(col, 7, flipped).ix)[0]) for col in range(8)]
    table.add_row(Text(""), *files)
    return table


def render_evaluation(evaluation: Evaluation | None, best_move: str | None) -> Panel:
    lines: list[str] = []
    if evaluation is None:
        lines.append("no evaluation")
    else:
        lines.append(str(evaluation))
        lines.append("")
        lines.append(f"moves: {', '.join(evaluation.pv)}")
    if best_move is not None:
        lines.append(f"best move: {best_move}")
    return Panel(Text("\n".join(lines)), title="Engine Evaluation", box=box.SQUARE)


def render_log(lines: Iterable[str], height: int = 16) -> Panel:
    tail = list(lines)[-height:]
    return Panel(Text("\n".join(tail)), title="Console", box=box.SQUARE)


def render_status(position: Position) -> Text:
    side = str(position.side_to_move)
    status = f"{side} to move"
    if position.is_in_check():
        status += " (check)"
    return Text(status, style="bold")


def render_screen(session: GameSession) -> RenderableType:
    """Everything drawn on one refresh."""
    layout = Table.grid(padding=(0, 2))
    layout.add_column()
    layout.add_column()
    layout.add_row(
        render_board(session.position, flipped=session.flipped),
        render_evaluation(session.evaluation, session.best_move),
    )
    return Group(
        Text(TITLE, style="bold magenta"),
        layout,
        render_status(session.position),
        render_log(session.log),
    )
