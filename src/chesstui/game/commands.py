"""Console command parsing.

Commands are either a ``!`` shorthand (``!fen`` prints the position, any
other ``!<text>`` loads ``<text>`` as FEN) or a leading word followed by an
optional argument, e.g. ``:move e2e4``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chesstui.core.errors import InvalidCommand, NoCommand


class CommandKind(IntEnum):
    EXIT = auto()
    PRINT_FEN = auto()
    SET_POSITION = auto()
    PLAY_MOVE = auto()
    GRAB = auto()
    DROP = auto()
    START_SEARCH = auto()
    STOP_SEARCH = auto()
    FLIP_BOARD = auto()
    PASS_TURN = auto()
    LIST_MOVES = auto()
    HISTORY = auto()
    HELP = auto()
    RESET = auto()


@dataclass(frozen=True, slots=True)
class Command:
    kind: CommandKind
    argument: str = ""


_WORDS: dict[str, CommandKind] = {
    "exit": CommandKind.EXIT,
    ":q": CommandKind.EXIT,
    ":quit": CommandKind.EXIT,
    ":fen": CommandKind.SET_POSITION,
    ":set-position": CommandKind.SET_POSITION,
    ":move": CommandKind.PLAY_MOVE,
    ":grab": CommandKind.GRAB,
    ":drop": CommandKind.DROP,
    ":search": CommandKind.START_SEARCH,
    ":stop": CommandKind.STOP_SEARCH,
    ":flipboard": CommandKind.FLIP_BOARD,
    ":passturn": CommandKind.PASS_TURN,
    ":moves": CommandKind.LIST_MOVES,
    ":history": CommandKind.HISTORY,
    ":help": CommandKind.HELP,
    ":reset": CommandKind.RESET,
}

# Shown by ``:help``, in display order.
HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("!fen", "Print current position as FEN"),
    ("!<fen>", "Set position on the board"),
    (":fen <fen>", "Set position on the board"),
    (":move <mv>", "Play move in long algebraic notation (e2e4, e7e8q, O-O)"),
    (":grab <sq>", "Pick up the piece on a square"),
    (":drop <sq>", "Put the grabbed piece down on a square"),
    (":moves", "List legal moves"),
    (":history", "List moves played"),
    (":reset", "Set starting position on the board"),
    (":search", "Start searching for best move"),
    (":stop", "Stop searching for best move"),
    (":flipboard", "Flip board vertically"),
    (":passturn", "Pass current player turn"),
    (":help", "Show this help"),
    (":q", "Quit"),
)


def parse_command(text: str) -> Command:
    """Parse one console line."""
    command = text.strip()
    if not command:
        raise NoCommand()

    if command.startswith("!"):
        rest = command[1:].strip()
        if rest.lower() == "fen":
            return Command(CommandKind.PRINT_FEN)
        return Command(CommandKind.SET_POSITION, rest)

    word, _, argument = command.partition(" ")
    kind = _WORDS.get(word.lower())
    if kind is None:
        raise InvalidCommand(command)
    argument = argument.strip()
    # ``:fen`` on its own prints rather than loads.
    if kind == CommandKind.SET_POSITION and word.lower() == ":fen" and not argument:
        return Command(CommandKind.PRINT_FEN)
    return Command(kind, argument)
