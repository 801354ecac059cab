"""Game layer: console commands and the interactive session.

Quick start::

    from chesstui.game import GameSession

    session = GameSession()
    session.execute(":move e2e4")
    print(session.fen)
"""

from chesstui.game.commands import Command, CommandKind, parse_command
from chesstui.game.session import GameSession, SessionEvents

__all__ = [
    "Command",
    "CommandKind",
    "GameSession",
    "SessionEvents",
    "parse_command",
]
