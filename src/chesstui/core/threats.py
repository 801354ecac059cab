"""Threat map: which squares the side *not* to move attacks.

The map is rebuilt from scratch after every change of board contents or side
to move.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesstui.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesstui.core.position import Position


def compute_threat_map(position: Position) -> bytearray:
    """One byte per square, nonzero where the opponent of the mover attacks."""
    threats = bytearray(64)
    attacker = position.side_to_move.opposite
    for sq in MoveGenerator(position).attack_targets(attacker):
        threats[sq] = 1
    return threats
