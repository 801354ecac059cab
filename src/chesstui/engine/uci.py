"""UCI protocol text: outgoing commands and parsing of engine replies."""

from __future__ import annotations

from chesstui.engine.search import Evaluation

UCI = "uci"
UCI_OK = "uciok"
IS_READY = "isready"
READY_OK = "readyok"
STOP = "stop"
QUIT = "quit"

_NO_MOVE = frozenset({"(none)", "0000"})
# Integer-valued info keys we keep; anything else is skipped.
_INT_KEYS = frozenset({"depth", "nodes"})
# Info keys followed by exactly one value we do not interpret.
_SKIP_ONE = frozenset(
    {
        "seldepth",
        "time",
        "nps",
        "hashfull",
        "tbhits",
        "multipv",
        "currmove",
        "currmovenumber",
        "cpuload",
        "sbhits",
    }
)


def position_command(fen: str) -> str:
    return f"position fen {fen}"


def go_command(**options: int) -> str:
    """``go`` with the given limits, or ``go infinite`` without any."""
    if not options:
        return "go infinite"
    parts = ["go"]
    for key, value in options.items():
        parts += [key, str(value)]
    return " ".join(parts)


def parse_info(line: str) -> Evaluation | None:
    """Parse an ``info`` line carrying a score; other lines give ``None``."""
    tokens = line.split()
    if not tokens or tokens[0] != "info":
        return None

    values: dict[str, int] = {}
    score_cp: int | None = None
    mate_in: int | None = None
    pv: tuple[str, ...] = ()

    i = 1
    while i < len(tokens):
        key = tokens[i]
        if key == "string":
            break
        if key == "pv":
            pv = tuple(tokens[i + 1 :])
            break
        if key == "score" and i + 2 < len(tokens):
            kind, raw = tokens[i + 1], tokens[i + 2]
            try:
                if kind == "cp":
                    score_cp = int(raw)
                elif kind == "mate":
                    mate_in = int(raw)
            except ValueError:
                return None
            i += 3
            # lowerbound / upperbound qualifiers
            while i < len(tokens) and tokens[i] in ("lowerbound", "upperbound"):
                i += 1
            continue
        if key in _INT_KEYS and i + 1 < len(tokens):
            try:
                values[key] = int(tokens[i + 1])
            except ValueError:
                return None
            i += 2
            continue
        i += 2 if key in _SKIP_ONE else 1

    if score_cp is None and mate_in is None:
        return None
    return Evaluation(
        depth=values.get("depth", 0),
        score_cp=score_cp,
        mate_in=mate_in,
        nodes=values.get("nodes", 0),
        pv=pv,
    )


def is_bestmove(line: str) -> bool:
    return line.split(maxsplit=1)[:1] == ["bestmove"]


def parse_bestmove(line: str) -> str | None:
    """Move text of a ``bestmove`` line, ``None`` when the engine has no move."""
    tokens = line.split()
    if len(tokens) < 2 or tokens[0] != "bestmove" or tokens[1] in _NO_MOVE:
        return None
    return tokens[1]
