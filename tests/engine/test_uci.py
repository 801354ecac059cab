"""Tests for UCI text commands and reply parsing."""

import pytest

from chesstui.engine.search import Evaluation, NoopEngine
from chesstui.engine.uci import (
    go_command,
    is_bestmove,
    parse_bestmove,
    parse_info,
    position_command,
)


class TestCommands:
    def test_position(self) -> None:
        assert position_command("8/8/8/8/8/8/8/8 w - - 0 1") == (
            "position fen 8/8/8/8/8/8/8/8 w - - 0 1"
        )

    def test_go_infinite(self) -> None:
        assert go_command() == "go infinite"

    def test_go_with_limits(self) -> None:
        assert go_command(depth=10) == "go depth 10"
        assert go_command(movetime=500, depth=3) == "go movetime 500 depth 3"


class TestParseInfo:
    def test_centipawn_line(self) -> None:
        evaluation = parse_info(
            "info depth 12 seldepth 18 score cp 34 nodes 12345 nps 100 pv e2e4 e7e5"
        )
        assert evaluation == Evaluation(
            depth=12, score_cp=34, nodes=12345, pv=("e2e4", "e7e5")
        )

    def test_mate_line(self) -> None:
        evaluation = parse_info("info depth 5 score mate -3 pv f7f6 d8h4")
        assert evaluation is not None
        assert evaluation.mate_in == -3
        assert evaluation.score_cp is None

    def test_bound_qualifier(self) -> None:
        evaluation = parse_info("info depth 7 score cp 20 lowerbound nodes 99")
        assert evaluation is not None
        assert (evaluation.score_cp, evaluation.nodes) == (20, 99)

    @pytest.mark.parametrize(
        "line",
        [
            "info string NNUE enabled",
            "info depth 3 currmove e2e4 currmovenumber 1",
            "bestmove e2e4",
            "",
            "info depth x score cp 1",
        ],
    )
    def test_no_evaluation(self, line: str) -> None:
        assert parse_info(line) is None


class TestBestMove:
    def test_is_bestmove(self) -> None:
        assert is_bestmove("bestmove e2e4 ponder e7e5")
        assert not is_bestmove("info depth 1")
        assert not is_bestmove("")

    def test_parse(self) -> None:
        assert parse_bestmove("bestmove e2e4 ponder e7e5") == "e2e4"
        assert parse_bestmove("bestmove e7e8q") == "e7e8q"

    @pytest.mark.parametrize("line", ["bestmove (none)", "bestmove 0000", "bestmove"])
    def test_no_move(self, line: str) -> None:
        assert parse_bestmove(line) is None


class TestEvaluation:
    def test_str_centipawns(self) -> None:
        text = str(Evaluation(depth=3, score_cp=34, nodes=10))
        assert text == "depth 3 | score +0.34 | nodes 10"

    def test_str_mate(self) -> None:
        assert "mate 2" in str(Evaluation(depth=9, mate_in=2))

    def test_str_without_score(self) -> None:
        assert str(Evaluation()) == "depth 0 | score - | nodes 0"


class TestNoopEngine:
    def test_remembers_position(self) -> None:
        engine = NoopEngine()
        engine.set_position("8/8/8/8/8/8/8/8 w - - 0 1")
        engine.start_search()
        assert engine.fen == "8/8/8/8/8/8/8/8 w - - 0 1"
        assert not engine.is_searching
        engine.stop_search()
        engine.close()
