import json
import logging

import pytest

from blockfall.game import BlockFallGame, GameConfig
from blockfall.leaderboard import GameOverRecorder, InvalidScoreEntry, Leaderboard, ScoreEntry


def test_submit_normalizes_name_and_score():
    board = Leaderboard()
    entry = board.submit("  alice the great player  ", 1234.9)
    assert entry == ScoreEntry("ALICE THE GREAT", 1234)


def test_zero_score_is_accepted():
    board = Leaderboard()
    assert board.submit("bob", 0).score == 0


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_invalid_names_rejected(name):
    with pytest.raises(InvalidScoreEntry):
        Leaderboard().submit(name, 10)


@pytest.mark.parametrize("score", [-1, 1000000, "10", None, True, float("nan")])
def test_invalid_scores_rejected(score):
    with pytest.raises(InvalidScoreEntry):
        Leaderboard().submit("carol", score)


def test_existing_entry_only_improves():
    board = Leaderboard()
    board.submit("dave", 500)
    assert board.submit("Dave", 300).score == 500
    assert board.submit("DAVE", 900).score == 900
    assert len(board) == 1


def test_top_is_sorted_and_limited():
    board = Leaderboard()
    for i in range(15):
        board.submit(f"p{i}", i * 10)
    top = board.top()
    assert len(top) == 10
    assert [e.score for e in top] == sorted((e.score for e in top), reverse=True)
    assert top[0] == ScoreEntry("P14", 140)
    assert len(board.top(limit=3)) == 3


def test_persists_to_json(tmp_path):
    path = tmp_path / "scores" / "board.json"
    board = Leaderboard(path)
    board.submit("erin", 300)
    board.submit("frank", 700)

    reloaded = Leaderboard(path)
    assert reloaded.top() == [ScoreEntry("FRANK", 700), ScoreEntry("ERIN", 300)]
    assert json.loads(path.read_text(encoding="utf-8"))[0] == {"name": "FRANK", "score": 700}


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "board.json"
    path.write_text("{not json", encoding="utf-8")
    assert len(Leaderboard(path)) == 0


def test_malformed_rows_are_skipped(tmp_path):
    path = tmp_path / "board.json"
    path.write_text(json.dumps([{"name": "gina", "score": 50}, {"name": "", "score": 5}, "junk"]), encoding="utf-8")
    assert Leaderboard(path).top() == [ScoreEntry("GINA", 50)]


def _end_game(game):
    game.grid.grid[0, 3:7] = 1
    game.start()
    assert game.game_over


def test_recorder_submits_final_score():
    game = BlockFallGame(GameConfig(random_seed=3))
    board = Leaderboard()
    recorder = GameOverRecorder(game.bus, board, "hank")
    game.score = 2500
    _end_game(game)
    assert recorder.last_entry == ScoreEntry("HANK", 2500)
    assert board.top() == [ScoreEntry("HANK", 2500)]


def test_recorder_failure_does_not_reach_engine():
    game = BlockFallGame(GameConfig(random_seed=3))
    board = Leaderboard()
    recorder = GameOverRecorder(game.bus, board, "   ")
    _end_game(game)
    assert recorder.last_entry is None
    assert len(board) == 0


def test_non_list_file_loads_empty_with_warning(tmp_path, caplog):
    path = tmp_path / "board.json"
    path.write_text(json.dumps({"name": "ivy", "score": 10}), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="blockfall.leaderboard.store"):
        board = Leaderboard(path)
    assert len(board) == 0
    assert "does not hold a list" in caplog.text


def test_corrupt_file_logs_warning(tmp_path, caplog):
    path = tmp_path / "board.json"
    path.write_text("[{", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="blockfall.leaderboard.store"):
        Leaderboard(path)
    assert "corrupt" in caplog.text
