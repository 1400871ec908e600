import json

from falling_blocks.visualization.highscore import HIGH_SCORE_KEY, HighScoreStore


def test_missing_file_loads_zero(tmp_path):
    assert HighScoreStore(tmp_path / "none.json").load() == 0


def test_submit_keeps_best(tmp_path):
    store = HighScoreStore(tmp_path / "scores" / "best.json")
    assert store.submit(300) == 300
    assert store.submit(100) == 300
    assert store.submit(900) == 900
    data = json.loads((tmp_path / "scores" / "best.json").read_text())
    assert data == {HIGH_SCORE_KEY: 900}


def test_corrupt_file_loads_zero(tmp_path):
    path = tmp_path / "best.json"
    path.write_text("not json")
    assert HighScoreStore(path).load() == 0
