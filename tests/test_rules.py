import pytest

from falling_blocks.game import ScoringRules


@pytest.mark.parametrize("lines,points", [(0, 0), (1, 100), (2, 300), (3, 500), (4, 800), (6, 800)])
def test_points_table(lines, points):
    assert ScoringRules().score_for_lines(lines) == points


@pytest.mark.parametrize("score,level", [(0, 1), (499, 1), (500, 2), (999, 2), (1000, 3)])
def test_level_thresholds(score, level):
    assert ScoringRules().level_for_score(score) == level


def test_drop_interval_decays_and_is_floored():
    rules = ScoringRules()
    assert rules.drop_interval_ms(1) == pytest.approx(560.0)
    assert rules.drop_interval_ms(2) == pytest.approx(560.0 * 0.92)
    assert rules.drop_interval_ms(3) < rules.drop_interval_ms(2)
    assert rules.drop_interval_ms(200) == pytest.approx(rules.min_drop_ms)
