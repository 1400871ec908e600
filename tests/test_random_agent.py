from falling_blocks.rl.random_agent import run_random


def test_random_agent_runs():
    total = run_random(steps=50, seed=0)
    assert isinstance(total, float)
