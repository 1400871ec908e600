from falling_blocks.game import DropScheduler, ManualClock


def test_steps_fire_in_due_order():
    clock = ManualClock()
    fired = []
    clock.call_later(30, lambda: fired.append("b"))
    clock.call_later(10, lambda: fired.append("a"))
    clock.call_later(30, lambda: fired.append("c"))
    assert clock.advance(29) == 1
    assert fired == ["a"]
    clock.advance(1)
    assert fired == ["a", "b", "c"]
    assert clock.now_ms == 30


def test_cancelled_step_never_runs():
    clock = ManualClock()
    fired = []
    step = clock.call_later(10, lambda: fired.append(1))
    clock.cancel(step)
    clock.advance(100)
    assert fired == []
    assert clock.pending() == 0


def test_steps_scheduled_while_advancing_fire_if_due():
    clock = ManualClock()
    fired = []
    clock.call_later(10, lambda: clock.call_later(5, lambda: fired.append(clock.now_ms)))
    clock.advance(20)
    assert fired == [15]


def test_advance_to_next():
    clock = ManualClock()
    assert not clock.advance_to_next()
    clock.call_later(42, lambda: None)
    assert clock.advance_to_next()
    assert clock.now_ms == 42


def test_scheduler_ticks_every_interval():
    clock = ManualClock()
    ticks = []
    scheduler = DropScheduler(clock, lambda: ticks.append(clock.now_ms))
    scheduler.start(100)
    clock.advance(350)
    assert ticks == [100, 200, 300]


def test_scheduler_stop_and_restart_begins_full_period():
    clock = ManualClock()
    ticks = []
    scheduler = DropScheduler(clock, lambda: ticks.append(clock.now_ms))
    scheduler.start(100)
    clock.advance(90)
    scheduler.stop()
    assert not scheduler.running
    clock.advance(500)
    assert ticks == []
    scheduler.restart(50)
    clock.advance(49)
    assert ticks == []
    clock.advance(1)
    assert ticks == [640]


def test_tick_handler_may_stop_scheduler():
    clock = ManualClock()
    scheduler = DropScheduler(clock, lambda: scheduler.stop())
    scheduler.start(10)
    clock.advance(100)
    assert not scheduler.running
    assert clock.pending() == 0
