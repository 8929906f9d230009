"""Playback state machine."""

from algorithms.step import Step, StepType, Timing
from engine.stepper import SPEED_PRESETS, Stepper, StepperState


def _steps(n=4, duration=1000):
    types = [StepType.INITIALIZATION] + [StepType.COMPARISON] * (n - 2) + [StepType.RETURN]
    return [Step(id=i, step_type=t, timing=Timing(duration=duration)) for i, t in enumerate(types)]


def test_new_stepper_is_idle():
    stepper = Stepper()
    assert stepper.state == StepperState.IDLE
    assert stepper.current_step is None
    assert stepper.next_step() is False
    assert stepper.snapshot() == {"state": "idle", "currentStep": -1, "totalSteps": 0,
                                  "speed": "medium", "isFinished": False}


def test_load_shows_first_step_paused():
    seen = []
    stepper = Stepper(on_step=seen.append)
    stepper.load(_steps())
    assert stepper.state == StepperState.PAUSED
    assert stepper.current_idx == 0
    assert [s.id for s in seen] == [0]


def test_load_empty_list_stays_idle():
    stepper = Stepper()
    stepper.load([])
    assert stepper.state == StepperState.IDLE


def test_single_step_run_is_finished_immediately():
    stepper = Stepper()
    stepper.load([Step(id=0, step_type=StepType.RETURN)])
    assert stepper.is_finished


def test_next_until_finished():
    stepper = Stepper()
    stepper.load(_steps(3))
    assert stepper.next_step() is True
    assert stepper.next_step() is True
    assert stepper.is_finished
    assert stepper.current_step.is_terminal
    assert stepper.next_step() is False
    assert stepper.current_idx == 2


def test_prev_from_finished_pauses():
    stepper = Stepper()
    stepper.load(_steps(3))
    stepper.jump_to_end()
    assert stepper.is_finished
    assert stepper.prev_step() is True
    assert stepper.state == StepperState.PAUSED
    stepper.rewind()
    assert stepper.current_idx == 0
    assert stepper.prev_step() is False


def test_goto_out_of_range_keeps_position():
    stepper = Stepper()
    stepper.load(_steps(4))
    assert stepper.goto_step(2) is True
    assert stepper.goto_step(4) is False
    assert stepper.goto_step(-1) is False
    assert stepper.current_idx == 2


def test_play_pause_toggle():
    stepper = Stepper()
    stepper.load(_steps())
    stepper.toggle_play()
    assert stepper.is_playing
    stepper.toggle_play()
    assert stepper.state == StepperState.PAUSED


def test_play_is_ignored_when_finished():
    stepper = Stepper()
    stepper.load(_steps(2))
    stepper.jump_to_end()
    stepper.play()
    assert stepper.is_finished


def test_tick_advances_after_scaled_duration():
    stepper = Stepper(speed="fast")
    stepper.load(_steps(3, duration=1000))
    stepper.play()
    start = stepper._last_tick
    assert stepper.tick(start + 0.4) is False
    assert stepper.tick(start + 0.6) is True
    assert stepper.current_idx == 1
    assert stepper.tick(start + 1.2) is True
    assert stepper.is_finished
    assert stepper.tick(start + 5.0) is False


def test_tick_does_nothing_while_paused():
    stepper = Stepper()
    stepper.load(_steps())
    assert stepper.tick(1e9) is False
    assert stepper.current_idx == 0


def test_set_speed():
    stepper = Stepper()
    assert stepper.set_speed("turbo") is True
    assert stepper.speed == SPEED_PRESETS["turbo"]
    assert stepper.set_speed("ludicrous") is False
    assert stepper.speed_name == "turbo"


def test_unknown_speed_falls_back_to_medium():
    assert Stepper(speed="warp").speed_name == "medium"


def test_reset():
    stepper = Stepper()
    stepper.load(_steps())
    stepper.reset()
    assert stepper.state == StepperState.IDLE
    assert stepper.total_steps == 0
