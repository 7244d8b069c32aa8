import time

import pytest

from despeck.routine_env import RoutineEnv


class _Recorder(RoutineEnv):
    def __init__(self):
        super().__init__("recorder")
        self.calls = []

    def run(self, *args, **kwargs):
        self.calls.append((args, kwargs))


class _Sleeper(RoutineEnv):
    def run(self, seconds):
        time.sleep(seconds)


def test_arguments_are_passed_to_run():
    routine = _Recorder()
    RoutineEnv.timed_run(routine, 1, 2, key="value")
    assert routine.calls == [((1, 2), {"key": "value"})]


def test_duration_covers_run():
    routine = _Sleeper()
    duration = RoutineEnv.timed_run(routine, 0.01)
    assert duration >= 0.01


def test_elapsed_accumulates():
    routine = _Sleeper()
    assert routine.elapsed_seconds == 0.0
    first = RoutineEnv.timed_run(routine, 0.005)
    second = RoutineEnv.timed_run(routine, 0.005)
    assert routine.elapsed_seconds == pytest.approx(first + second)


def test_name_is_kept():
    routine = _Recorder()
    RoutineEnv.timed_run(routine)
    assert routine.routine_name == "recorder"
    assert routine.calls == [((), {})]


def test_base_class_cannot_be_instantiated():
    with pytest.raises(TypeError):
        RoutineEnv()