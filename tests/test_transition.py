import pytest

from milighthub.bulb_id import BulbId
from milighthub.remote_type import RemoteType
from milighthub.transition import (
    DEFAULT_DURATION,
    DURATION_UNIT_MULTIPLIER,
    MIN_PERIOD,
    Transition,
    TransitionBuilder,
    calculate_period,
    step_value,
)

BULB = BulbId(0x1234, 2, RemoteType.RGB_CCT)


def _noop(*_args):
    return None


class _Counter(Transition):
    def __init__(self, period, steps_needed):
        Transition.__init__(self, 7, BULB, period, _noop)
        self.steps = 0
        self.steps_needed = steps_needed

    def is_finished(self):
        return self.steps >= self.steps_needed

    def step(self):
        self.steps += 1

    def child_serialize(self):
        return {"type": "counter", "steps": self.steps}


class _Builder(TransitionBuilder):
    def __init__(self, default_period=500, max_steps=100):
        TransitionBuilder.__init__(self, 3, default_period, BULB, _noop, max_steps)

    def _build(self):
        return _Counter(self.get_or_compute_period(), self.get_or_compute_num_periods())


def test_calculate_period_zero_distance():
    assert calculate_period(0, 5, 1000) == 0


@pytest.mark.parametrize("distance,step,duration", [(100, 10, 1000), (50, 5, 2000)])
def test_calculate_period_spans_duration(distance, step, duration):
    period = calculate_period(distance, step, duration)
    assert period * (distance // step) == duration


def test_step_value_moves_by_step():
    assert step_value(0, 10, 3) == 3


def test_step_value_stops_at_end():
    assert step_value(9, 10, 3) == 10


def test_step_value_converges_downwards():
    current = 10
    seen = [current]
    while current != 0:
        current = step_value(current, 0, -4)
        seen.append(current)
    assert seen[-1] == 0
    assert all(a > b for a, b in zip(seen, seen[1:]))


def test_set_duration_uses_seconds_and_chains():
    builder = _Builder()
    assert TransitionBuilder.set_duration(builder, 2) is builder
    assert builder.duration == 2 * DURATION_UNIT_MULTIPLIER
    assert TransitionBuilder.is_set_duration(builder)


def test_explicit_period_is_used():
    builder = _Builder()
    TransitionBuilder.set_period(builder, 250)
    assert TransitionBuilder.get_or_compute_period(builder) == 250
    assert TransitionBuilder.is_set_period(builder)


def test_computed_period_has_minimum():
    builder = _Builder()
    TransitionBuilder.set_duration_raw(builder, 300)
    builder.num_periods = 10
    assert TransitionBuilder.get_or_compute_period(builder) == MIN_PERIOD


def test_computed_period_divides_duration():
    builder = _Builder()
    TransitionBuilder.set_duration_raw(builder, 2000)
    builder.num_periods = 4
    assert TransitionBuilder.get_or_compute_period(builder) * 4 == 2000


def test_computed_duration_is_product():
    builder = _Builder()
    TransitionBuilder.set_period(builder, 100)
    builder.num_periods = 5
    assert TransitionBuilder.get_or_compute_duration(builder) == 100 * 5


def test_computed_num_periods_covers_duration():
    builder = _Builder()
    TransitionBuilder.set_duration_raw(builder, 1000)
    TransitionBuilder.set_period(builder, 300)
    n = TransitionBuilder.get_or_compute_num_periods(builder)
    assert (n - 1) * 300 < 1000 <= n * 300


def test_nothing_set_computes_zero():
    builder = _Builder()
    assert TransitionBuilder.get_or_compute_period(builder) == 0
    assert TransitionBuilder.get_or_compute_duration(builder) == 0
    assert TransitionBuilder.get_or_compute_num_periods(builder) == 0
    assert not TransitionBuilder.is_set_num_periods(builder)


def test_build_with_nothing_set_uses_defaults():
    builder = _Builder(default_period=500, max_steps=100)
    transition = TransitionBuilder.build(builder)
    assert builder.duration == DEFAULT_DURATION * DURATION_UNIT_MULTIPLIER
    assert builder.period * builder.max_steps >= builder.duration
    assert transition.period == builder.period


def test_build_with_only_period_binds_duration():
    builder = _Builder()
    TransitionBuilder.set_period(builder, 100)
    transition = TransitionBuilder.build(builder)
    assert builder.duration == DEFAULT_DURATION
    assert builder.period == 100
    assert transition.period == 100


def test_build_with_long_duration_raises_period():
    builder = _Builder(default_period=500, max_steps=100)
    TransitionBuilder.set_duration(builder, 100)
    transition = TransitionBuilder.build(builder)
    assert builder.period > 500
    assert builder.period * 100 >= builder.duration
    assert transition.period == builder.period


def test_duration_aware_period_keeps_sufficient_period():
    builder = _Builder()
    result = TransitionBuilder.set_duration_aware_period(builder, 500, 1000, 10)
    assert result is builder
    assert TransitionBuilder.get_or_compute_period(builder) == 500


def test_tick_waits_for_period():
    transition = _Counter(100, 3)
    Transition.tick(transition, 50)
    assert transition.steps == 0
    Transition.tick(transition, 100)
    assert transition.steps == 1
    assert transition.last_sent == 100
    Transition.tick(transition, 150)
    assert transition.steps == 1
    Transition.tick(transition, 200)
    assert transition.steps == 2


def test_tick_stops_when_finished():
    transition = _Counter(100, 1)
    Transition.tick(transition, 100)
    Transition.tick(transition, 200)
    Transition.tick(transition, 300)
    assert transition.steps == 1
    assert transition.last_sent == 100


def test_serialize_includes_bulb_and_child():
    data = _Counter(100, 1).serialize()
    assert data["id"] == 7
    assert data["period"] == 100
    assert data["last_sent"] == 0
    assert data["bulb"] == BULB.to_dict()
    assert data["type"] == "counter"


def test_transition_is_abstract():
    with pytest.raises(TypeError):
        Transition(1, BULB, 100, _noop)