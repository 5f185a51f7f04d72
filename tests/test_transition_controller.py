import pytest

from milighthub.bulb_id import BulbId
from milighthub.change_field_transition import ChangeFieldOnFinishBuilder
from milighthub.group_state_field import GroupStateField
from milighthub.parsed_color import ParsedColor
from milighthub.remote_type import RemoteType
from milighthub.status import MiLightStatus
from milighthub.transition_controller import TransitionController

BULB = BulbId(0x1234, 1, RemoteType.RGB_CCT)


@pytest.fixture
def controller():
    return TransitionController()


@pytest.fixture
def calls(controller):
    recorded = []
    controller.add_listener(lambda b, f, v: recorded.append((b, f, v)))
    return recorded


def _run(controller, until=20000, step=500):
    for now in range(step, until, step):
        controller.loop(now)


def test_ids_increase(controller):
    first = controller.build_field_transition(BULB, GroupStateField.LEVEL, 0, 100)
    second = controller.build_field_transition(BULB, GroupStateField.LEVEL, 0, 100)
    assert second.id == first.id + 1


def test_default_period_is_passed_to_builders(controller):
    controller.set_default_period(250)
    builder = controller.build_field_transition(BULB, GroupStateField.HUE, 0, 10)
    assert builder.default_period == 250


def test_add_get_delete(controller):
    transition = controller.build_field_transition(
        BULB, GroupStateField.LEVEL, 0, 100
    ).build()
    controller.add_transition(transition)
    assert controller.get_transition(transition.id) is transition
    assert controller.delete_transition(transition.id) is True
    assert controller.get_transition(transition.id) is None
    assert controller.delete_transition(transition.id) is False


def test_iteration_order_and_clear(controller):
    t1 = controller.build_field_transition(BULB, GroupStateField.LEVEL, 0, 100).build()
    t2 = controller.build_field_transition(BULB, GroupStateField.HUE, 0, 100).build()
    controller.add_transition(t1)
    controller.add_transition(t2)
    assert list(controller) == [t1, t2]
    controller.clear()
    assert len(controller) == 0


def test_field_transition_runs_to_completion(controller, calls):
    builder = controller.build_field_transition(BULB, GroupStateField.LEVEL, 0, 100)
    builder.set_duration(1)
    transition = builder.build()
    controller.add_transition(transition)

    controller.loop(100)
    assert calls == []

    _run(controller, until=2001)
    assert [v for _, _, v in calls] == [0, 50, 100]
    assert all(b == BULB and f == GroupStateField.LEVEL for b, f, _ in calls)
    assert controller.get_transition(transition.id) is None


def test_cleared_listeners_get_nothing(controller, calls):
    builder = controller.build_field_transition(BULB, GroupStateField.LEVEL, 0, 100)
    builder.set_duration(1)
    controller.add_transition(builder.build())
    controller.clear_listeners()
    _run(controller)
    assert calls == []
    assert len(controller) == 0


def test_status_on_switches_on_first(controller, calls):
    builder = controller.build_status_transition(BULB, MiLightStatus.ON, 40)
    assert calls == [(BULB, GroupStateField.STATUS, MiLightStatus.ON)]
    assert builder.field == GroupStateField.LEVEL
    assert (builder.start, builder.end) == (40, 100)


def test_status_off_fades_then_switches_off(controller, calls):
    builder = controller.build_status_transition(BULB, MiLightStatus.OFF, 100)
    assert isinstance(builder, ChangeFieldOnFinishBuilder)
    assert calls == []
    builder.set_duration(1)
    transition = builder.build()
    controller.add_transition(transition)

    _run(controller)

    levels = [v for _, f, v in calls if f == GroupStateField.LEVEL]
    assert levels[0] == 100
    assert levels[-1] == 0
    assert levels == sorted(levels, reverse=True)
    assert calls[-1] == (BULB, GroupStateField.STATUS, MiLightStatus.OFF)
    assert len(controller) == 0


def test_color_transition_finishes(controller, calls):
    start = ParsedColor.from_rgb(255, 0, 0)
    end = ParsedColor.from_rgb(0, 0, 255)
    builder = controller.build_color_transition(BULB, start, end)
    builder.set_duration(1)
    transition = builder.build()
    controller.add_transition(transition)

    _run(controller)

    assert transition.is_finished()
    assert len(controller) == 0
    assert calls[0] == (BULB, GroupStateField.HUE, start.hue)
    assert {f for _, f, _ in calls} <= {GroupStateField.HUE, GroupStateField.SATURATION}