"""Keeps the active transitions and drives them forward."""

import time
from typing import Iterator, List, Optional

from milighthub.bulb_id import BulbId
from milighthub.change_field_transition import ChangeFieldOnFinishBuilder
from milighthub.color_transition import ColorTransitionBuilder
from milighthub.field_transition import FieldTransitionBuilder
from milighthub.group_state_field import GroupStateField
from milighthub.parsed_color import ParsedColor
from milighthub.status import MiLightStatus
from milighthub.transition import Transition, TransitionBuilder, TransitionFn

DEFAULT_PERIOD = 500


class TransitionController:
    """Creates transition builders, runs active transitions and fans out their changes."""

    def __init__(self) -> None:
        self._transitions: List[Transition] = []
        self._observers: List[TransitionFn] = []
        self._current_id = 0
        self.default_period = DEFAULT_PERIOD

    def __iter__(self) -> Iterator[Transition]:
        return iter(list(self._transitions))

    def __len__(self) -> int:
        return len(self._transitions)

    def _next_id(self) -> int:
        transition_id = self._current_id
        self._current_id += 1
        return transition_id

    def _transition_callback(
        self, bulb_id: BulbId, field: GroupStateField, value: int
    ) -> None:
        for observer in list(self._observers):
            observer(bulb_id, field, value)

    def set_default_period(self, period: int) -> None:
        """Period (ms) given to builders created from now on."""
        self.default_period = period

    def clear_listeners(self) -> None:
        self._observers.clear()

    def add_listener(self, fn: TransitionFn) -> None:
        """Call ``fn(bulb_id, field, value)`` for every change a transition makes."""
        self._observers.append(fn)

    def build_color_transition(
        self, bulb_id: BulbId, start: ParsedColor, end: ParsedColor
    ) -> TransitionBuilder:
        return ColorTransitionBuilder(
            self._next_id(),
            self.default_period,
            bulb_id,
            self._transition_callback,
            start,
            end,
        )

    def build_field_transition(
        self, bulb_id: BulbId, field: GroupStateField, start: int, end: int
    ) -> TransitionBuilder:
        return FieldTransitionBuilder(
            self._next_id(),
            self.default_period,
            bulb_id,
            self._transition_callback,
            field,
            start,
            end,
        )

    def build_status_transition(
        self, bulb_id: BulbId, status: MiLightStatus, start_level: int
    ) -> TransitionBuilder:
        """Fade the level up after switching on, or down and then switch off."""
        if status == MiLightStatus.ON:
            # Make sure the bulb is on before its brightness changes.
            self._transition_callback(bulb_id, GroupStateField.STATUS, MiLightStatus.ON)
            return self.build_field_transition(
                bulb_id, GroupStateField.LEVEL, start_level, 100
            )
        outer_id = self._next_id()
        return ChangeFieldOnFinishBuilder(
            outer_id,
            GroupStateField.STATUS,
            MiLightStatus.OFF,
            self.build_field_transition(bulb_id, GroupStateField.LEVEL, start_level, 0),
        )

    def add_transition(self, transition: Transition) -> None:
        self._transitions.append(transition)

    def clear(self) -> None:
        self._transitions.clear()

    def loop(self, now: Optional[int] = None) -> None:
        """Tick every transition and drop the finished ones.

        ``now`` is a time in milliseconds; by default the monotonic clock.
        """
        if now is None:
            now = int(time.monotonic() * 1000)
        for transition in list(self._transitions):
            transition.tick(now)
            if transition.is_finished():
                self._remove(transition)

    def _remove(self, transition: Transition) -> None:
        for index, candidate in enumerate(self._transitions):
            if candidate is transition:
                del self._transitions[index]
                return

    def get_transition(self, id: int) -> Optional[Transition]:
        """The active transition with this id, or ``None``."""
        return next((t for t in self._transitions if t.id == id), None)

    def delete_transition(self, id: int) -> bool:
        """Remove the transition with this id; false if there was none."""
        transition = self.get_transition(id)
        if transition is None:
            return False
        self._remove(transition)
        return True