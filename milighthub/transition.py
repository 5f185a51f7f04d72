"""Timed transitions of bulb state and the builder that sizes them."""

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

from milighthub.bulb_id import BulbId
from milighthub.group_state_field import GroupStateField

TransitionFn = Callable[[BulbId, GroupStateField, int], None]

# Transition commands are given in seconds; internal values are milliseconds.
DURATION_UNIT_MULTIPLIER = 1000
# If the period would go lower than this, other parameters are throttled up.
MIN_PERIOD = 150
DEFAULT_DURATION = 10000


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def calculate_period(distance: int, step_size: int, duration: int) -> int:
    """Period needed to cover ``distance`` in steps of ``step_size`` within ``duration``."""
    if distance == 0:
        return 0
    return _round_half_away(duration / (distance / float(step_size)))


def step_value(current: int, end: int, step_size: int) -> int:
    """Advance ``current`` by ``step_size`` without passing ``end``."""
    delta = end - current
    if abs(delta) < abs(step_size):
        return current + delta
    return current + step_size


class Transition(ABC):
    """A change to a bulb that is applied one step per period."""

    DURATION_UNIT_MULTIPLIER = DURATION_UNIT_MULTIPLIER
    MIN_PERIOD = MIN_PERIOD
    DEFAULT_DURATION = DEFAULT_DURATION

    def __init__(
        self, transition_id: int, bulb_id: BulbId, period: int, callback: TransitionFn
    ) -> None:
        self.id = transition_id
        self.bulb_id = bulb_id
        self.period = period
        self.callback = callback
        self.last_sent = 0

    def tick(self, now: int) -> None:
        """Take a step if a period has passed since the last one (``now`` in ms)."""
        if self.last_sent + self.period <= now and (
            not self.is_finished() or self.last_sent == 0
        ):
            self.step()
            self.last_sent = now

    @abstractmethod
    def is_finished(self) -> bool:
        """Whether the transition has nothing left to do."""

    @abstractmethod
    def step(self) -> None:
        """Apply one step of the transition."""

    @abstractmethod
    def child_serialize(self) -> Dict[str, Any]:
        """Fields specific to this kind of transition."""

    def serialize(self) -> Dict[str, Any]:
        """JSON object describing the transition."""
        result: Dict[str, Any] = {
            "id": self.id,
            "period": self.period,
            "last_sent": self.last_sent,
            "bulb": self.bulb_id.to_dict(),
        }
        result.update(self.child_serialize())
        return result


class TransitionBuilder(ABC):
    """Collects duration, period and step count and fills in what is missing."""

    def __init__(
        self,
        transition_id: int,
        default_period: int,
        bulb_id: BulbId,
        callback: TransitionFn,
        max_steps: int,
    ) -> None:
        self.id = transition_id
        self.default_period = default_period
        self.bulb_id = bulb_id
        self.callback = callback
        self.duration = 0
        self.period = 0
        self.num_periods = 0
        self.max_steps = max_steps

    def set_duration(self, duration: float) -> "TransitionBuilder":
        """Set the duration in seconds."""
        self.duration = int(duration * DURATION_UNIT_MULTIPLIER)
        return self

    def set_duration_raw(self, duration: int) -> None:
        """Set the duration in milliseconds."""
        self.duration = duration

    def set_period(self, period: int) -> "TransitionBuilder":
        self.period = period
        return self

    def set_duration_aware_period(
        self, period: int, duration: int, max_steps: int
    ) -> "TransitionBuilder":
        """Use ``period`` unless it is too short to span ``duration`` in ``max_steps``."""
        if period * max_steps < duration:
            self.set_period(math.ceil(duration / float(max_steps)))
        else:
            self.set_period(period)
        return self

    def is_set_duration(self) -> bool:
        return self.duration > 0

    def is_set_period(self) -> bool:
        return self.period > 0

    def is_set_num_periods(self) -> bool:
        return self.num_periods > 0

    def _num_set_params(self) -> int:
        return sum(
            (self.is_set_duration(), self.is_set_period(), self.is_set_num_periods())
        )

    def get_or_compute_period(self) -> int:
        if self.period > 0:
            return self.period
        if self.duration > 0 and self.num_periods > 0:
            return max(MIN_PERIOD, math.floor(self.duration / float(self.num_periods)))
        return 0

    def get_or_compute_duration(self) -> int:
        if self.duration > 0:
            return self.duration
        if self.period > 0 and self.num_periods > 0:
            return self.period * self.num_periods
        return 0

    def get_or_compute_num_periods(self) -> int:
        if self.num_periods > 0:
            return self.num_periods
        if self.period > 0 and self.duration > 0:
            return max(1, math.ceil(self.duration / float(self.period)))
        return 0

    def build(self) -> Transition:
        """Fill in defaults for an underspecified transition and create it."""
        num_set = self._num_set_params()
        if num_set == 0:
            self.set_duration(DEFAULT_DURATION)
            self.set_duration_aware_period(
                self.default_period, self.duration, self.max_steps
            )
        elif num_set == 1:
            if not self.is_set_duration():
                self.set_duration_raw(DEFAULT_DURATION)
            else:
                self.set_duration_aware_period(
                    self.default_period, self.duration, self.max_steps
                )
        return self._build()

    @abstractmethod
    def _build(self) -> Transition:
        """Create the transition from the completed parameters."""