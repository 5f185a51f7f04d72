"""Transition of a bulb's colour through RGB space."""

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List

from milighthub.bulb_id import BulbId
from milighthub.group_state_field import GroupStateField
from milighthub.parsed_color import ParsedColor
from milighthub.transition import (
    Transition,
    TransitionBuilder,
    TransitionFn,
    step_value,
)


@dataclass(frozen=True)
class RgbColor:
    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_color(cls, color: ParsedColor) -> "RgbColor":
        return cls(color.r, color.g, color.b)

    def as_list(self) -> List[int]:
        return [self.r, self.g, self.b]


def calculate_max_distance(start: ParsedColor, end: ParsedColor) -> int:
    """Signed component distance with the largest magnitude."""
    distances = (end.r - start.r, end.g - start.g, end.b - start.b)
    largest = max(distances)
    smallest = min(distances)
    return smallest if abs(smallest) > abs(largest) else largest


def calculate_step_size_part(distance: int, duration: int, period: int) -> int:
    """Step per period for one component, rounded away from zero."""
    step = (distance / float(duration)) * period
    rounded = math.ceil(abs(step))
    return -rounded if distance < 0 else rounded


class ColorTransition(Transition):
    """Steps the RGB components towards the end colour, sending hue and saturation."""

    def __init__(
        self,
        transition_id: int,
        bulb_id: BulbId,
        start_color: ParsedColor,
        end_color: ParsedColor,
        step_sizes: RgbColor,
        duration: int,
        period: int,
        num_periods: int,
        callback: TransitionFn,
    ) -> None:
        super().__init__(transition_id, bulb_id, period, callback)
        self.end_color = RgbColor.from_color(end_color)
        self.current_color = RgbColor.from_color(start_color)
        self.step_sizes = step_sizes
        # Impossible values, so the first step always sends both.
        self.last_hue = 400
        self.last_saturation = 200

    def step(self) -> None:
        current = self.current_color
        parsed = ParsedColor.from_rgb(current.r, current.g, current.b)

        if parsed.hue != self.last_hue:
            self.callback(self.bulb_id, GroupStateField.HUE, parsed.hue)
            self.last_hue = parsed.hue
        if parsed.saturation != self.last_saturation:
            self.callback(self.bulb_id, GroupStateField.SATURATION, parsed.saturation)
            self.last_saturation = parsed.saturation

        if not self.is_finished():
            end, steps = self.end_color, self.step_sizes
            self.current_color = replace(
                current,
                r=step_value(current.r, end.r, steps.r),
                g=step_value(current.g, end.g, steps.g),
                b=step_value(current.b, end.b, steps.b),
            )

    def is_finished(self) -> bool:
        return self.current_color == self.end_color

    def child_serialize(self) -> Dict[str, Any]:
        return {
            "type": "color",
            "current_color": self.current_color.as_list(),
            "end_color": self.end_color.as_list(),
            "step_sizes": self.step_sizes.as_list(),
        }


class ColorTransitionBuilder(TransitionBuilder):
    """Builds a :class:`ColorTransition`."""

    def __init__(
        self,
        transition_id: int,
        default_period: int,
        bulb_id: BulbId,
        callback: TransitionFn,
        start: ParsedColor,
        end: ParsedColor,
    ) -> None:
        # The step count is a magnitude; at least one step is always needed.
        max_steps = max(1, abs(calculate_max_distance(start, end)))
        super().__init__(transition_id, default_period, bulb_id, callback, max_steps)
        self.start = start
        self.end = end

    def _build(self) -> Transition:
        duration = self.get_or_compute_duration()
        num_periods = self.get_or_compute_num_periods()
        period = self.get_or_compute_period()

        step_sizes = RgbColor(
            calculate_step_size_part(self.end.r - self.start.r, duration, period),
            calculate_step_size_part(self.end.g - self.start.g, duration, period),
            calculate_step_size_part(self.end.b - self.start.b, duration, period),
        )

        return ColorTransition(
            self.id,
            self.bulb_id,
            self.start,
            self.end,
            step_sizes,
            duration,
            period,
            num_periods,
            self.callback,
        )