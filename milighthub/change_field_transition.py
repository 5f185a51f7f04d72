"""Transition that sets a field once a wrapped transition has finished."""

from typing import Any, Dict

from milighthub.group_state_field import GroupStateField
from milighthub.transition import Transition, TransitionBuilder


class ChangeFieldOnFinishTransition(Transition):
    """Runs a delegate transition, then sends one final field change."""

    def __init__(
        self,
        delegate: Transition,
        field: GroupStateField,
        arg: int,
        period: int,
    ) -> None:
        super().__init__(delegate.id, delegate.bulb_id, period, delegate.callback)
        self.delegate = delegate
        self.field = field
        self.arg = arg
        self.change_sent = False

    def is_finished(self) -> bool:
        return self.delegate.is_finished() and self.change_sent

    def step(self) -> None:
        if not self.delegate.is_finished():
            self.delegate.step()
        else:
            self.callback(self.bulb_id, self.field, self.arg)
            self.change_sent = True

    def child_serialize(self) -> Dict[str, Any]:
        return {
            "type": "change_on_finish",
            "field": self.field.value,
            "value": self.arg,
            "child": self.delegate.child_serialize(),
        }


class ChangeFieldOnFinishBuilder(TransitionBuilder):
    """Builds a :class:`ChangeFieldOnFinishTransition` around another builder.

    The resulting transition takes its id from the delegate.
    """

    def __init__(
        self,
        transition_id: int,
        field: GroupStateField,
        arg: int,
        delegate: TransitionBuilder,
    ) -> None:
        super().__init__(
            delegate.id,
            delegate.default_period,
            delegate.bulb_id,
            delegate.callback,
            delegate.max_steps,
        )
        self.delegate = delegate
        self.field = field
        self.arg = arg

    def _build(self) -> Transition:
        self.delegate.set_duration_raw(self.get_or_compute_duration())
        self.delegate.set_period(self.get_or_compute_period())
        return ChangeFieldOnFinishTransition(
            self.delegate.build(), self.field, self.arg, self.delegate.period
        )