"""Single-shot state machine for one boot sequence."""

from __future__ import annotations

from enum import Enum, auto
import logging


class BootState(Enum):
    IDLE = auto()
    EVALUATING = auto()
    LAUNCHING = auto()
    DONE = auto()


class BootEvent(Enum):
    KEEPALIVE_ISSUED = auto()
    DECISION_READY = auto()
    LAUNCHES_ISSUED = auto()


_TRANSITIONS = {
    BootState.IDLE: {
        BootEvent.KEEPALIVE_ISSUED: BootState.EVALUATING,
    },
    BootState.EVALUATING: {
        BootEvent.DECISION_READY: BootState.LAUNCHING,
    },
    BootState.LAUNCHING: {
        BootEvent.LAUNCHES_ISSUED: BootState.DONE,
    },
    BootState.DONE: {},
}


class BootStateMachine:
    def __init__(self):
        self.state = BootState.IDLE

    @property
    def done(self) -> bool:
        return self.state is BootState.DONE

    def transition(self, event: BootEvent) -> BootState:
        next_state = _TRANSITIONS.get(self.state, {}).get(event)
        if next_state is None:
            logging.getLogger(__name__).warning(
                "Invalid boot state transition: %s --%s-->", self.state, event
            )
            return self.state
        self.state = next_state
        return self.state
