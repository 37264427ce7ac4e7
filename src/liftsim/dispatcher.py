from __future__ import annotations

import logging
from typing import Optional

from .car import MotionStateMachine
from .state import SystemState

logger = logging.getLogger(__name__)


class Dispatcher:
    """Picks the next floor from the ordered queue and starts the trip."""

    def __init__(self, state: SystemState, motion: MotionStateMachine) -> None:
        self.state = state
        self.motion = motion

    def dispatch(self) -> Optional[int]:
        car = self.state.car
        if car.moving or not len(self.state.queue) or self.state.modes.active:
            return None

        ordered = self.state.queue.peek_ordered(car.direction, car.current_floor)
        target = ordered[0].floor
        if not self.motion.start_trip(target):
            logger.debug("Dispatch to floor %d refused by motion state %s", target, car.motion.value)
            return None
        return target
