"""One-second tick driver tying the engine to a presentation callback."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from biphasic_engine.alarm import AudioCue
from biphasic_engine.engine import ScheduleEngine
from biphasic_engine.schema import ComputedState

logger = logging.getLogger(__name__)


class CountdownLoop:
    """Recompute state on every tick and sound the cue when the policy allows.

    Stopping the loop is done by setting the stop event passed to ``run``.
    """

    def __init__(
        self,
        engine: ScheduleEngine,
        on_state: Callable[[ComputedState], None],
        cue: Optional[AudioCue] = None,
        clock: Optional[Callable[[], datetime]] = None,
        alarm_enabled: bool = True,
    ) -> None:
        self.engine = engine
        self.on_state = on_state
        self.cue = cue or AudioCue()
        self.clock = clock or engine.now
        self.alarm_enabled = alarm_enabled

    def toggle_alarm(self) -> bool:
        self.alarm_enabled = not self.alarm_enabled
        logger.info("alarm %s", "enabled" if self.alarm_enabled else "disabled")
        return self.alarm_enabled

    def tick(self) -> ComputedState:
        state = self.engine.compute(self.clock())
        self.on_state(state)

        tone = self.engine.cue_for(state, self.alarm_enabled)
        if tone is not None:
            logger.info("%s in %ss, playing cue", state.next_event.label, state.countdown_seconds)
            self.cue.play(tone)
        return state

    def run(
        self,
        stop_event: Optional[threading.Event] = None,
        interval: float = 1.0,
        max_ticks: Optional[int] = None,
    ) -> int:
        """Tick until stopped or ``max_ticks`` is reached; returns ticks run."""

        stop_event = stop_event or threading.Event()
        ticks = 0
        while not stop_event.is_set():
            self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            if stop_event.wait(interval):
                break
        return ticks
