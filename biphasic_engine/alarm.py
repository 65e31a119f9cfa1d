"""Alarm trigger policy and tone synthesis."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from biphasic_engine.schema import EventKind

logger = logging.getLogger(__name__)

DEFAULT_ALARM_THRESHOLD = 5
DEFAULT_SAMPLE_RATE = 44100
_FADE_FLOOR = 1e-5

_TONE_FREQUENCIES = {
    EventKind.WAKE: 660.0,
    EventKind.SLEEP: 220.0,
}


def should_fire_alarm(countdown_seconds: int, alarm_enabled: bool, threshold: int = DEFAULT_ALARM_THRESHOLD) -> bool:
    """Return True when the cue should sound on this tick.

    The window is (0, threshold]: the cue plays in the last seconds before a
    transition, never at zero.
    """

    return bool(alarm_enabled) and 0 < countdown_seconds <= threshold


@dataclass(frozen=True)
class ToneSpec:
    frequency_hz: float
    duration_s: float = 0.2
    volume: float = 0.5


def tone_for(kind: EventKind) -> ToneSpec:
    """Higher pitch for waking up, lower for going to sleep."""

    return ToneSpec(frequency_hz=_TONE_FREQUENCIES[kind])


def synthesize_tone(tone: ToneSpec, sample_rate: int = DEFAULT_SAMPLE_RATE) -> np.ndarray:
    """Render a sine beep that fades exponentially to silence."""

    n_samples = max(1, int(round(tone.duration_s * sample_rate)))
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    envelope = tone.volume * np.power(_FADE_FLOOR / tone.volume, np.linspace(0.0, 1.0, n_samples))
    return (envelope * np.sin(2.0 * np.pi * tone.frequency_hz * t)).astype(np.float32)


AudioSink = Callable[[np.ndarray, int], None]


class AudioCue:
    """Plays tones through a pluggable sink.

    Without a sink the cue is a no-op. Sink errors are logged and dropped so
    a missing or broken audio device never stops the countdown.
    """

    def __init__(self, sink: Optional[AudioSink] = None, sample_rate: int = DEFAULT_SAMPLE_RATE) -> None:
        self.sink = sink
        self.sample_rate = sample_rate

    def play(self, tone: ToneSpec) -> bool:
        if self.sink is None:
            logger.debug("no audio sink configured, skipping %.0f Hz cue", tone.frequency_hz)
            return False

        try:
            samples = synthesize_tone(tone, self.sample_rate)
            self.sink(samples, self.sample_rate)
        except Exception as exc:  # noqa: BLE001
            logger.warning("audio cue failed: %s", exc)
            return False
        return True
