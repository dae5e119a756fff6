"""Square-wave beeper gated by the CHIP-8 sound timer."""

from __future__ import annotations

from array import array
from dataclasses import dataclass
from typing import Callable, Dict

from pychip8.utils import debug_enabled, debug_log

DEFAULT_TONE_HZ = 440.0


@dataclass
class SoundTimerGate:
    """Turn sound timer values into on/off edges for an audio sink.

    ``sink`` is called with ``(enabled, frequency)`` only when the state flips.
    """

    sink: Callable[[bool, float], None]
    frequency: float = DEFAULT_TONE_HZ
    _active: bool = False

    @property
    def active(self) -> bool:
        return self._active

    def update(self, sound_timer: int) -> bool:
        """Poll the current sound timer. Returns ``True`` on a state change."""

        active = sound_timer > 0
        if active == self._active:
            return False
        self._active = active
        if debug_enabled("audio"):
            debug_log("audio", "tone enabled=%s timer=%d", active, sound_timer)
        self.sink(active, self.frequency)
        return True


class SquareWaveBeeper:
    """Looping square-wave tone on a dedicated pygame mixer channel.

    One :class:`pygame.mixer.Sound` is built per requested frequency and
    reused afterwards.
    """

    def __init__(self, *, sample_rate: int = 44_100, volume: float = 0.25) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._volume = max(0.0, min(1.0, volume))
        self._channel = pygame.mixer.Channel(0)
        self._sounds: Dict[float, object] = {}
        self._playing = False

    def set_state(self, enabled: bool, frequency: float) -> None:
        """Start the tone at ``frequency`` Hertz, or stop it."""

        if not enabled:
            self._stop()
            return
        sound = self._sound_for(frequency)
        if sound is None:
            self._stop()
            return
        self._channel.play(sound, loops=-1)
        self._channel.set_volume(self._volume)
        self._playing = True

    def shutdown(self) -> None:
        self._stop()
        self._sounds.clear()

    def _stop(self) -> None:
        if self._playing:
            self._channel.stop()
            self._playing = False

    def _sound_for(self, frequency: float):
        key = round(frequency, 1)
        if key in self._sounds:
            return self._sounds[key]
        samples = square_wave_period(self._sample_rate, frequency)
        if not samples:
            return None
        try:
            sound = self._pygame.mixer.Sound(buffer=samples.tobytes())
        except self._pygame.error as exc:  # pragma: no cover - pygame error path
            if debug_enabled("audio"):
                debug_log("audio", "sound_build_failed=%s", exc)
            return None
        self._sounds[key] = sound
        return sound


def square_wave_period(sample_rate: int, frequency: float, *, amplitude: int = 8_000) -> array:
    """One period of a signed 16-bit square wave at ``frequency``."""

    if frequency <= 0.0 or sample_rate <= 0:
        return array("h")
    period_samples = max(2, int(round(sample_rate / frequency)))
    half = period_samples // 2
    buffer = array("h", [amplitude] * half)
    buffer.extend([-amplitude] * (period_samples - half))
    return buffer


__all__ = ["DEFAULT_TONE_HZ", "SoundTimerGate", "SquareWaveBeeper", "square_wave_period"]
