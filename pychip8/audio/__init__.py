"""Audio output for the CHIP-8 interpreter."""

from .beeper import DEFAULT_TONE_HZ, SoundTimerGate, SquareWaveBeeper, square_wave_period

__all__ = [
    "DEFAULT_TONE_HZ",
    "SoundTimerGate",
    "SquareWaveBeeper",
    "square_wave_period",
]
