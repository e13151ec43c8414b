from __future__ import annotations
from dataclasses import dataclass

CHANNEL_MAX = 0xFFFF  # 16-bit channel depth


@dataclass(frozen=True)
class Pixel:
    """
    Value object: one RGB pixel, each channel an unsigned 16-bit intensity.
    """
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= CHANNEL_MAX:
                raise ValueError(f"{name} channel out of 16-bit range: {value}")

    def as_tuple(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue
