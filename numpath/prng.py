import datetime
import math
from dataclasses import dataclass

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class InvalidRangeError(ValueError):
    pass


@dataclass
class Prng:
    """
    Linear congruential generator with a Math.random-like interface.

    The state never exceeds MODULUS, so every step is exact and the stream is
    identical for a given seed on any platform.
    """

    seed: int | str

    def __post_init__(self) -> None:
        self.state = int(self.seed)

    def next(self) -> float:
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Returns an integer in [low, high], both bounds inclusive."""
        if low > high:
            raise InvalidRangeError(f"Invalid range: {low} > {high}")
        return math.floor(self.next() * (high - low + 1)) + low


def seed_from_time(moment: datetime.datetime | None = None) -> int:
    """
    Builds a seed from the HHMMSS digits of a time of day.
    09:05:03 gives the string "090503", read as the integer 90503.
    """
    if moment is None:
        moment = datetime.datetime.now()
    return int(f"{moment.hour:02d}{moment.minute:02d}{moment.second:02d}")
