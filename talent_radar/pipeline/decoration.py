"""Cosmetic, non-deterministic fields added after ranking."""
import random
from typing import Optional

from .candidate import Candidate

AVAILABILITY_STATUSES = [
    "Open to opportunities",
    "Actively looking",
    "Available for consulting",
    "Open to new challenges",
    "Looking for remote opportunities",
    "Available immediately",
    "Considering opportunities",
]

TOTAL_ANALYZED_RANGE = (10000, 59999)


class Decorator:
    """Assign display-only status strings and the totalAnalyzed figure.

    Nothing here reflects real data. Pass a seeded random.Random for
    reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def decorate(self, candidates: list[Candidate]) -> list[Candidate]:
        for candidate in candidates:
            candidate.status = self.rng.choice(AVAILABILITY_STATUSES)
        return candidates

    def total_analyzed(self) -> int:
        return self.rng.randint(*TOTAL_ANALYZED_RANGE)
