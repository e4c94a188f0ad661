"""
EcoSense AI - Simulated scores
Every synthetic number in a feature result comes from a scorer, so a
seeded scorer gives reproducible output and a model-backed one can
replace it later.
"""

import random


class RandomScorer:

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

    def uniform(self, low, high):
        return self._rng.uniform(low, high)

    def randint(self, low, high):
        """Inclusive on both ends"""
        return self._rng.randint(low, high)

    def choice(self, options):
        return self._rng.choice(list(options))

    def jitter(self, base, spread):
        """base * (1 ± spread)"""
        return base * self._rng.uniform(1 - spread, 1 + spread)
