"""Fixed tunables shared by the introduction and game models."""

from __future__ import annotations

CHALLENGES_PER_GAME = 5

# Inclusive (min, max) coefficient ranges offered by the user interface.
INTRODUCTION_COEFFICIENT_RANGE = (0, 3)
GAME_COEFFICIENT_RANGE = (0, 7)

# Points by number of incorrect attempts before success; anything beyond scores 0.
POINTS_BY_ATTEMPT = (2, 1)

# Incorrect checks allowed before the answer is revealed.
MAX_INCORRECT_ATTEMPTS = 2

RIGHT_ARROW = "→"
