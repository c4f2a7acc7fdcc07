# splendor_solver/constants.py

from enum import IntEnum


class GemColor(IntEnum):
    # Order matches the cost columns of a card line.
    BLACK = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    WHITE = 4

    @property
    def token(self) -> str:
        return self.name.lower()

    @classmethod
    def from_token(cls, token: str) -> "GemColor":
        return cls[token.upper()]


NUM_COLORS = len(GemColor)

CARD_LEVELS = (1, 2, 3)
FACE_UP_CARDS_PER_LEVEL = 4
MAX_BACKLOG_SIZE = 30

# Point values that pin a card to a tier; every other value is tier 2.
TIER_1_VALUE = 0
TIER_3_VALUE = 10

# Affordability model: tokens of one colour gatherable per purchase, and the
# overall number of tokens a player can hold.
MAX_SINGLE_COLOR_SHORTFALL = 4
MAX_TOTAL_SHORTFALL = 12
TOKENS_PER_TURN = 4

TURN_LIMIT = 28
WINNING_SCORE = 31

# Move codes address three tiers of four slots; anything at or above 12 is
# never a valid slot.
MOVE_CODE_MODULUS = 16
MUTATION_DOMAIN = 10
MAX_MOVES = 31

START_TEMPERATURE = 2.0
FINAL_TEMPERATURE = 0.1
ANNEAL_STEPS = 200_000
ANNEAL_RUNS_PER_TRIAL = 10

NUM_TRIALS = 50
BACKLOG_FILL_SIZE = 25
SETUP_SEED = 23590421
ANNEAL_SEED = 549120939

# Percentage of fully random boards that reach the winning score.
RANDOM_BOARD_BASELINE = 3.7

# Canonical card table, one card per line in the input format:
# black red green blue white <bonus color> <points>
_FULL_DECK_DATA = (
    # Tier 1, black bonus
    "0 1 1 1 1 black 0",
    "0 1 1 2 1 black 0",
    "0 1 0 2 2 black 0",
    "1 3 1 0 0 black 0",
    "0 1 2 0 0 black 0",
    "0 0 2 0 2 black 0",
    "0 0 3 0 0 black 0",
    # Tier 1, red bonus
    "1 0 1 1 1 red 0",
    "1 0 1 1 2 red 0",
    "2 0 1 0 2 red 0",
    "3 1 0 0 1 red 0",
    "0 0 1 2 0 red 0",
    "0 2 0 0 2 red 0",
    "0 0 0 0 3 red 0",
    # Tier 1, green bonus
    "1 1 0 1 1 green 0",
    "2 1 0 1 1 green 0",
    "2 2 0 1 0 green 0",
    "0 0 1 3 1 green 0",
    "0 0 0 1 2 green 0",
    "0 2 0 2 0 green 0",
    "0 3 0 0 0 green 0",
    # Tier 1, blue bonus
    "1 1 1 0 1 blue 0",
    "1 2 1 0 1 blue 0",
    "0 2 2 0 1 blue 0",
    "0 1 3 1 0 blue 0",
    "2 0 0 0 1 blue 0",
    "2 0 2 0 0 blue 0",
    "3 0 0 0 0 blue 0",
    # Tier 1, white bonus
    "1 1 1 1 0 white 0",
    "1 1 2 1 0 white 0",
    "1 0 2 2 0 white 0",
    "1 0 0 1 3 white 0",
    "1 2 0 0 0 white 0",
    "2 0 0 2 0 white 0",
    "0 0 0 3 0 white 0",

    # Tier 2, black bonus
    "0 0 2 2 3 black 1",
    "2 0 3 0 3 black 1",
    "0 2 4 1 0 black 2",
    "0 3 5 0 0 black 2",
    "0 0 0 0 5 black 2",
    "6 0 0 0 0 black 3",
    # Tier 2, red bonus
    "3 2 0 0 2 red 1",
    "3 2 0 3 0 red 1",
    "0 0 2 4 1 red 2",
    "5 0 0 0 3 red 2",
    "5 0 0 0 0 red 2",
    "0 6 0 0 0 red 3",
    # Tier 2, green bonus
    "0 3 2 0 3 green 1",
    "2 0 0 3 2 green 1",
    "1 0 0 2 4 green 2",
    "0 0 3 5 0 green 2",
    "0 0 5 0 0 green 2",
    "0 0 6 0 0 green 3",
    # Tier 2, blue bonus
    "0 3 2 2 0 blue 1",
    "3 0 3 2 0 blue 1",
    "0 0 0 3 5 blue 2",
    "4 1 0 0 2 blue 2",
    "0 0 0 5 0 blue 2",
    "0 0 0 6 0 blue 3",
    # Tier 2, white bonus
    "2 2 3 0 0 white 1",
    "0 3 0 3 2 white 1",
    "2 4 1 0 0 white 2",
    "3 5 0 0 0 white 2",
    "0 5 0 0 0 white 2",
    "0 0 0 0 6 white 3",

    # Tier 3
    "6 0 6 8 6 red 10",
    "6 8 6 6 0 white 10",
)
