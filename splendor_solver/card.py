# splendor_solver/card.py

"""
Card model, card-line parsing and the canonical card set.

A card line lists the five costs in GemColor order, the bonus color token and
the point value, e.g. ``6 0 6 8 6 red 10``.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from .constants import (
    GemColor,
    NUM_COLORS,
    MAX_SINGLE_COLOR_SHORTFALL,
    MAX_TOTAL_SHORTFALL,
    TIER_1_VALUE,
    TIER_3_VALUE,
    _FULL_DECK_DATA,
)
from .errors import UnknownColorError, UnrecognizedCardError

logger = logging.getLogger(__name__)

CostVector = Tuple[int, int, int, int, int]


@dataclass(frozen=True, order=True)
class Card:
    """
    A single acquirable card. Field order gives the total order used for
    sorting: cost vector, then bonus color, then value.
    """
    cost: CostVector
    color: GemColor
    value: int

    def __post_init__(self):
        object.__setattr__(self, "cost", tuple(self.cost))
        object.__setattr__(self, "color", GemColor(self.color))
        if len(self.cost) != NUM_COLORS:
            raise ValueError(f"a card needs {NUM_COLORS} costs, got {len(self.cost)}")

    @property
    def tier(self) -> int:
        return tier_for_value(self.value)

    def cost_of(self, color: GemColor) -> int:
        return self.cost[color]

    def affordability_cost(self, bonuses: Sequence[int]) -> Optional[int]:
        """
        Tokens still needed to buy this card given the accumulated bonuses,
        or None when no amount of token gathering makes it affordable.
        """
        total = 0
        for color in GemColor:
            price = self.cost[color]
            bonus = bonuses[color]
            if bonus >= price:
                continue
            if bonus + MAX_SINGLE_COLOR_SHORTFALL < price:
                return None
            total += price - bonus
        if total > MAX_TOTAL_SHORTFALL:
            return None
        return total

    def describe(self) -> str:
        text = f"{self.color.token} ({self.value}) "
        for color in GemColor:
            if self.cost[color] > 0:
                text += f"{color.token} {self.cost[color]}, "
        return text

    def __repr__(self) -> str:
        return f"Card({self.describe().strip()})"

    @classmethod
    def from_line(cls, line: str) -> Optional["Card"]:
        """
        Parse one card line. Returns None for a malformed line. An unknown
        color token is fatal rather than malformed.
        """
        tokens = line.split()
        if len(tokens) < NUM_COLORS + 1:
            return None
        try:
            cost = tuple(int(t) for t in tokens[:NUM_COLORS])
        except ValueError:
            return None

        color_token = tokens[NUM_COLORS]
        try:
            color = GemColor.from_token(color_token)
        except KeyError:
            raise UnknownColorError(color_token) from None

        if len(tokens) < NUM_COLORS + 2:
            return None
        try:
            value = int(tokens[NUM_COLORS + 1])
        except ValueError:
            return None
        return cls(cost=cost, color=color, value=value)


def tier_for_value(value: int) -> int:
    if value == TIER_1_VALUE:
        return 1
    if value == TIER_3_VALUE:
        return 3
    return 2


def parse_cards(lines: Iterable[str]) -> Iterator[Card]:
    for line_no, line in enumerate(lines, start=1):
        card = Card.from_line(line)
        if card is None:
            if line.strip():
                logger.debug("Skipping malformed card line %d: %r", line_no, line.rstrip("\n"))
            continue
        yield card


class CanonicalDeck:
    """Every legal card of the game, read-only once built."""

    def __init__(self, cards: Iterable[Card]):
        self._cards: FrozenSet[Card] = frozenset(cards)

    @classmethod
    def default(cls) -> "CanonicalDeck":
        return cls(parse_cards(_FULL_DECK_DATA))

    @classmethod
    def from_file(cls, path) -> "CanonicalDeck":
        with open(path, "r", encoding="utf-8") as f:
            deck = cls(parse_cards(f))
        logger.debug("Loaded %d canonical cards from %s", len(deck), path)
        return deck

    def __contains__(self, card: Card) -> bool:
        return card in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(sorted(self._cards))

    def remaining(self, tier: int, known: Iterable[Card]) -> List[Card]:
        """Sorted cards of ``tier`` that are not in ``known``."""
        known = set(known)
        return [card for card in sorted(self._cards) if card.tier == tier and card not in known]


def read_cards(stream: TextIO, canonical: CanonicalDeck) -> Iterator[Card]:
    """
    Yield the cards described by ``stream`` in order. Malformed lines are
    skipped; a card missing from ``canonical`` raises UnrecognizedCardError.
    """
    for card in parse_cards(stream):
        if card not in canonical:
            raise UnrecognizedCardError(card)
        yield card
