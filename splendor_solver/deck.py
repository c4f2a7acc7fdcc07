# splendor_solver/deck.py

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .constants import (
    CARD_LEVELS,
    FACE_UP_CARDS_PER_LEVEL,
    MAX_BACKLOG_SIZE,
    NUM_COLORS,
    TOKENS_PER_TURN,
    TURN_LIMIT,
)
from .card import Card
from .twister import Twister


@dataclass
class PlayoutTally:
    """Running totals of one replay."""
    points: int = 0
    tokens_cost: int = 0
    rounds: int = 0
    bonuses: List[int] = field(default_factory=lambda: [0] * NUM_COLORS)


def turns_for_tokens(tokens_cost: int) -> int:
    return (tokens_cost + TOKENS_PER_TURN - 1) // TOKENS_PER_TURN


class Deck:
    """
    One tier: up to four face-up slots and a hidden backlog. An emptied slot
    is refilled from the end of the backlog.
    """

    def __init__(self, level: int = 1):
        self.level = level
        self.slots: List[Optional[Card]] = []
        self.backlog: List[Card] = []

    def copy(self) -> "Deck":
        clone = Deck(self.level)
        clone.slots = self.slots[:]
        clone.backlog = self.backlog[:]
        return clone

    def add_card(self, card: Card) -> None:
        if len(self.slots) < FACE_UP_CARDS_PER_LEVEL:
            self.slots.append(card)
        elif len(self.backlog) < MAX_BACKLOG_SIZE:
            self.backlog.append(card)
        else:
            raise ValueError(f"Level {self.level} backlog is full ({MAX_BACKLOG_SIZE} cards)")

    def slot_occupied(self, index: int) -> bool:
        if index < 0 or index >= len(self.slots):
            return False
        return self.slots[index] is not None

    def cards(self) -> Set[Card]:
        known = {card for card in self.slots if card is not None}
        known.update(self.backlog)
        return known

    def reverse_backlog(self) -> None:
        self.backlog.reverse()

    def pop_card(self, index: int) -> Card:
        card = self.slots[index]
        self.slots[index] = self.backlog.pop() if self.backlog else None
        return card

    def process_move(self, index: int, tally: PlayoutTally, turn_limit: int = TURN_LIMIT) -> Optional[Card]:
        """
        Try to buy the card in slot ``index``. On success the tally is
        updated and the bought card returned; otherwise nothing changes and
        None is returned.
        """
        if not self.slot_occupied(index):
            return None
        card = self.slots[index]

        cost = card.affordability_cost(tally.bonuses)
        if cost is None:
            return None
        if tally.rounds + 1 + turns_for_tokens(tally.tokens_cost + cost) > turn_limit:
            return None

        tally.tokens_cost += cost
        tally.rounds += 1
        tally.points += card.value
        tally.bonuses[card.color] += 1
        return self.pop_card(index)

    def fill_randomly(self, desired_size: int, available: Sequence[Card], rng: Twister) -> None:
        """
        Deal unknown cards: empty face-up positions first, then the backlog
        up to ``desired_size``. ``available`` itself is left untouched.
        """
        pool = list(available)
        while len(self.slots) < FACE_UP_CARDS_PER_LEVEL and pool:
            self.slots.append(_draw(pool, rng))
        while len(self.backlog) < desired_size and pool:
            self.backlog.append(_draw(pool, rng))

    def __len__(self) -> int:
        return sum(1 for card in self.slots if card is not None) + len(self.backlog)

    def __repr__(self) -> str:
        rep_str = f"Level {self.level} Deck: ({len(self.backlog)} cards left)\n"
        for i, card in enumerate(self.slots):
            if card:
                rep_str += f"  [{i}]: {card.describe()}\n"
            else:
                rep_str += f"  [{i}]: (Empty)\n"
        return rep_str


def _draw(pool: List[Card], rng: Twister) -> Card:
    x = rng.next_int(len(pool))
    card = pool[x]
    pool[x], pool[-1] = pool[-1], pool[x]
    pool.pop()
    return card


def build_decks(cards: Iterable[Card]) -> Tuple[Deck, Deck, Deck]:
    decks = {level: Deck(level) for level in CARD_LEVELS}
    for card in cards:
        decks[card.tier].add_card(card)
    return tuple(decks[level] for level in CARD_LEVELS)
