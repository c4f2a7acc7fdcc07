# splendor_solver/state.py

from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .constants import (
    FACE_UP_CARDS_PER_LEVEL,
    MAX_MOVES,
    MOVE_CODE_MODULUS,
    MUTATION_DOMAIN,
    TURN_LIMIT,
)
from .card import Card
from .deck import Deck, PlayoutTally, turns_for_tokens
from .errors import CapacityExceededError, SequenceIntegrityError
from .twister import Twister


class MutationType(Enum):
    CHANGE = 0
    INSERT = 1
    SWAP = 2


class MutationOutcome(Enum):
    APPLIED = "applied"
    EMPTY = "empty"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    TOO_SHORT = "too_short"
    NO_OP_SWAP = "no_op_swap"

    @property
    def applied(self) -> bool:
        return self is MutationOutcome.APPLIED


def decode_move(code: int) -> Optional[Tuple[int, int]]:
    """(deck index, slot) addressed by a move code, or None for no tier."""
    x = code % MOVE_CODE_MODULUS
    deck_index, slot = divmod(x, FACE_UP_CARDS_PER_LEVEL)
    if deck_index > 2:
        return None
    return deck_index, slot


class MoveSequence:
    """Ordered move codes with a hard capacity."""

    def __init__(self, codes: Iterable[int] = (), capacity: int = MAX_MOVES):
        self.capacity = capacity
        self._codes: List[int] = []
        for code in codes:
            self.append(code)

    def copy(self) -> "MoveSequence":
        clone = MoveSequence(capacity=self.capacity)
        clone._codes = self._codes[:]
        return clone

    def append(self, code: int) -> None:
        if len(self._codes) >= self.capacity:
            raise CapacityExceededError(self.capacity)
        self._codes.append(code)

    def insert(self, pos: int, code: int) -> MutationOutcome:
        if len(self._codes) >= self.capacity:
            return MutationOutcome.CAPACITY_EXCEEDED
        self._codes.insert(pos, code)
        return MutationOutcome.APPLIED

    def mutate(self, rng: Twister) -> MutationOutcome:
        """
        Apply one random local edit: change a value, insert a value, or swap
        two positions. Draw order is operator, position(s), value(s).
        """
        kind = MutationType(rng.next_int(3))
        size = len(self._codes)

        if kind is MutationType.CHANGE:
            if size == 0:
                return MutationOutcome.EMPTY
            pos = rng.next_int(size)
            old = self._codes[pos]
            while True:
                new = rng.next_int(MUTATION_DOMAIN)
                if new != old:
                    break
            self._codes[pos] = new
            return MutationOutcome.APPLIED

        if kind is MutationType.INSERT:
            if size >= self.capacity:
                return MutationOutcome.CAPACITY_EXCEEDED
            pos = rng.next_int(size + 1)
            return self.insert(pos, rng.next_int(MUTATION_DOMAIN))

        if size < 3:
            return MutationOutcome.TOO_SHORT
        px = rng.next_int(size)
        py = rng.next_int(size)
        if px == py or self._codes[px] == self._codes[py]:
            return MutationOutcome.NO_OP_SWAP
        self._codes[px], self._codes[py] = self._codes[py], self._codes[px]
        return MutationOutcome.APPLIED

    def mutate_until_applied(self, rng: Twister) -> MutationOutcome:
        while True:
            outcome = self.mutate(rng)
            if outcome.applied:
                return outcome

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[int]:
        return iter(self._codes)

    def __getitem__(self, index: int) -> int:
        return self._codes[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, MoveSequence):
            return self._codes == other._codes
        if isinstance(other, (list, tuple)):
            return list(self._codes) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"MoveSequence({self._codes})"


class PlayoutState:
    """
    A move sequence together with what it achieves when replayed: the moves
    that were accepted, the cards they bought and the running totals.
    """

    def __init__(self):
        self.moves = MoveSequence()
        self.cards: List[Card] = []
        self.points = 0
        self.tokens_cost = 0
        self.rounds = 0

    @property
    def total_turns(self) -> int:
        return self.rounds + turns_for_tokens(self.tokens_cost)

    @classmethod
    def play_out(cls, decks: Sequence[Deck], candidate: Iterable[int],
                 turn_limit: int = TURN_LIMIT) -> "PlayoutState":
        """
        Replay ``candidate`` against copies of ``decks``. Moves that cannot
        be played are dropped; the caller's decks are never touched.
        """
        decks = [deck.copy() for deck in decks]
        tally = PlayoutTally()
        state = cls()

        for move in candidate:
            target = decode_move(move)
            if target is None:
                continue
            deck_index, slot = target
            card = decks[deck_index].process_move(slot, tally, turn_limit)
            if card is None:
                continue
            state.moves.append(move % MOVE_CODE_MODULUS)
            state.cards.append(card)

        state.points = tally.points
        state.tokens_cost = tally.tokens_cost
        state.rounds = tally.rounds
        return state

    def trace_lines(self) -> List[str]:
        if len(self.cards) != len(self.moves):
            raise SequenceIntegrityError(
                f"{len(self.moves)} moves but {len(self.cards)} cards in playout")
        lines = [f"points: {self.points}, rounds: {self.rounds}, "
                 f"tokens_cost: {self.tokens_cost}, cc {self.total_turns}"]
        for move, card in zip(self.moves, self.cards):
            lines.append(f"{move}: {card.describe()}")
        return lines

    def __repr__(self) -> str:
        return (f"PlayoutState(points={self.points}, rounds={self.rounds}, "
                f"tokens_cost={self.tokens_cost}, moves={list(self.moves)})")
