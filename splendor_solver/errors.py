# splendor_solver/errors.py

class SplendorSolverError(Exception):
    pass


class FatalInputError(SplendorSolverError):
    """Input that cannot describe a card of this game. The run must stop."""


class UnknownColorError(FatalInputError):
    def __init__(self, token: str):
        super().__init__(f"unrecognized color {token!r}")
        self.token = token


class UnrecognizedCardError(FatalInputError):
    def __init__(self, card):
        super().__init__(f"unrecognized card {card.describe()}")
        self.card = card


class SequenceIntegrityError(SplendorSolverError):
    pass


class CapacityExceededError(SplendorSolverError):
    def __init__(self, capacity: int):
        super().__init__(f"move sequence is full ({capacity} moves)")
        self.capacity = capacity
