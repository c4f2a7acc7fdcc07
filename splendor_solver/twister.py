# splendor_solver/twister.py

"""
Deterministic 32-bit Mersenne twister.

Two instances drive a run: one shuffles unknown cards into the decks, the
other makes every annealing decision. Keeping them apart means the number
of anneal restarts never changes which cards a trial draws.
"""

from typing import Optional

import numpy as np

N = 624
M = 397
MATRIX_A = 0x9908B0DF
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7FFFFFFF
WORD_MASK = 0xFFFFFFFF

_INIT_MULTIPLIER = 1812433253
_FLOAT_SCALE = 4.656612873077392578125e-10  # 2 ** -31


class Twister:
    def __init__(self, seed: int):
        self._table = np.zeros(N, dtype=np.uint32)
        self._outputs: list = []
        self._ptr = N
        self.init(seed)

    def init(self, seed: int) -> None:
        words = [seed & WORD_MASK]
        for i in range(1, N):
            prev = words[-1]
            words.append((_INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & WORD_MASK)
        self._table = np.array(words, dtype=np.uint32)
        self._generate_numbers()

    def _generate_numbers(self) -> None:
        mt = self._table
        # Word i reads words i + 1 and i + M. Chunks of N - M words never read
        # a word that the same chunk rewrites, so each chunk is one vector step.
        for start in range(0, N, N - M):
            idx = np.arange(start, min(start + N - M, N))
            s1 = mt[(idx + 1) % N]
            y = (mt[idx] & np.uint32(UPPER_MASK)) | (s1 & np.uint32(LOWER_MASK))
            mag = (s1 & np.uint32(1)) * np.uint32(MATRIX_A)
            mt[idx] = mt[(idx + M) % N] ^ (y >> np.uint32(1)) ^ mag

        y = mt.copy()
        y ^= y >> np.uint32(11)
        y ^= (y << np.uint32(7)) & np.uint32(0x9D2C5680)
        y ^= (y << np.uint32(15)) & np.uint32(0xEFC60000)
        y ^= y >> np.uint32(18)
        self._outputs = y.tolist()
        self._ptr = 0

    def _next_word(self) -> int:
        if self._ptr >= N:
            self._generate_numbers()
        word = self._outputs[self._ptr]
        self._ptr += 1
        return word

    def next_int(self, max_value: Optional[int] = None) -> int:
        """
        Without an argument, a uniform 32-bit value. With one, a uniform
        value in [0, max_value) by masking to the next power of two and
        rejecting draws that land outside the range.
        """
        if max_value is None:
            return self._next_word()
        if max_value < 1:
            raise ValueError(f"max_value must be at least 1, got {max_value}")

        used = max_value - 1
        used |= used >> 1
        used |= used >> 2
        used |= used >> 4
        used |= used >> 8
        used |= used >> 16

        while True:
            value = self._next_word() & used
            if value < max_value:
                return value

    def next_float(self) -> float:
        return (self._next_word() & LOWER_MASK) * _FLOAT_SCALE
