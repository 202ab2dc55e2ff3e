import re

import numpy as np

from enigma.alphabet import Alphabet
from enigma.errors import ConfigError

# a run of parenthesised groups, optionally separated by whitespace
_CYCLES_PATTERN = re.compile(r'\s*(?:\([^()\s]*\)\s*)*')
_CYCLE_PATTERN = re.compile(r'\(([^()\s]*)\)')


def parse_cycles(cycles: str, alphabet: Alphabet) -> list:
    """
    split a string like '(AELTPHQXRU) (BKNW) (CMOY)' into its cycles.
    :raises ConfigError: for unbalanced or nested parentheses, symbols outside of the alphabet
    and symbols that show up more than once
    """
    if not _CYCLES_PATTERN.fullmatch(cycles):
        raise ConfigError(f'malformed cycles {cycles!r}')

    used = set()
    parsed = list()
    for cycle in _CYCLE_PATTERN.findall(cycles):
        for sym in cycle:
            if not alphabet.contains(sym):
                raise ConfigError(f'symbol {sym!r} in cycles {cycles!r} is not part of the alphabet')
            if sym in used:
                raise ConfigError(f'symbol {sym!r} is repeated in cycles {cycles!r}')
            used.add(sym)
        if cycle:
            parsed.append(cycle)
    return parsed


class Permutation:
    def __init__(self, cycles: str, alphabet: Alphabet):
        self.alphabet = alphabet
        self.cycles = parse_cycles(cycles, alphabet)

        # symbols outside of every cycle are fixed points
        positions = np.arange(alphabet.size())
        self.forward = positions.copy()
        for cycle in self.cycles:
            indices = np.array([alphabet.to_index(sym) for sym in cycle])
            self.forward[indices] = np.roll(indices, -1)
        self.backward = np.empty_like(self.forward)
        self.backward[self.forward] = positions

    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        # python's modulo already has the sign of the divisor
        return p % self.size()

    def permute_index(self, p: int) -> int:
        return int(self.forward[self.wrap(p)])

    def invert_index(self, c: int) -> int:
        return int(self.backward[self.wrap(c)])

    def permute_symbol(self, sym: str) -> str:
        return self.alphabet.to_symbol(self.permute_index(self.alphabet.to_index(sym)))

    def invert_symbol(self, sym: str) -> str:
        return self.alphabet.to_symbol(self.invert_index(self.alphabet.to_index(sym)))

    def is_derangement(self) -> bool:
        return not np.any(self.forward == np.arange(self.size()))

    def __str__(self):
        return ' '.join(f'({cycle})' for cycle in self.cycles)

    def __repr__(self):
        return f'Permutation({str(self)!r}, {self.alphabet!r})'
