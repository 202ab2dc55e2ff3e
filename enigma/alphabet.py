import string

from enigma.errors import ConfigError, RangeError, SymbolError

# characters with a meaning in cycle strings and descriptors
RESERVED = "()"


class Alphabet:
    def __init__(self, symbols: str = string.ascii_uppercase):
        symbols = symbols.strip()
        if len(symbols) == 0:
            raise ConfigError('alphabet must contain at least one symbol')
        for sym in symbols:
            if sym.isspace() or sym in RESERVED:
                raise ConfigError(f'invalid symbol {sym!r} in alphabet')
        if len(set(symbols)) != len(symbols):
            repeated = sorted({sym for sym in symbols if symbols.count(sym) > 1})
            raise ConfigError(f'repeated symbols {"".join(repeated)!r} in alphabet')

        self.symbols = symbols
        self.symbol_to_index_map = {sym: i for i, sym in enumerate(symbols)}

    def size(self) -> int:
        return len(self.symbols)

    def __len__(self):
        return self.size()

    def contains(self, sym: str) -> bool:
        return sym in self.symbol_to_index_map

    def __contains__(self, sym):
        return self.contains(sym)

    def to_index(self, sym: str) -> int:
        """inverse of to_symbol()"""
        try:
            return self.symbol_to_index_map[sym]
        except KeyError:
            raise SymbolError(f'symbol {sym!r} is not part of the alphabet {self.symbols!r}') from None

    def to_symbol(self, index: int) -> str:
        if not 0 <= index < self.size():
            raise RangeError(f'index {index} out of range 0..{self.size() - 1}')
        return self.symbols[index]

    def __eq__(self, other):
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self):
        return hash(self.symbols)

    def __repr__(self):
        return f'Alphabet({self.symbols!r})'
