import enum

from enigma.alphabet import Alphabet
from enigma.permutation import Permutation


class RotorKind(enum.Enum):
    REFLECTOR = 'R'
    FIXED = 'N'
    MOVING = 'M'


class Rotor:
    def __init__(self, name: str, permutation: Permutation, kind: RotorKind = RotorKind.FIXED, notches=()):
        """
        use the reflector(), fixed() and moving() constructors instead of calling this directly.
        :param notches: indices at which a moving rotor lets its left neighbour step
        """
        self.name = name
        self.permutation = permutation
        self.kind = kind
        self.notches = tuple(notches)

        self.setting = 0
        self.ring_offset = 0

    @classmethod
    def reflector(cls, name: str, permutation: Permutation):
        return cls(name, permutation, kind=RotorKind.REFLECTOR)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation):
        return cls(name, permutation, kind=RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str):
        rotor = cls(name, permutation, kind=RotorKind.MOVING)
        # resolve the notch symbols by turning the rotor to each of them
        notch_positions = list()
        for sym in notches:
            rotor.set_setting(sym)
            notch_positions.append(rotor.setting)
        rotor.notches = tuple(notch_positions)
        rotor.set_setting(0)
        return rotor

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    def at_notch(self) -> bool:
        if self.kind is RotorKind.MOVING:
            return self.setting in self.notches
        return False

    def advance(self):
        if self.kind is RotorKind.MOVING:
            self.set_setting(self.setting + 1)

    def set_setting(self, position):
        """position is either an index (taken modulo the alphabet size) or a symbol of the alphabet"""
        if isinstance(position, str):
            self.setting = self.alphabet.to_index(position)
        else:
            self.setting = position % self.size()

    def setting_symbol(self) -> str:
        return self.alphabet.to_symbol(self.setting)

    def configure_ring(self, offset):
        # an offset of 0 is the same wiring as no ring at all
        if offset is None:
            self.ring_offset = 0
        elif isinstance(offset, str):
            self.ring_offset = self.alphabet.to_index(offset)
        else:
            self.ring_offset = offset % self.size()

    def convert_forward(self, p: int) -> int:
        shift = self.setting - self.ring_offset
        return self.permutation.wrap(self.permutation.permute_index(p + shift) - shift)

    def convert_backward(self, e: int) -> int:
        shift = self.setting - self.ring_offset
        return self.permutation.wrap(self.permutation.invert_index(e + shift) - shift)

    def __repr__(self):
        return f'<Rotor {self.name} {self.kind.name.lower()} pos={self.setting} ring={self.ring_offset}>'
