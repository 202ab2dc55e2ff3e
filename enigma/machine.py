import numpy as np

from enigma.alphabet import Alphabet
from enigma.errors import ConfigError
from enigma.permutation import Permutation

SEPARATORS = ' \t\n'


class Machine:
    def __init__(self, alphabet: Alphabet, n_rotors: int, n_pawls: int, all_rotors):
        """
        :param n_rotors: number of rotor slots, slot 0 holds the reflector
        :param n_pawls: number of slots (counted from the right) that hold moving rotors
        :param all_rotors: every rotor that may be inserted, looked up by name
        """
        if n_rotors < 1:
            raise ConfigError(f'a machine needs at least one rotor slot, got {n_rotors}')
        if not 0 <= n_pawls < n_rotors:
            raise ConfigError(f'number of pawls must be in 0..{n_rotors - 1}, got {n_pawls}')

        self.alphabet = alphabet
        self.n_rotors = n_rotors
        self.n_pawls = n_pawls

        self.all_rotors = dict()
        for rotor in all_rotors:
            if rotor.name in self.all_rotors:
                raise ConfigError(f'rotor {rotor.name!r} is defined more than once')
            if rotor.alphabet != alphabet:
                raise ConfigError(f'rotor {rotor.name!r} does not use the alphabet of the machine')
            self.all_rotors[rotor.name] = rotor

        self.slots = list()
        self.plugboard = None
        self.ready = False

    def num_rotors(self) -> int:
        return self.n_rotors

    def num_pawls(self) -> int:
        return self.n_pawls

    def rotor_names(self) -> list:
        return [rotor.name for rotor in self.slots]

    def insert_rotors(self, names):
        """put the rotors named in names into the slots, names[0] has to be a reflector"""
        names = list(names)
        if len(names) != self.n_rotors:
            raise ConfigError(f'expected {self.n_rotors} rotors, got {len(names)}')

        n_moving = 0
        for i, name in enumerate(names):
            if name not in self.all_rotors:
                raise ConfigError(f'rotor {name!r} does not exist')
            rotor = self.all_rotors[name]
            if i == 0 and not rotor.reflecting():
                raise ConfigError(f'rotor {name!r} in the first slot is not a reflector')
            if 0 < i < self.n_rotors - self.n_pawls and rotor.rotates():
                raise ConfigError(f'rotor {name!r} in slot {i + 1} should not rotate')
            if name in names[:i]:
                raise ConfigError(f'rotor {name!r} is used more than once')
            if rotor.rotates():
                n_moving += 1
        if n_moving != self.n_pawls:
            raise ConfigError(f'expected {self.n_pawls} moving rotors, got {n_moving}')

        self.slots = [self.all_rotors[name] for name in names]
        # the new rotors have to be set before the next conversion
        self.ready = False

    def set_rotors(self, setting: str, ring_setting: str = None):
        """
        turn the rotors in slots 1..n_rotors-1 to the symbols in setting, the first symbol is for the leftmost
        rotor next to the reflector. Without a ring setting the rings of the rotors are left as they are.
        """
        if not self.slots:
            raise ConfigError('no rotors inserted')
        self._check_setting(setting, 'setting')
        if ring_setting is not None:
            self._check_setting(ring_setting, 'ring setting')

        for i, rotor in enumerate(self.slots[1:]):
            rotor.set_setting(setting[i])
            if ring_setting is not None:
                rotor.configure_ring(ring_setting[i])
        self.ready = True

    def _check_setting(self, setting: str, what: str):
        if len(setting) != self.n_rotors - 1:
            raise ConfigError(f'{what} {setting!r} must have {self.n_rotors - 1} symbols')
        for sym in setting:
            if not self.alphabet.contains(sym):
                raise ConfigError(f'{what} {setting!r} contains {sym!r} which is not part of the alphabet')

    def settings(self) -> str:
        return ''.join(rotor.setting_symbol() for rotor in self.slots[1:])

    def set_plugboard(self, plugboard: Permutation):
        if plugboard is not None and plugboard.alphabet != self.alphabet:
            raise ConfigError('plugboard does not use the alphabet of the machine')
        self.plugboard = plugboard

    def _step(self):
        # decide on the state before anything moves, a rotor that steps its
        # left neighbour only moves once even if its right neighbour moves it too
        moves = np.zeros(self.n_rotors, dtype=bool)
        moves[-1] = True
        for i in range(self.n_rotors - 1, 0, -1):
            if self.slots[i].at_notch() and self.slots[i - 1].rotates():
                moves[i] = True
                moves[i - 1] = True

        for rotor, move in zip(self.slots, moves):
            if move:
                rotor.advance()

    def convert_index(self, c: int) -> int:
        """advance the rotors, then send c through plugboard, rotors, reflector and back"""
        if not self.ready:
            raise ConfigError('machine is not configured, insert and set the rotors first')

        self._step()

        if self.plugboard is not None:
            c = self.plugboard.permute_index(c)

        for rotor in reversed(self.slots):
            c = rotor.convert_forward(c)
        for rotor in self.slots[1:]:
            c = rotor.convert_backward(c)

        if self.plugboard is not None:
            c = self.plugboard.invert_index(c)
        return c

    def convert_text(self, msg: str) -> str:
        output = list()
        for char in msg:
            if char in SEPARATORS:
                output.append(char)
            else:
                output.append(self.alphabet.to_symbol(self.convert_index(self.alphabet.to_index(char))))
        return ''.join(output)
