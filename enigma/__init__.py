from enigma.alphabet import Alphabet
from enigma.errors import ConfigError, EnigmaError, RangeError, SymbolError
from enigma.machine import Machine
from enigma.permutation import Permutation
from enigma.rotor import Rotor, RotorKind
