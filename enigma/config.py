"""
Reading of machine configuration files and of message files.

A configuration file holds the alphabet, the number of rotor slots, the number of pawls and the
descriptions of all available rotors, e.g.

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    4 3
    I   MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    Beta N  (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B   R   (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO)
            (TZ) (VW)

A message file mixes settings lines such as '* B I II III AXL [RING] [(AB) (CD)]' with message lines.
"""
import logging
import re

from enigma.alphabet import Alphabet
from enigma.errors import ConfigError
from enigma.machine import Machine, SEPARATORS
from enigma.permutation import Permutation
from enigma.rotor import Rotor

logger = logging.getLogger(__name__)

_ROTOR_TYPE_PATTERN = re.compile(r'M[^\s*()]+|N|R')

GROUP_SIZE = 5

# first symbol of a settings line
SETTINGS_MARKER = '*'


def _is_cycle_token(token: str) -> bool:
    return token.startswith('(')


def _split_cycles(tokens: list, start: int):
    """collect the cycle tokens from tokens[start:], return them joined and the index after the last one"""
    end = start
    while end < len(tokens) and _is_cycle_token(tokens[end]):
        end += 1
    return ' '.join(tokens[start:end]), end


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigError(f'bad config file, {what} {token!r} is not an integer') from None


def parse_rotors(tokens: list, alphabet: Alphabet) -> list:
    rotors = list()
    i = 0
    while i < len(tokens):
        if i + 1 >= len(tokens):
            raise ConfigError(f'bad rotor description, rotor {tokens[i]!r} has no type')
        name, type_ = tokens[i], tokens[i + 1]
        if '(' in name or ')' in name:
            raise ConfigError(f'bad rotor description, invalid rotor name {name!r}')
        if not _ROTOR_TYPE_PATTERN.fullmatch(type_):
            raise ConfigError(f'bad rotor description, invalid type {type_!r} for rotor {name!r}')

        cycles, i = _split_cycles(tokens, i + 2)
        permutation = Permutation(cycles, alphabet)

        if type_ == 'R':
            if not permutation.is_derangement():
                logger.warning('reflector %s maps some symbols to themselves', name)
            rotors.append(Rotor.reflector(name, permutation))
        elif type_ == 'N':
            rotors.append(Rotor.fixed(name, permutation))
        else:
            for sym in type_[1:]:
                if not alphabet.contains(sym):
                    raise ConfigError(f'bad rotor description, notch {sym!r} of rotor {name!r} '
                                      f'is not part of the alphabet')
            rotors.append(Rotor.moving(name, permutation, type_[1:]))
        logger.debug('read rotor %s of type %s with cycles %s', name, type_, permutation)
    return rotors


def parse_config(text: str) -> Machine:
    """build an unconfigured machine from the contents of a configuration file"""
    tokens = text.split()
    if len(tokens) < 3:
        raise ConfigError('configuration file truncated')

    if SETTINGS_MARKER in tokens[0]:
        raise ConfigError(f'alphabet {tokens[0]!r} must not contain {SETTINGS_MARKER!r}')
    alphabet = Alphabet(tokens[0])
    n_rotors = _parse_int(tokens[1], 'number of rotors')
    n_pawls = _parse_int(tokens[2], 'number of pawls')
    rotors = parse_rotors(tokens[3:], alphabet)
    logger.debug('alphabet %s, %d slots, %d pawls, %d rotors available',
                 alphabet.symbols, n_rotors, n_pawls, len(rotors))

    return Machine(alphabet, n_rotors, n_pawls, rotors)


def set_up(machine: Machine, settings: str):
    """apply a settings line (without the leading '*') to machine"""
    tokens = settings.split()
    words = list()
    i = 0
    while i < len(tokens) and not _is_cycle_token(tokens[i]):
        words.append(tokens[i])
        i += 1
    cycles, i = _split_cycles(tokens, i)
    if i != len(tokens):
        raise ConfigError(f'settings line {settings!r} has text after the plugboard')

    n_rotors = machine.num_rotors()
    if len(words) == n_rotors + 1:
        names, setting, ring_setting = words[:n_rotors], words[n_rotors], None
    elif len(words) == n_rotors + 2:
        names, setting, ring_setting = words[:n_rotors], words[n_rotors], words[n_rotors + 1]
    else:
        raise ConfigError(f'invalid settings line {settings!r}')

    plugboard = Permutation(cycles, machine.alphabet) if cycles else None

    machine.insert_rotors(names)
    machine.set_rotors(setting, ring_setting)
    # without cycles the previous plugboard stays in place
    if plugboard is not None:
        machine.set_plugboard(plugboard)
    logger.debug('rotors %s set to %s, ring %s, plugboard %s', ' '.join(names), setting, ring_setting, plugboard)


def group_symbols(msg: str, group_size: int = GROUP_SIZE) -> str:
    """drop all separators from msg and split what is left into groups of group_size symbols"""
    symbols = ''.join(c for c in msg if c not in SEPARATORS)
    return ' '.join(symbols[i:i + group_size] for i in range(0, len(symbols), group_size))


def process_messages(machine: Machine, lines):
    """convert the message lines, yield one output line per input line"""
    configured = False
    for line in lines:
        line = line.strip()
        if not line:
            yield ''
        elif line.startswith(SETTINGS_MARKER):
            set_up(machine, line[1:])
            configured = True
        elif not configured:
            raise ConfigError('machine not configured, there is no settings line before the first message')
        else:
            yield group_symbols(machine.convert_text(line))
