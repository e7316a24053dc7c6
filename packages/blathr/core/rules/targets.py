"""Constraint target selectors.

Targets are parsed once from their string form:

- ``pos:<p>``      choices of a part of speech
- ``termSet:<id>`` choices from a term set
- ``words``        word tokens (punctuation excluded)
- ``PP``           prepositional phrases
- anything else    a literal token
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from blathr.core.enums import PartOfSpeech


class CountUnit(str, Enum):
    """Countable units addressed by bare keywords."""

    WORDS = "words"
    PP = "PP"


@dataclass(frozen=True)
class PosTarget:
    pos: PartOfSpeech


@dataclass(frozen=True)
class TermSetTarget:
    term_set_id: str


@dataclass(frozen=True)
class CountTarget:
    unit: CountUnit


@dataclass(frozen=True)
class LiteralTarget:
    token: str


Target = PosTarget | TermSetTarget | CountTarget | LiteralTarget

_POS_PREFIX = "pos:"
_TERM_SET_PREFIX = "termSet:"
_POS_BY_VALUE = {pos.value: pos for pos in PartOfSpeech}
_UNIT_BY_VALUE = {unit.value: unit for unit in CountUnit}


def parse_target(raw: str) -> Target:
    """Parse a constraint target string.

    Example:
        >>> parse_target("pos:noun")
        PosTarget(pos=<PartOfSpeech.NOUN: 'noun'>)
        >>> parse_target("synergy")
        LiteralTarget(token='synergy')
    """
    if raw.startswith(_POS_PREFIX) and raw[len(_POS_PREFIX) :] in _POS_BY_VALUE:
        return PosTarget(pos=_POS_BY_VALUE[raw[len(_POS_PREFIX) :]])
    if raw.startswith(_TERM_SET_PREFIX):
        return TermSetTarget(term_set_id=raw[len(_TERM_SET_PREFIX) :])
    if raw in _UNIT_BY_VALUE:
        return CountTarget(unit=_UNIT_BY_VALUE[raw])
    return LiteralTarget(token=raw)
