# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import attr
import attr.validators

from pyparsing import Literal as L, Optional as OptionalItem, Word
from pyparsing import alphanums, alphas, nums
from pyparsing import ParseException

from .constants import (
    FACILITIES,
    FACILITY_NAMES,
    LEVEL_NAMES,
    LEVELS,
    LOG_FACMASK,
    LOG_PRIMASK,
    PREFIX,
    Facility,
    Level,
)


class SyslogError(ValueError):
    pass


class UnknownLevelName(SyslogError):
    pass


class UnknownFacilityName(SyslogError):
    pass


class LevelOutOfRange(SyslogError):
    pass


class UnparseablePriority(SyslogError):
    pass


@attr.s(slots=True, frozen=True)
class Symbolic:
    name = attr.ib(type=str, validator=attr.validators.instance_of(str))


@attr.s(slots=True, frozen=True)
class Numeric:
    code = attr.ib(type=int, converter=int)


def classify(value):
    """
    Sorts a level or facility given by a caller into a symbolic name or an
    already numeric code. Anything else is a TypeError.
    """
    if isinstance(value, str):
        return Symbolic(value)
    if isinstance(value, int):
        return Numeric(value)
    raise TypeError(f"Expected a name or an integer code, not {value!r}")


def display_name(name):
    if name.startswith(PREFIX):
        name = name[len(PREFIX) :]
    return name.lower()


def to_level(value, strict=False):
    try:
        token = classify(value)
    except TypeError:
        if strict:
            raise UnknownLevelName(value) from None
        return value

    if isinstance(token, Symbolic):
        if token.name in LEVELS:
            return LEVELS[token.name]
        if strict:
            raise UnknownLevelName(token.name)
        return token.name

    if strict and token.code not in LEVEL_NAMES:
        raise LevelOutOfRange(token.code)
    return token.code


def to_facility(value, strict=False):
    try:
        token = classify(value)
    except TypeError:
        if strict:
            raise UnknownFacilityName(value) from None
        return value

    if isinstance(token, Symbolic):
        if token.name in FACILITIES:
            return FACILITIES[token.name]
        if strict:
            raise UnknownFacilityName(token.name)
        return token.name

    if strict and token.code not in FACILITY_NAMES:
        raise UnknownFacilityName(token.code)
    return token.code


def to_priority(value, strict=False):
    """
    Like ``to_level``, but a numeric value may be a whole priority word with
    facility bits set above the level.
    """
    priority = to_level(value)
    if strict:
        if not isinstance(priority, int):
            raise UnknownLevelName(value)
        if priority < 0 or priority & ~(LOG_FACMASK | LOG_PRIMASK):
            raise LevelOutOfRange(priority)
        facility, _ = split_priority(priority)
        if facility not in FACILITY_NAMES:
            raise UnknownFacilityName(facility)
    return priority


def level_name(code):
    # Anything we can't find is reported as info.
    name = LEVEL_NAMES.get(code)
    if name is None:
        return display_name(LEVEL_NAMES[Level.LOG_INFO])
    return display_name(name)


def facility_name(code):
    name = FACILITY_NAMES.get(code)
    if name is None:
        return None
    return display_name(name)


def log_mask(level, strict=False):
    return 1 << to_level(level, strict=strict)


def log_upto(level, strict=False):
    return (1 << (to_level(level, strict=strict) + 1)) - 1


def passes(level, mask):
    return (mask & (1 << level)) != 0


def make_priority(level, facility=None, strict=False):
    level = to_level(level, strict=strict)
    if facility is None:
        return level

    facility = to_facility(facility, strict=strict)
    # Leniently, a facility that never resolved adds no bits.
    if not isinstance(facility, int) or not isinstance(level, int):
        return level
    return facility | level


def split_priority(priority):
    return priority & LOG_FACMASK, priority & LOG_PRIMASK


# Spellings accepted by logger(1) that never had a LOG_ constant of their own.
LEVEL_ALIASES = {
    "PANIC": Level.LOG_EMERG,
    "ERROR": Level.LOG_ERR,
    "WARN": Level.LOG_WARNING,
}
FACILITY_ALIASES = {"SECURITY": Facility.LOG_AUTH}


LANGLE = L("<").suppress()
RANGLE = L(">").suppress()
DOT = L(".").suppress()

NUMBER = Word(nums)
NUMBER.set_parse_action(lambda s, l, t: int(t[0]))

NAME = Word(alphas, alphanums + "_")

TOKEN = NUMBER | NAME

PRI = LANGLE + Word(nums, min=1, max=4) + RANGLE
PRI = PRI.set_results_name("pri")
PRI.set_name("PRI")
PRI.set_parse_action(lambda s, l, t: int(t[0]))

FACILITY = TOKEN.copy().set_results_name("facility")
FACILITY.set_name("Facility")

LEVEL = TOKEN.copy().set_results_name("level")
LEVEL.set_name("Level")

SELECTOR = OptionalItem(FACILITY + DOT) + LEVEL

PRIORITY = PRI | SELECTOR


def _selector_level(token):
    if isinstance(token, int):
        if token not in LEVEL_NAMES:
            raise UnparseablePriority(f"Level out of range: {token}")
        return token
    name = token.upper()
    if name in LEVEL_ALIASES:
        return int(LEVEL_ALIASES[name])
    if not name.startswith(PREFIX):
        name = PREFIX + name
    if name not in LEVELS:
        raise UnparseablePriority(f"Unknown level: {token}")
    return LEVELS[name]


def _selector_facility(token):
    if isinstance(token, int):
        if token not in FACILITY_NAMES:
            raise UnparseablePriority(f"Unknown facility code: {token}")
        return token
    name = token.upper()
    if name in FACILITY_ALIASES:
        return int(FACILITY_ALIASES[name])
    if not name.startswith(PREFIX):
        name = PREFIX + name
    if name not in FACILITIES:
        raise UnparseablePriority(f"Unknown facility: {token}")
    return FACILITIES[name]


def parse_priority(text):
    """
    Parses a priority in the notation logger(1) takes, ``facility.level``
    (``local0.err``), a bare ``level``, or a ``<PRI>`` number, into a
    priority word.
    """
    try:
        parsed = PRIORITY.parse_string(text, parse_all=True)
    except ParseException as exc:
        raise UnparseablePriority(str(exc)) from None

    if "pri" in parsed:
        if parsed.pri > (LOG_FACMASK | LOG_PRIMASK):
            raise UnparseablePriority(f"Priority out of range: {parsed.pri}")
        return parsed.pri

    level = _selector_level(parsed.level)
    if "facility" in parsed:
        return _selector_facility(parsed.facility) | level
    return level


def parse_level(text):
    """
    Parses a bare level (``err``, ``LOG_ERR``, ``3``), rejecting anything that
    also names a facility.
    """
    try:
        parsed = LEVEL.parse_string(text, parse_all=True)
    except ParseException as exc:
        raise UnparseablePriority(str(exc)) from None

    return _selector_level(parsed.level)
