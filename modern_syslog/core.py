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

import logging
import re
import sys
import threading

import attr
import attr.validators

from .constants import DEFAULT_MASK, QUERY_MASK, Level
from .priority import (
    display_name,
    facility_name,
    level_name,
    log_mask,
    log_upto,
    passes,
    split_priority,
    to_facility,
    to_priority,
)


logger = logging.getLogger(__name__)


# A single printf directive, or an escaped percent sign.
_DIRECTIVE = re.compile(r"%(?:%|[-#0 +]*\d*(?:\.\d+)?[diouxXeEfFgGcrsa])")


def _format(msg, args):
    # Each directive takes one argument; anything left over is appended after
    # a space, and directives with nothing left to take stay as written.
    msg = str(msg)
    if not args:
        return msg

    remaining = list(args)

    def substitute(match):
        directive = match.group()
        if directive == "%%":
            return "%"
        if not remaining:
            return directive
        return directive % (remaining.pop(0),)

    return " ".join([_DIRECTIVE.sub(substitute, msg)] + [str(a) for a in remaining])


def _split(priority):
    # A level that never resolved filters as bit 0 and renders as info.
    if isinstance(priority, int):
        return split_priority(priority)
    return 0, 0


def _at(level):
    def log_at(self, msg, *args):
        return self.log(level, _format(msg, args))

    log_at.__doc__ = f"Logs ``msg % args`` at {level.name}."
    return log_at


@attr.s(slots=True)
class Syslog:
    """
    A syslog(3) look-alike that writes lines to ``output`` (standard output
    when unset) instead of handing them to a logging daemon.

    Each instance keeps its own mask and identity, so several can coexist in
    one process.
    """

    output = attr.ib(default=None, repr=False)
    strict = attr.ib(default=False, validator=attr.validators.instance_of(bool))

    ident = attr.ib(default=None, init=False)
    option = attr.ib(default=0, init=False)
    facility = attr.ib(default=None, init=False)

    _mask = attr.ib(default=DEFAULT_MASK, init=False, repr=False)
    _lock = attr.ib(factory=threading.RLock, init=False, repr=False, eq=False)

    def open(self, ident, option=0, facility=None):
        if facility is not None:
            facility = to_facility(facility, strict=self.strict)

        with self._lock:
            self.ident = ident
            self.option = option
            self.facility = facility

        logger.debug("Opened syslog as %r with facility %r", ident, facility)

    init = open

    def close(self):
        return None

    def log(self, level, message, callback=None):
        """
        Writes ``message`` if its level passes the current mask, then calls
        ``callback`` (if given) either way. Returns whether a line was
        written.
        """
        priority = to_priority(level, strict=self.strict)
        _, code = _split(priority)

        written = False
        with self._lock:
            if passes(code, self._mask):
                self._write(self.render(priority, message))
                written = True

        if callback is not None:
            callback()

        return written

    def render(self, priority, message):
        facility, code = _split(priority)

        prefixes = ["[syslog]"]
        if self.ident:
            prefixes.append(f"[i:{self.ident}]")

        label = self._facility_label(facility if facility else self.facility)
        if label:
            prefixes.append(f"[f:{label}]")

        name = level_name(code if isinstance(priority, int) else priority)
        prefixes.append(f"[l:{name}]")
        return "{} {}".format("".join(prefixes), message)

    def _facility_label(self, facility):
        if facility is None:
            return None
        if isinstance(facility, str):
            return display_name(facility)

        label = facility_name(facility)
        if label is None:
            return str(facility)
        return label

    def _write(self, line):
        output = self.output if self.output is not None else sys.stdout
        print(line, file=output)

    def setmask(self, mask=None):
        # A query returns 0xff rather than the mask; curmask() reads it.
        if mask is None:
            return QUERY_MASK

        with self._lock:
            previous, self._mask = self._mask, mask
        return previous

    def curmask(self):
        with self._lock:
            current = self.setmask(0)
            self.setmask(current)
        return current

    def upto(self, level):
        mask = log_upto(level, strict=self.strict)
        logger.debug("Setting log mask up to %r (%#04x)", level, mask)
        return self.setmask(mask)

    def set_mask(self, level, upto=False):
        if upto:
            mask = log_upto(level, strict=self.strict)
        else:
            mask = log_mask(level, strict=self.strict)
        logger.debug("Setting log mask for %r (%#04x)", level, mask)
        return self.setmask(mask)

    emerg = _at(Level.LOG_EMERG)
    alert = _at(Level.LOG_ALERT)
    crit = _at(Level.LOG_CRIT)
    error = err = _at(Level.LOG_ERR)
    warn = warning = _at(Level.LOG_WARNING)
    note = notice = _at(Level.LOG_NOTICE)
    info = _at(Level.LOG_INFO)
    debug = _at(Level.LOG_DEBUG)


# The instance behind the module level functions in ``modern_syslog``.
root = Syslog()
