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

import importlib.metadata

from . import core
from .constants import (
    DEFAULT_MASK,
    FACILITIES,
    FACILITY_NAMES,
    LEVEL_NAMES,
    LEVELS,
    LOG_FACMASK,
    LOG_NFACILITIES,
    LOG_PRIMASK,
    OPTION_NAMES,
    OPTIONS,
    Facility,
    Level,
    Option,
)
from .core import Syslog
from .priority import (
    LevelOutOfRange,
    Numeric,
    Symbolic,
    SyslogError,
    UnknownFacilityName,
    UnknownLevelName,
    UnparseablePriority,
    classify,
    display_name,
    facility_name,
    level_name,
    log_mask,
    log_upto,
    make_priority,
    parse_level,
    parse_priority,
    passes,
    split_priority,
    to_facility,
    to_level,
    to_priority,
)
from .stream import Stream


try:
    __version__ = importlib.metadata.version("modern-syslog")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0+unknown"


level = LEVELS
facility = FACILITIES
option = OPTIONS

level_names = LEVEL_NAMES
facility_names = FACILITY_NAMES
option_names = OPTION_NAMES

# Every LOG_ name is also importable from here directly, the way node-syslog
# and the C headers spell them.
for _table in (LEVELS, FACILITIES, OPTIONS):
    globals().update(_table)
del _table


#
# The high level API, bound to ``core.root``.
#


def open(ident, option=0, facility=None):
    return core.root.open(ident, option, facility)


init = open


def close():
    return core.root.close()


def log(level, message, callback=None):
    return core.root.log(level, message, callback)


def setmask(mask=None):
    return core.root.setmask(mask)


def curmask():
    return core.root.curmask()


def upto(level):
    return core.root.upto(level)


def set_mask(level, upto=False):
    return core.root.set_mask(level, upto)


def _wrap(name):
    def wrapper(msg, *args):
        return getattr(core.root, name)(msg, *args)

    wrapper.__name__ = wrapper.__qualname__ = name
    return wrapper


emerg = _wrap("emerg")
alert = _wrap("alert")
crit = _wrap("crit")
error = _wrap("error")
err = _wrap("err")
warn = _wrap("warn")
warning = _wrap("warning")
note = _wrap("note")
notice = _wrap("notice")
info = _wrap("info")
debug = _wrap("debug")
