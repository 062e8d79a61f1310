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

import io

from . import core
from .priority import make_priority


class Stream(io.TextIOBase):
    """
    A writable text stream that logs every chunk written to it at a fixed
    priority, so it can stand in wherever a file object is expected
    (``print(..., file=...)``, ``logging.StreamHandler``, ...).
    """

    def __init__(self, level, facility=None, *, syslog=None):
        super().__init__()

        self.priority = make_priority(level, facility)
        self._syslog = syslog

    @property
    def syslog(self):
        if self._syslog is not None:
            return self._syslog
        return core.root

    def writable(self):
        return True

    def write(self, chunk):
        if self.closed:
            raise ValueError("I/O operation on closed stream.")

        if isinstance(chunk, (bytes, bytearray)):
            message = bytes(chunk).decode("utf8", errors="replace")
        else:
            message = chunk

        # print() hands us the line and its newline as two separate writes.
        if message.endswith("\n"):
            message = message[:-1]
        if message:
            self.syslog.log(self.priority, message)

        return len(chunk)
