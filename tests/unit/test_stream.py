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

import pytest

from hypothesis import given

from modern_syslog.constants import Facility, Level
from modern_syslog.stream import Stream

from ..strategies import priorities


class TestStream:
    def test_priority_word(self, syslog):
        stream = Stream("LOG_ERR", "LOG_LOCAL0", syslog=syslog)

        assert stream.priority == Facility.LOG_LOCAL0 | Level.LOG_ERR

    def test_level_only(self, syslog):
        assert Stream(Level.LOG_WARNING, syslog=syslog).priority == 4

    @given(priorities())
    def test_priority_numbers_pass_through(self, priority):
        assert Stream(priority).priority == priority

    def test_unknown_facility_falls_back_to_level(self, syslog, output):
        syslog.open("a", 0, "LOG_LOCAL4")
        stream = Stream("LOG_ERR", "LOG_FOO", syslog=syslog)

        assert stream.priority == 3

        stream.write("x")
        assert output.getvalue() == "[syslog][i:a][f:local4][l:err] x\n"

    def test_unknown_level_logs_as_info(self, syslog, output):
        Stream("LOG_NOPE", "LOG_MAIL", syslog=syslog).write("x")

        assert output.getvalue() == "[syslog][l:info] x\n"

    def test_write_logs_chunk(self, syslog, output):
        stream = Stream("LOG_ERR", "LOG_LOCAL0", syslog=syslog)

        assert stream.write("disk full") == len("disk full")
        assert output.getvalue() == "[syslog][f:local0][l:err] disk full\n"

    def test_print_gives_one_line(self, syslog, output):
        syslog.open("myapp")
        stream = Stream("LOG_NOTICE", syslog=syslog)

        print("first", file=stream)
        print("second", file=stream)

        assert output.getvalue().splitlines() == [
            "[syslog][i:myapp][l:notice] first",
            "[syslog][i:myapp][l:notice] second",
        ]

    def test_bytes_are_decoded(self, syslog, output):
        stream = Stream("LOG_INFO", syslog=syslog)

        assert stream.write(b"caf\xc3\xa9 \xff\n") == 8
        assert output.getvalue() == "[syslog][l:info] caf\u00e9 \ufffd\n"

    def test_empty_chunks_ignored(self, syslog, output):
        stream = Stream("LOG_INFO", syslog=syslog)

        assert stream.write("") == 0
        assert stream.write("\n") == 1
        assert output.getvalue() == ""

    def test_filtered_by_mask(self, syslog, output):
        stream = Stream("LOG_DEBUG", syslog=syslog)
        stream.write("quiet")

        assert output.getvalue() == ""

        syslog.upto("LOG_DEBUG")
        stream.write("loud")

        assert output.getvalue() == "[syslog][l:debug] loud\n"

    def test_writable(self, syslog):
        assert Stream("LOG_INFO", syslog=syslog).writable()

    def test_closed(self, syslog):
        stream = Stream("LOG_INFO", syslog=syslog)
        stream.close()

        with pytest.raises(ValueError):
            stream.write("x")

    def test_context_manager(self, syslog, output):
        with Stream("LOG_INFO", syslog=syslog) as stream:
            stream.write("inside")

        assert stream.closed
        assert output.getvalue() == "[syslog][l:info] inside\n"

    def test_logging_handler(self, syslog, output):
        stream = Stream("LOG_WARNING", "LOG_DAEMON", syslog=syslog)
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

        logger = logging.getLogger("tests.stream")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            logger.warning("careful")
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        assert output.getvalue() == (
            "[syslog][f:daemon][l:warning] tests.stream: careful\n"
        )

    def test_defaults_to_root(self, root, capsys):
        root.open("rooted")
        Stream("LOG_ERR").write("x")

        assert capsys.readouterr().out == "[syslog][i:rooted][l:err] x\n"
