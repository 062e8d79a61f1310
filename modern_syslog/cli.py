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
import logging.config

import click

from modern_syslog.core import Syslog
from modern_syslog.priority import (
    SyslogError,
    UnparseablePriority,
    parse_level,
    parse_priority,
)
from modern_syslog.stream import Stream


logger = logging.getLogger(__name__)


def _validate_priority(ctx, param, value):
    if value is not None:
        try:
            return parse_priority(value)
        except UnparseablePriority as exc:
            raise click.BadParameter(
                f"{value!r} is not a priority of the form facility.level ({exc})"
            )


def _validate_level(ctx, param, value):
    if value is not None:
        try:
            return parse_level(value)
        except UnparseablePriority as exc:
            raise click.BadParameter(f"{value!r} is not a bare level ({exc})")


def _open(ident, facility, upto, strict=False):
    syslog = Syslog(strict=strict)

    for key, value in dict(
        ident=ident, facility=facility, upto=upto, strict=strict
    ).items():
        logger.debug("Configuring %s to %r", key, value)

    try:
        syslog.open(ident, 0, facility)
        if upto is not None:
            syslog.upto(upto)
    except SyslogError as exc:
        raise click.UsageError(f"{type(exc).__name__}: {exc}")

    return syslog


# Diagnostic verbosity is chosen with syslog's own level names.
DIAGNOSTIC_LEVELS = {
    "emerg": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "crit": logging.CRITICAL,
    "err": logging.ERROR,
    "warning": logging.WARNING,
    "notice": logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _logging_config(log_level, log_file):
    level = logging.getLevelName(DIAGNOSTIC_LEVELS[log_level])

    formatters = {
        "plain": {"format": "modern-syslog: {levelname}: {message}", "style": "{"}
    }
    handlers = {
        "stderr": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": level,
            "formatter": "plain",
        }
    }

    if log_file:
        formatters["timestamped"] = {
            "format": "[{asctime}] [{levelname:^10}] {name}: {message}",
            "datefmt": "%Y-%m-%d %H:%M:%S",
            "style": "{",
        }
        handlers["file"] = {
            "class": "logging.handlers.WatchedFileHandler",
            "filename": log_file,
            "level": level,
            "formatter": "timestamped",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


@click.group(
    context_settings={
        "auto_envvar_prefix": "MODERN_SYSLOG",
        "help_option_names": ["-h", "--help"],
        "max_content_width": 88,
    }
)
@click.option(
    "--log-level",
    type=click.Choice(list(DIAGNOSTIC_LEVELS)),
    default="warning",
    show_default=True,
    help="How much modern-syslog reports about itself on standard error.",
)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False, writable=True),
    help="A file that also receives those reports, with timestamps.",
)
def cli(log_level, log_file):
    """
    A syslog(3) look-alike for the shell.

    Messages are filtered by severity the way syslog does it, and every message that
    passes is printed to standard output as a single tagged line rather than being
    handed to a logging daemon.
    """
    logging.config.dictConfig(_logging_config(log_level, log_file))


ident_option = click.option(
    "-i", "--ident", metavar="IDENT", help="The identity to tag every line with."
)
priority_option = click.option(
    "-p",
    "--priority",
    callback=_validate_priority,
    default="notice",
    show_default=True,
    metavar="FACILITY.LEVEL",
    help="The priority to log at, e.g. local0.err.",
)
upto_option = click.option(
    "--upto",
    callback=_validate_level,
    metavar="LEVEL",
    help="Only log messages at LEVEL or more severe, e.g. LOG_WARNING.",
)


@cli.command(short_help="Logs a single message.")
@ident_option
@click.option(
    "-f",
    "--facility",
    metavar="FACILITY",
    help="The default facility, e.g. LOG_LOCAL0.",
)
@priority_option
@upto_option
@click.option(
    "--strict/--lenient",
    default=False,
    show_default=True,
    help="Reject unknown level and facility names instead of passing them through.",
)
@click.argument("message", nargs=-1, required=True)
def log(ident, facility, priority, upto, strict, message):
    """
    Logs MESSAGE, joined by spaces, at the given priority.
    """
    syslog = _open(ident, facility, upto, strict=strict)
    syslog.log(priority, " ".join(message))


@cli.command(short_help="Logs every line of a file.")
@ident_option
@priority_option
@upto_option
@click.argument("source", type=click.File("r", encoding="utf8"), default="-")
def pipe(ident, priority, upto, source):
    """
    Logs each line of SOURCE (standard input by default) as its own message.
    """
    syslog = _open(ident, None, upto)
    with Stream(priority, syslog=syslog) as stream:
        for line in source:
            stream.write(line)


@cli.command(short_help="Shows the mask for a level.")
@click.option(
    "--upto/--exact",
    default=True,
    show_default=True,
    help="Include every more severe level, or only LEVEL itself.",
)
@click.argument("level", callback=_validate_level)
def mask(upto, level):
    """
    Prints the mask that permits LEVEL, e.g. LOG_WARNING or warning.
    """
    syslog = Syslog()
    syslog.set_mask(level, upto=upto)
    click.echo(f"{syslog.curmask():#04x}")
