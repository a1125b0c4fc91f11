"""Command-line interface for the fswikifmt formatter.

This module provides the ``fswikifmt`` command. It formats FSWiki documents
into their canonical form and either prints the result, rewrites the files
in place, reports which files are not canonical, or shows a diff.

Configuration Sources
---------------------
Option values are resolved from, lowest to highest priority:

1. Built-in defaults
2. A configuration file (``--config``, ``FSWIKIFMT_CONFIG``, or the first
   ``.fswikifmt.toml``/``.yaml``/``.yml``/``.json`` or ``pyproject.toml``
   with a ``[tool.fswikifmt]`` table found from the working directory up)
3. Environment variables named ``FSWIKIFMT_<OPTION_NAME>``, with the option
   name upper-cased and dashes replaced by underscores
4. Command-line arguments

Examples
--------
Format a file to standard output::

    $ fswikifmt page.wiki

Rewrite files in place::

    $ fswikifmt -w pages/*.wiki

Check formatting in CI::

    $ fswikifmt --check pages/*.wiki

Left-aligned tables with spacing::

    $ fswikifmt --table-align left --table-insert-space page.wiki

Use environment variables for defaults::

    $ export FSWIKIFMT_TABLE_ALIGN=left
    $ fswikifmt -w page.wiki

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from concurrent.futures import ProcessPoolExecutor
from dataclasses import MISSING, fields
from itertools import repeat
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Sequence, Union

from fswikifmt import __version__
from fswikifmt.api import load_document_text
from fswikifmt.cli.config import load_config_with_priority
from fswikifmt.cli.output import (
    FileResult,
    PlainReporter,
    RichReporter,
    format_unified_diff,
    should_use_rich_output,
)
from fswikifmt.constants import ENV_PREFIX, STDIN_MARKER
from fswikifmt.exceptions import ConfigError, FswikiFmtError, ValidationError
from fswikifmt.logging_utils import configure_logging, document_context
from fswikifmt.options.base import CloneFrozenMixin
from fswikifmt.options.fswiki import FswikiFormatOptions, FswikiParserOptions
from fswikifmt.parsers.fswiki import FswikiParser
from fswikifmt.renderers.fswiki import FswikiRenderer
from fswikifmt.serialization import events_to_json
from fswikifmt.utils.io_utils import write_content

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2

MODE_STDOUT = "stdout"
MODE_WRITE = "write"
MODE_CHECK = "check"
MODE_DIFF = "diff"
MODE_DUMP = "dump"

STDIN_DISPLAY_NAME = "<stdin>"

# Arguments never read from configuration files or environment variables
_NON_CONFIGURABLE_DESTS = frozenset({"help", "version", "files", "config"})

_TRUE_VALUES = ("true", "1", "yes", "on")


# =============================================================================
# Argument parsing
# =============================================================================


def positive_int(value: str) -> int:
    """Validate positive integer for argparse."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from None
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def comma_separated(value: str) -> tuple[str, ...]:
    """Split a comma-separated argparse value into a tuple of names."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def add_options_arguments(group: Any, options_class: type[CloneFrozenMixin]) -> None:
    """Add one command-line flag per field of an options dataclass.

    The flag name, help text and choices come from the field's metadata.
    Every flag defaults to None so that unset flags can be told apart from
    values given on the command line.

    Parameters
    ----------
    group : argparse.ArgumentParser or argument group
        Where the flags are added
    options_class : type
        Frozen options dataclass

    """
    for field in fields(options_class):  # type: ignore[arg-type]
        metadata = field.metadata
        flag = "--" + metadata.get("cli_name", field.name.replace("_", "-"))
        default = field.default if field.default is not MISSING else None
        help_text = metadata.get("help", "")
        if default is not None and not isinstance(default, bool):
            shown = ",".join(default) if isinstance(default, tuple) else default
            help_text = f"{help_text} (default: {shown})"

        kwargs: dict[str, Any] = {"dest": field.name, "default": None, "help": help_text}
        if isinstance(default, bool):
            kwargs["action"] = argparse.BooleanOptionalAction
        elif "choices" in metadata:
            kwargs["choices"] = metadata["choices"]
        elif isinstance(default, float):
            kwargs["type"] = float
        elif isinstance(default, tuple):
            kwargs["type"] = comma_separated
            kwargs["metavar"] = "ENC[,ENC...]"
        group.add_argument(flag, **kwargs)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the fswikifmt command."""
    parser = argparse.ArgumentParser(
        prog="fswikifmt",
        description="Format FSWiki documents into their canonical form.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Options may also be set with FSWIKIFMT_<OPTION> environment variables\n"
            "or in .fswikifmt.toml / .fswikifmt.yaml / .fswikifmt.json / pyproject.toml."
        ),
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Documents to format. With no FILE, or when FILE is -, read standard input.",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("-w", "--write", action="store_true", help="Rewrite files in place when they change")
    mode_group.add_argument(
        "--check", action="store_true", help="Report files that are not canonical and exit 1 if there are any"
    )
    mode_group.add_argument("--diff", action="store_true", help="Print a unified diff instead of the formatted text")
    mode_group.add_argument("--dump-events", action="store_true", help="Print the parsed event stream as JSON")

    format_group = parser.add_argument_group("formatting options")
    add_options_arguments(format_group, FswikiFormatOptions)

    input_group = parser.add_argument_group("input options")
    add_options_arguments(input_group, FswikiParserOptions)

    processing_group = parser.add_argument_group("processing")
    processing_group.add_argument("--config", metavar="PATH", help="Load options from this configuration file")
    processing_group.add_argument(
        "--parallel", type=positive_int, default=1, metavar="N", help="Format files in N worker processes"
    )
    processing_group.add_argument(
        "--skip-errors", action="store_true", help="Continue with the remaining files after an error"
    )
    processing_group.add_argument("--rich", action="store_true", help="Show progress and a summary with rich")
    processing_group.add_argument(
        "--force-rich", action="store_true", help="Use rich output even when stderr is not a terminal"
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configurable_actions(parser: argparse.ArgumentParser) -> Iterator[argparse.Action]:
    for action in parser._actions:
        if action.dest and action.dest not in _NON_CONFIGURABLE_DESTS:
            yield action


def apply_config_to_parser(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    """Use configuration file values as parser defaults.

    Keys that match no argument are logged and ignored.
    """
    dests = {action.dest for action in _configurable_actions(parser)}
    defaults = {}
    for key, value in config.items():
        if key in dests:
            defaults[key] = tuple(value) if isinstance(value, list) else value
        else:
            logger.warning(f"Ignoring unknown configuration key: {key}")
    parser.set_defaults(**defaults)


def get_env_var_value(key: str) -> Optional[str]:
    """Get the environment variable for an option, with the FSWIKIFMT_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'table_align', 'skip-errors')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    Environment values override configuration file values; command-line
    arguments still take precedence over both. String defaults are
    converted by the argument's type when the arguments are parsed.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify

    """
    for action in _configurable_actions(parser):
        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if isinstance(action, (argparse._StoreTrueAction, argparse.BooleanOptionalAction)):
            action.default = env_value.strip().lower() in _TRUE_VALUES
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning(f"Invalid choice for {env_name}: {env_value}. Choices: {list(action.choices)}")
        else:
            action.default = env_value


def _create_config_preparser() -> argparse.ArgumentParser:
    preparser = argparse.ArgumentParser(add_help=False)
    preparser.add_argument("--config")
    return preparser


def build_options(args: argparse.Namespace) -> tuple[FswikiFormatOptions, FswikiParserOptions]:
    """Build formatter and parser options from parsed arguments.

    Raises
    ------
    ValidationError
        If a value is rejected by the options classes

    """
    values = {key: value for key, value in vars(args).items() if value is not None}
    if isinstance(values.get("fallback_encodings"), list):
        values["fallback_encodings"] = tuple(values["fallback_encodings"])
    return FswikiFormatOptions.from_mapping(values), FswikiParserOptions.from_mapping(values)


def _select_mode(args: argparse.Namespace) -> str:
    if args.write:
        return MODE_WRITE
    if args.check:
        return MODE_CHECK
    if args.diff:
        return MODE_DIFF
    if args.dump_events:
        return MODE_DUMP
    return MODE_STDOUT


# =============================================================================
# Processing
# =============================================================================


def process_file(
    path: Optional[str],
    mode: str,
    options: FswikiFormatOptions,
    parser_options: FswikiParserOptions,
    stdin_data: Union[str, bytes, None] = None,
) -> FileResult:
    """Format one document.

    Runs in worker processes under ``--parallel``, so it takes and returns
    only picklable values and reports errors in the result instead of
    raising them.

    Parameters
    ----------
    path : str or None
        File to format, or None to format ``stdin_data``
    mode : str
        One of the ``MODE_*`` constants
    options : FswikiFormatOptions
        Formatter options
    parser_options : FswikiParserOptions
        Input decoding options
    stdin_data : str or bytes, optional
        Standard input content, used when ``path`` is None

    Returns
    -------
    FileResult
        Outcome of formatting the document

    """
    display_name = path if path is not None else STDIN_DISPLAY_NAME
    with document_context(display_name):
        try:
            source: Union[str, bytes, Path] = Path(path) if path is not None else (stdin_data or b"")
            original = load_document_text(source, parser_options)
            events = FswikiParser(parser_options).parse(original)
            formatted = FswikiRenderer(options).render_to_string(events)
            result = FileResult(path=display_name, original=original, output=formatted, changed=formatted != original)

            if mode == MODE_DUMP:
                result.output = events_to_json(events, indent=2) + "\n"
            elif mode == MODE_WRITE and result.changed and path is not None:
                write_content(formatted, Path(path), encoding=parser_options.encoding or "utf-8")
                result.written = True
            logger.debug(f"{len(events)} events, changed={result.changed}")
            return result
        except FswikiFmtError as e:
            logger.debug(f"Failed to format: {e!r}")
            return FileResult(path=display_name, error=str(e))


def iter_results(
    paths: Sequence[str],
    mode: str,
    options: FswikiFormatOptions,
    parser_options: FswikiParserOptions,
    parallel: int = 1,
) -> Iterator[FileResult]:
    """Format files, yielding results in input order.

    With ``parallel`` greater than one and more than one file, documents
    are formatted in a process pool.
    """
    if parallel > 1 and len(paths) > 1:
        logger.debug(f"Formatting {len(paths)} files with {parallel} workers")
        with ProcessPoolExecutor(max_workers=parallel) as executor:
            yield from executor.map(process_file, paths, repeat(mode), repeat(options), repeat(parser_options))
    else:
        for path in paths:
            yield process_file(path, mode, options, parser_options)


def report_results(results: Iterable[FileResult], total: int, mode: str, args: argparse.Namespace) -> int:
    """Print results and compute the exit code.

    Formatted text, diffs and event dumps go to stdout; status messages,
    errors and the summary go to stderr.

    Returns
    -------
    int
        Exit code (0 for success, 1 for errors or non-canonical files)

    """
    reporter_class = RichReporter if should_use_rich_output(args) else PlainReporter
    failed = 0
    not_canonical = 0

    with reporter_class(total) as reporter:
        for result in results:
            if not result.ok:
                failed += 1
                reporter.file_done(result)
                if not args.skip_errors:
                    break
                continue

            message = None
            if mode in (MODE_STDOUT, MODE_DUMP):
                sys.stdout.write(result.output)
            elif mode == MODE_DIFF:
                if result.changed:
                    sys.stdout.write(format_unified_diff(result.original, result.output, result.path))
            elif mode == MODE_CHECK:
                if result.changed:
                    not_canonical += 1
                    message = f"would reformat {result.path}"
            elif mode == MODE_WRITE and result.written:
                message = f"reformatted {result.path}"
            reporter.file_done(result, message)

    reporter.summary()

    if failed or not_canonical:
        return EXIT_FAILURE
    return EXIT_SUCCESS


def _read_stdin() -> Union[str, bytes]:
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    return stream.read()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the fswikifmt command.

    Parameters
    ----------
    argv : sequence of str, optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 on success, 1 when a file failed or is not canonical,
        2 for usage and configuration errors

    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = create_parser()

    pre_args, _ = _create_config_preparser().parse_known_args(argv)
    try:
        config = load_config_with_priority(pre_args.config, get_env_var_value("config"))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    apply_config_to_parser(parser, config)
    apply_env_vars_to_parser(parser)
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)

    try:
        options, parser_options = build_options(args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    paths = args.files or [STDIN_MARKER]
    mode = _select_mode(args)

    if STDIN_MARKER in paths:
        if len(paths) > 1:
            parser.error("'-' (standard input) cannot be combined with other files")
        if mode == MODE_WRITE:
            parser.error("--write needs file arguments; standard input cannot be rewritten")
        result = process_file(None, mode, options, parser_options, stdin_data=_read_stdin())
        return report_results([result], 1, mode, args)

    return report_results(iter_results(paths, mode, options, parser_options, args.parallel), len(paths), mode, args)
