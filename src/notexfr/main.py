#!/usr/bin/env python
"""Main entry point for the notexfr command line tool."""
import argparse
import logging
import sys
from pathlib import Path

from notexfr import __version__
from notexfr.config import config
from notexfr.exceptions import NotexfrError
from notexfr.observability import configure_logging
from notexfr.services.reconciler import BackfillParams, ConvertParams, Reconciler

logger = logging.getLogger(__name__)

_BACKFILL_COMMANDS = {
    "en-to-sn": ("backfill Evernote notebooks into StandardNotes notes", "backfill_notes"),
    "match-tags": ("match Evernote tags to StandardNotes tags", "match_tags"),
    "match-notes": ("match Evernote notes to StandardNotes notes", "match_notes"),
    "notebooks": ("approximate Evernote notebooks as StandardNotes tags", "reconcile_notebooks"),
}


def _add_evernote_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input-en-notebooks", help="path to Evernote notebooks data file")
    parser.add_argument("--input-en-notes", help="path to Evernote notes data file")
    parser.add_argument("--input-en-tags", help="path to Evernote tags data file")


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose", action="store_true", help="log output files as they are written"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="notexfr",
        description="Transfer notes, tags and notebooks from Evernote to StandardNotes",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=config.log_level,
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for a rotating log file",
        type=str,
        default=str(config.log_dir) if config.log_dir else None,
    )
    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.required = True

    backfill = commands.add_parser(
        "backfill", help="supplement missing data for existing resources"
    )
    backfill_commands = backfill.add_subparsers(dest="subcommand", metavar="subcommand")
    backfill_commands.required = True
    for name, (help_text, operation) in _BACKFILL_COMMANDS.items():
        sub = backfill_commands.add_parser(name, help=help_text, description=help_text)
        sub.add_argument("--input-sn", help="path to StandardNotes data file")
        _add_evernote_inputs(sub)
        sub.add_argument("--output-notebooks", help="write notebooks json to this file")
        sub.add_argument("--output-notes", help="write notes json to this file")
        sub.add_argument("--output-tags", help="write tags json to this file")
        _add_verbose(sub)
        sub.set_defaults(operation=operation, params=BackfillParams)

    convert = commands.add_parser("convert", help="convert data between formats")
    convert_commands = convert.add_subparsers(dest="subcommand", metavar="subcommand")
    convert_commands.required = True

    edam_to_sn = convert_commands.add_parser(
        "edam-to-sn", help="convert saved Evernote API data to StandardNotes"
    )
    _add_evernote_inputs(edam_to_sn)
    edam_to_sn.add_argument("--output", help="write StandardNotes json to this file")
    _add_verbose(edam_to_sn)
    edam_to_sn.set_defaults(operation="convert_edam_to_sn", params=ConvertParams)

    enex_to_sn = convert_commands.add_parser(
        "enex-to-sn", help="convert an Evernote export file to StandardNotes"
    )
    enex_to_sn.add_argument("--input", help="path to an enex file")
    enex_to_sn.add_argument("--output", help="write StandardNotes json to this file")
    _add_verbose(enex_to_sn)
    enex_to_sn.set_defaults(operation="convert_enex_to_sn", params=ConvertParams)

    enex = commands.add_parser("enex", help="work with Evernote export files")
    enex_commands = enex.add_subparsers(dest="subcommand", metavar="subcommand")
    enex_commands.required = True
    to_json = enex_commands.add_parser("to-json", help="convert an enex file to JSON")
    to_json.add_argument("--input", help="path to an enex file")
    to_json.add_argument("--output", help="write notes json to this file")
    _add_verbose(to_json)
    to_json.set_defaults(operation="enex_to_json", params=ConvertParams)

    commands.add_parser("version", help="show version info")
    return parser


def _params_from_args(args: argparse.Namespace):
    model = args.params
    values = {
        name: getattr(args, name)
        for name in model.model_fields
        if getattr(args, name, None) is not None
    }
    return model(**values)


def main(argv=None):
    """Run the notexfr command line tool."""
    args = build_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.WARNING)
    try:
        log_file = configure_logging(level=log_level, log_dir=args.log_dir)
    except OSError as e:
        # Fall back to console logging if the log directory is unusable
        configure_logging(level=log_level)
        logger.warning(f"Failed to configure file logging: {e}")
        log_file = None
    if log_file:
        logger.info(f"Logging to {Path(log_file)}")

    if args.command == "version":
        print(f"notexfr {__version__}")
        return

    reconciler = Reconciler()
    try:
        getattr(reconciler, args.operation)(_params_from_args(args))
    except NotexfrError as e:
        logger.debug(f"{args.command} {args.subcommand} failed: {e.to_dict()}")
        print(f"notexfr: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
