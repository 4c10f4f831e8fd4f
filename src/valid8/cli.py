"""
VALID8 CLI: check arguments from a file, a bundled example, or a REPL.

Usage:
    valid8 FILE                 Check the argument in FILE
    valid8 --example NAME       Check a bundled example argument
    valid8 --list-examples      Show bundled examples
    valid8                      Interactive mode

In interactive mode lines accumulate until one contains THEREFORE; the
buffer is then checked and cleared. "exit" or "quit" leaves.

Every input gets its own fresh Environment.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional, TextIO

from valid8 import __version__
from valid8.analyzer import ArgumentReport, analyze_program
from valid8.backends import print_table
from valid8.config import Settings
from valid8.environment import Environment
from valid8.errors import Valid8Error
from valid8.examples import EXAMPLES, get_example
from valid8.log import setup_logging
from valid8.pipeline import evaluate_argument, parse_argument
from valid8.serialization import truth_table_to_json, truth_table_to_yaml

PROMPT = "valid8> "


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_verdict(valid: bool) -> str:
    return f"Validity: {'Valid' if valid else 'Invalid'}"


def format_report(report: ArgumentReport) -> str:
    """Format an analyzer report for display."""
    lines = [
        "Argument Inventory",
        "=" * 50,
        f"  Premises:     {report.premise_count}"
        f" ({report.fact_premises} facts, {report.implication_premises} implications)",
        f"  Conclusions:  {report.conclusion_count}",
        f"  Variables:    {', '.join(report.variables) or '-'}",
        f"  Table rows:   {report.truth_table_rows}",
        f"  Max depth:    {report.max_statement_depth}",
    ]
    if report.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            lines.append(f"  - {warning}")
    return "\n".join(lines)


# =============================================================================
# PROCESSING
# =============================================================================

def process_input(
    source: str,
    args: argparse.Namespace,
    settings: Settings,
    out: TextIO,
    err: TextIO,
) -> int:
    """Run one argument through the pipeline and print the outcome."""
    env = Environment()
    table_sink = None
    if args.format == "table" and not args.no_table:
        table_sink = lambda headers, rows: print_table(headers, rows, out)

    try:
        program = parse_argument(source)
        if args.analyze:
            report = analyze_program(program, max_variables=settings.max_variables)
            out.write(format_report(report) + "\n")
        result = evaluate_argument(program, env, settings=settings, table_sink=table_sink)
    except Valid8Error as e:
        err.write(f"Error: {e}\n")
        return 1

    if result.table is not None and not args.no_table:
        if args.format == "json":
            out.write(truth_table_to_json(result.table) + "\n")
        elif args.format == "yaml":
            out.write(truth_table_to_yaml(result.table))

    out.write(format_verdict(result.valid) + "\n")
    return 0


def run_repl(
    args: argparse.Namespace,
    settings: Settings,
    stdin: TextIO,
    out: TextIO,
    err: TextIO,
) -> int:
    """Interactive loop. Returns 0 on exit."""
    buffer = ""

    out.write(PROMPT)
    out.flush()
    for line in stdin:
        trimmed = line.strip()
        if trimmed in ("exit", "quit"):
            break

        buffer += line if line.endswith("\n") else line + "\n"

        if "THEREFORE" in buffer:
            source = buffer.strip()
            buffer = ""
            process_input(source, args, settings, out, err)

        out.write(PROMPT)
        out.flush()

    out.write("Goodbye!\n")
    return 0


def cmd_list_examples(out: TextIO) -> int:
    for name in sorted(EXAMPLES):
        example = EXAMPLES[name]
        verdict = "valid" if example.valid else "invalid"
        out.write(f"{name:<26} {verdict:<8} {example.description}\n")
    return 0


# =============================================================================
# ARGUMENT PARSER
# =============================================================================

def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but never negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="valid8",
        description="VALID8: check PREMISE/THEREFORE arguments with truth tables",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="File containing the argument (omit for interactive mode)",
    )
    parser.add_argument(
        "--example",
        metavar="NAME",
        help="Check a bundled example argument",
    )
    parser.add_argument(
        "--list-examples",
        action="store_true",
        help="List bundled example arguments",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json", "yaml"],
        default="table",
        help="Truth table output format (default: table)",
    )
    parser.add_argument(
        "--no-table",
        action="store_true",
        help="Only print the verdict",
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Print an inventory of the argument before checking it",
    )
    parser.add_argument(
        "--max-variables",
        type=non_negative_int,
        metavar="N",
        help="Largest number of distinct variables to enumerate",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging (same as VALID8_DEBUG=1)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(
    argv: Optional[list[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Main entry point for the CLI."""
    stdin = stdin or sys.stdin
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        err.write(f"Error: {e}\n")
        return 2
    if args.verbose:
        settings = replace(settings, debug=True)
    if args.max_variables is not None:
        settings = replace(settings, max_variables=args.max_variables)

    setup_logging(settings.debug, stream=err)

    if args.list_examples:
        return cmd_list_examples(out)

    if args.example:
        try:
            example = get_example(args.example)
        except KeyError as e:
            err.write(f"Error: {e.args[0]}\n")
            return 2
        return process_input(example.source, args, settings, out, err)

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            err.write(f"Error reading file: {e}\n")
            return 2
        return process_input(source, args, settings, out, err)

    return run_repl(args, settings, stdin, out, err)


if __name__ == "__main__":
    sys.exit(main())
