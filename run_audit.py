#!/usr/bin/env python3
"""
Command-line script to audit static HTML files.

Parses each file, runs the SEO, Accessibility, Structure and Performance
checks, and prints a grouped report.

Usage:
    python run_audit.py index.html
    python run_audit.py site/*.html --format json -o report.json
    cat page.html | python run_audit.py - --progress
    python run_audit.py index.html --fail-on warning
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Load .env file automatically
from dotenv import load_dotenv
load_dotenv()

from static_optimizer.main import StaticOptimizer, log_level_from_env
from static_optimizer.report import render_text
from static_optimizer.schemas import Severity, SEVERITY_RANK, StepStatus
from static_optimizer.exceptions import ConfigError, ParseError
from static_optimizer.logger import setup_logger

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2


def print_progress(label: str, status: StepStatus):
    marker = "✓" if status == StepStatus.COMPLETED else "…"
    print(f"  {marker} {label}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit static HTML for SEO, accessibility, structure and performance issues"
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="HTML files to audit ('-' reads stdin)"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write the report to this file instead of stdout"
    )
    parser.add_argument(
        "--parser",
        choices=["html5lib", "lxml", "html.parser"],
        help="Use only this HTML parser (default: html5lib, falling back to lxml, then html.parser)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to pause before each audit step"
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Print the audit timeline to stderr"
    )
    parser.add_argument(
        "--fail-on",
        choices=[s.value for s in Severity],
        help="Exit with status 1 if any issue at or above this severity is found"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        log_level = logging.DEBUG if args.verbose else log_level_from_env()
        setup_logger(level=log_level)
        optimizer = StaticOptimizer(
            parser=args.parser,
            step_delay=args.delay,
            progress=print_progress if args.progress else None
        )
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    threshold = SEVERITY_RANK[Severity(args.fail_on)] if args.fail_on else None
    exit_code = EXIT_OK
    results = []
    text_blocks = []

    for name in args.files:
        print(f"Auditing: {name}", file=sys.stderr)

        try:
            if name == "-":
                report = optimizer.audit(sys.stdin.buffer.read(), source_name="<stdin>")
            else:
                report = optimizer.audit_file(name)
        except ParseError as e:
            message, record = e.message, e.to_response()
        except OSError as e:
            # Unreadable file: reported the same way as unparseable markup
            message, record = str(e), {"error": type(e).__name__, "message": str(e)}
        else:
            record = None

        if record is not None:
            results.append({"file": name, "status": "error", **record})
            text_blocks.append(f"== {name} ==\nError: {message}")
            print(f"  ✗ Error: {message}", file=sys.stderr)
            exit_code = EXIT_ERROR
            continue

        results.append({
            "file": name,
            "status": "success",
            "report": report.model_dump(mode="json")
        })
        text_blocks.append(render_text(report))
        print(f"  ✓ {len(report.issues)} issue(s)", file=sys.stderr)

        highest = report.highest_severity()
        if (threshold is not None and highest is not None
                and SEVERITY_RANK[highest] <= threshold and exit_code == EXIT_OK):
            exit_code = EXIT_ISSUES

    if args.format == "json":
        output = json.dumps(results, indent=2)
    else:
        output = "\n\n".join(text_blocks)

    if args.output:
        Path(args.output).write_text(output + "\n")
        print(f"\nReport saved to: {args.output}", file=sys.stderr)
    else:
        print(output)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
