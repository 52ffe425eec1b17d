"""
ReportGuard CLI - Command-line interface.

Usage:
    reportguard detect "text to scan"
    reportguard detect - --format json < report.txt
    reportguard restore --map map.json < redacted.txt
    reportguard feedback false_positive "Mark Rivers" --type NAME

    reportguard --version
"""

import argparse
import sys
from typing import List, Optional

from reportguard import __version__
from reportguard.cli.output import echo, error
from reportguard.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def cmd_version(args):
    """Show version information."""
    echo(f"reportguard {__version__}")
    echo("PII detection and reversible redaction")
    echo("")
    echo("Commands:")
    echo("  detect      Detect and redact PII in text")
    echo("  restore     Restore original values into redacted text")
    echo("  feedback    Record a false positive or false negative")
    echo("")
    echo("Run 'reportguard <command> --help' for details.")


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="reportguard",
        description="ReportGuard - PII detection and redaction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reportguard detect "Call me on 07911 123456"       # Redact text
  reportguard detect - -f json < report.txt          # JSON output from stdin
  reportguard detect - --map-out map.json < r.txt    # Save restore map
  reportguard restore --map map.json < redacted.txt  # Undo redaction
        """,
    )
    parser.add_argument(
        "--version", "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet mode (errors only)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file (JSON format)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit console logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    from reportguard.cli.commands import (
        add_detect_parser,
        add_feedback_parser,
        add_restore_parser,
    )

    add_detect_parser(subparsers)
    add_restore_parser(subparsers)
    add_feedback_parser(subparsers)

    args = parser.parse_args(argv)

    if args.version:
        cmd_version(args)
        return

    # Configure logging
    setup_logging(
        verbose=getattr(args, "verbose", False),
        quiet=getattr(args, "quiet", False),
        log_file=getattr(args, "log_file", None),
        json_format=getattr(args, "json_logs", False),
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # Execute command with error handling
    try:
        result = args.func(args)

        # Handle return code
        if isinstance(result, int):
            sys.exit(result)

    except KeyboardInterrupt:
        # User pressed Ctrl+C - exit quietly
        sys.exit(130)

    except PermissionError as e:
        error(f"Permission denied: {e.filename or e}")
        sys.exit(1)

    except FileNotFoundError as e:
        error(f"File not found: {e.filename or e}")
        sys.exit(1)

    except Exception as e:
        # Unexpected error - show message without stack trace for users
        # Stack trace is available with --verbose
        if getattr(args, "verbose", False):
            logger.exception("Unexpected error")
        error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
