"""
ReportGuard detect command.

Detect and redact PII in a piece of text.

Usage:
    reportguard detect "Contact me at john.doe@example.com"
    echo "..." | reportguard detect - --format json
    reportguard detect - --map-out detections.json < report.txt
"""

import json
import sys
from pathlib import Path

from reportguard.cli.output import echo, error, table
from reportguard.detection import (
    DetectionConfig,
    DetectionResult,
    detect,
    format_type,
    summarize_stats,
)
from reportguard.detection.constants import MAX_TEXT_LENGTH
from reportguard.logging_config import get_logger

logger = get_logger(__name__)


def read_text_arg(value: str) -> str:
    """Return ``value``, or bounded stdin when it is "-"."""
    if value != "-":
        return value
    text = sys.stdin.read(MAX_TEXT_LENGTH + 1)
    if len(text) > MAX_TEXT_LENGTH:
        raise ValueError(
            f"stdin input exceeds maximum size ({MAX_TEXT_LENGTH // (1024 * 1024)}MB)"
        )
    return text


def build_config(args) -> DetectionConfig:
    """Environment config with command-line overrides applied."""
    config = DetectionConfig.from_env()
    overrides = {
        "backend": args.backend,
        "confidenceThreshold": args.confidence,
        "remoteUrl": args.remote_url,
    }
    if args.no_context_analysis:
        overrides["enableContextAnalysis"] = False

    settings = dict(vars(config))
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return DetectionConfig.from_dict(settings)


def format_result(result: DetectionResult, output_format: str = "text") -> str:
    """Format detection result for output."""
    if output_format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    if output_format == "jsonl":
        return json.dumps(result.to_dict(), ensure_ascii=False)

    return result.redacted_text


def write_map(result: DetectionResult, path: Path) -> None:
    """Save the detections needed to restore the redacted text."""
    data = {"detections": [d.to_dict() for d in result.detections]}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def _table_title(result: DetectionResult) -> str:
    summary = summarize_stats(result.stats)
    return f"{summary.total_detected} detection(s), mostly {format_type(summary.most_common_type)}"


def cmd_detect(args) -> int:
    """Detect PII in text."""
    try:
        text = read_text_arg(args.text)
    except ValueError as e:
        error(str(e))
        return 1

    config = build_config(args)
    result = detect(text, config)

    # SECURITY: Log only metadata
    logger.debug(f"detect: backend={result.backend} detections={result.pii_count}")

    if result.degraded:
        logger.warning("Remote detection unavailable; no detections were applied")

    output = format_result(result, args.format)
    echo(output, nl=not output.endswith("\n"))

    if args.format == "text" and result.has_pii and not args.quiet_table:
        table(
            headers=["Type", "Placeholder", "Span", "Severity"],
            rows=[
                (format_type(d.type), d.placeholder, f"{d.start}-{d.end}", d.severity.value)
                for d in result.detections
            ],
            title=_table_title(result),
        )

    if args.map_out:
        write_map(result, Path(args.map_out))

    if args.fail_on_pii and result.has_pii:
        return 1
    return 0


def add_detect_parser(subparsers):
    """Add the detect subparser."""
    parser = subparsers.add_parser(
        "detect",
        help="Detect and redact PII in text (use - for stdin)",
    )
    parser.add_argument("text", help="Text to scan (or - for stdin)")
    parser.add_argument(
        "--backend", "-b",
        choices=["local", "remote"],
        help="Detection backend (default: REPORTGUARD_BACKEND or local)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json", "jsonl"],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--confidence", "-c",
        type=float,
        help="Minimum confidence for remote detections (0-1)",
    )
    parser.add_argument(
        "--remote-url",
        help="Base URL of the remote detection service",
    )
    parser.add_argument(
        "--no-context-analysis",
        action="store_true",
        help="Ask the remote service not to use context analysis",
    )
    parser.add_argument(
        "--map-out",
        metavar="PATH",
        help="Write the detection map (needed by 'restore') to a JSON file",
    )
    parser.add_argument(
        "--no-table",
        dest="quiet_table",
        action="store_true",
        help="Only print the redacted text",
    )
    parser.add_argument(
        "--fail-on-pii",
        action="store_true",
        help="Exit with code 1 if PII detected",
    )
    parser.set_defaults(func=cmd_detect)
    return parser
