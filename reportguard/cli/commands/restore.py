"""
ReportGuard restore command.

Put original values back into redacted text using a saved detection map.

Usage:
    reportguard detect - --map-out map.json < report.txt > redacted.txt
    reportguard restore --map map.json < redacted.txt
"""

import json
from pathlib import Path
from typing import List

from reportguard.cli.commands.detect import read_text_arg
from reportguard.cli.output import echo, error
from reportguard.detection import Detection, restore
from reportguard.logging_config import get_logger

logger = get_logger(__name__)


def load_map(path: Path) -> List[Detection]:
    """
    Load detections from a map file.

    Accepts ``detect --map-out`` files, ``detect --format json`` output,
    or a bare list of detection objects.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    entries = data.get("detections") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError(f"No detections list in map file: {path}")

    try:
        return [Detection.from_dict(entry) for entry in entries]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid detection in map file {path}: {e}") from e


def cmd_restore(args) -> int:
    """Restore redacted text."""
    map_path = Path(args.map)
    if not map_path.exists():
        error(f"Map file not found: {map_path}")
        return 1

    try:
        detections = load_map(map_path)
        text = read_text_arg(args.text)
    except ValueError as e:
        error(str(e))
        return 1

    logger.debug(f"restore: {len(detections)} detections")
    echo(restore(text, detections), nl=not text.endswith("\n"))
    return 0


def add_restore_parser(subparsers):
    """Add the restore subparser."""
    parser = subparsers.add_parser(
        "restore",
        help="Restore original values into redacted text",
    )
    parser.add_argument(
        "text",
        nargs="?",
        default="-",
        help="Redacted text (default: - for stdin)",
    )
    parser.add_argument(
        "--map", "-m",
        required=True,
        metavar="FILE",
        help="JSON detection map written by 'detect --map-out'",
    )
    parser.set_defaults(func=cmd_restore)
    return parser
