"""
ReportGuard feedback command.

Record a false positive or false negative for later tuning.

Usage:
    reportguard feedback false_positive "Mark Rivers" --type NAME
    reportguard feedback false_negative "AB-1234" --type REFERENCE_CODE \\
        --context "see ticket AB-1234" --store ./feedback.jsonl
"""

from reportguard.cli.output import error, success
from reportguard.core.exceptions import ValidationError
from reportguard.feedback import FeedbackKind, JsonlFeedbackRecorder, record_feedback

DEFAULT_FEEDBACK_STORE = "~/.reportguard/feedback.jsonl"


def cmd_feedback(args) -> int:
    """Record detection feedback."""
    recorder = JsonlFeedbackRecorder(args.store)

    try:
        stored = record_feedback(
            args.kind,
            args.text,
            args.type,
            context=args.context,
            organization_id=args.org,
            recorder=recorder,
        )
    except ValidationError as e:
        error(str(e))
        return 2

    if not stored:
        error(f"Feedback could not be written to {recorder.path}")
        return 1

    success(f"Recorded {args.kind} for {args.type}")
    return 0


def add_feedback_parser(subparsers):
    """Add the feedback subparser."""
    parser = subparsers.add_parser(
        "feedback",
        help="Report a false positive or false negative",
    )
    parser.add_argument(
        "kind",
        choices=[k.value for k in FeedbackKind],
        help="Kind of feedback",
    )
    parser.add_argument("text", help="The text that was (or should have been) detected")
    parser.add_argument(
        "--type", "-t",
        required=True,
        help="Detection type, e.g. NAME or EMAIL",
    )
    parser.add_argument(
        "--context",
        help="Surrounding text",
    )
    parser.add_argument(
        "--org",
        help="Organization identifier",
    )
    parser.add_argument(
        "--store",
        default=DEFAULT_FEEDBACK_STORE,
        metavar="FILE",
        help=f"JSONL feedback file (default: {DEFAULT_FEEDBACK_STORE})",
    )
    parser.set_defaults(func=cmd_feedback)
    return parser
