"""Command-line entry point for inspecting and editing a video's preview options."""

import argparse
import logging
import sys
from pathlib import Path

from videopreview.core.errors import ConfigFileError, InvalidVideoError, ProcessingError
from videopreview.core.options import format_value
from videopreview.core.preferences import Preferences
from videopreview.core.preview import VideoPreview
from videopreview.core.session import PreviewSession
from videopreview.utils.validators import Clamped, Rejected, validate_video_path

logger = logging.getLogger("vpreview")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vpreview",
        description="Inspect, edit and export the preview options that apply to a video.",
    )
    parser.add_argument("video", type=Path, help="Path to the video file")
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print every recognised option with its current value",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="ID=VALUE",
        help="Change an option before printing or exporting (repeatable)",
    )
    parser.add_argument(
        "--grid",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        help="Show the grid the preview would use for a pane of this size (px)",
    )
    parser.add_argument(
        "--export",
        type=Path,
        help="Save all options to this configuration file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse arguments and show usage without opening the video",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def open_preview(video: Path) -> VideoPreview:
    """Load metadata, configuration files and the initial frames for ``video``."""

    validate_video_path(video)
    preview = VideoPreview(video)
    preview.load_video()
    preview.load_config()
    preview.update_preview()
    return preview


def parse_assignment(text: str) -> tuple[str, str]:
    option_id, sep, value = text.partition("=")
    if not sep or not option_id.strip():
        raise ValueError(f"expected ID=VALUE, got {text!r}")
    return option_id.strip(), value.strip()


def apply_assignments(session: PreviewSession, assignments: list[str]) -> bool:
    """Apply ``ID=VALUE`` edits; returns False if any was rejected."""

    ok = True
    for text in assignments:
        try:
            option_id, value = parse_assignment(text)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            ok = False
            continue
        outcome = session.set_text(option_id, value)
        if isinstance(outcome, Rejected):
            print(f"error: {option_id}: {outcome.reason}", file=sys.stderr)
            ok = False
        elif isinstance(outcome, Clamped):
            print(
                f"warning: {option_id}: {format_value(outcome.original)} adjusted to {format_value(outcome.value)}",
                file=sys.stderr,
            )
    return ok


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.dry_run:
        parser.print_help()
        return EXIT_OK

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        preview = open_preview(args.video)
    except InvalidVideoError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILED
    except ProcessingError as exc:
        logger.error("Could not read %s: %s", args.video, exc)
        return EXIT_FAILED

    session = PreviewSession(preview)
    if not apply_assignments(session, args.assignments):
        return EXIT_REJECTED

    if args.print_config:
        for label, value in preview.describe().items():
            print(f"{label}: {value}")
        print()
        for description, value in preview.option_summary():
            print(f"{description}: {value}")

    if args.grid:
        width, height = args.grid
        defaults = Preferences()
        grid = session.layout(width, height, defaults.space_between_rows, defaults.space_between_cols)
        print(
            f"Grid: {grid.rows} rows x {grid.cols} cols, "
            f"frame {grid.frame_width:.0f}x{grid.frame_height:.0f}px, "
            f"{len(session.frames)} frames"
        )

    if args.export:
        try:
            written = preview.save_all_options(args.export)
        except ConfigFileError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_FAILED
        print(f"Configuration saved to {written}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
