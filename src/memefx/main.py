"""memefx command line: apply one effect and write the result to a file."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

import sentry_sdk

from memefx import api
from memefx._version import __version__
from memefx.constants import DEFAULT_RGB_ARGS
from memefx.diagnostics import init_diagnostics
from memefx.errors import MemeFxError
from memefx.security import strip_pii

logger = logging.getLogger(__name__)

STATIC_EFFECTS = {
    "invert": api.invert,
    "greyscale": api.greyscale,
    "sepia": api.sepia,
}


def init_sentry():
    """Consent-gated Sentry init. No-op DSN unless ~/.memefx/telemetry_consent says yes."""
    consent_path = os.path.expanduser("~/.memefx/telemetry_consent")
    dsn = ""
    if os.path.exists(consent_path) and Path(consent_path).read_text().strip() == "yes":
        dsn = os.environ.get("SENTRY_DSN", "")

    sentry_sdk.init(
        dsn=dsn,
        release=f"memefx@{__version__}",
        environment=os.environ.get("SENTRY_ENV", "development"),
        before_send=strip_pii,
        max_breadcrumbs=50,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memefx", description="Image meme effects")
    parser.add_argument("--version", action="version", version=f"memefx {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in STATIC_EFFECTS:
        p = sub.add_parser(name, help=f"{name} a static image (writes PNG)")
        p.add_argument("input", help="Input image path")
        p.add_argument("output", help="Output PNG path")

    p = sub.add_parser("trigger", help="Triggered animation (writes GIF)")
    p.add_argument("input", help="Input image path")
    p.add_argument("output", help="Output GIF path")
    p.add_argument("--seed", type=int, default=None, help="Fix the jitter")

    p = sub.add_parser("rgb", help="Solid color animation (writes GIF)")
    p.add_argument("output", help="Output GIF path")
    p.add_argument(
        "--color",
        action="append",
        dest="colors",
        help="Frame color, repeatable (default: red, green, blue)",
    )
    p.add_argument("--width", type=int, default=DEFAULT_RGB_ARGS.width)
    p.add_argument("--height", type=int, default=DEFAULT_RGB_ARGS.height)
    p.add_argument("--delay", type=int, default=DEFAULT_RGB_ARGS.delay, help="ms")
    return parser


def run(args: argparse.Namespace) -> bytes:
    """Run the selected command and return the encoded bytes."""
    if args.command in STATIC_EFFECTS:
        return asyncio.run(STATIC_EFFECTS[args.command](args.input))
    if args.command == "trigger":
        return asyncio.run(api.trigger(args.input, seed=args.seed))
    rgb_args = {"width": args.width, "height": args.height, "delay": args.delay}
    if args.colors:
        rgb_args["colors"] = args.colors
    return api.rgb(rgb_args)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_diagnostics()
    init_sentry()

    try:
        data = run(args)
    except MemeFxError as e:
        sentry_sdk.capture_exception(e)
        logger.exception(f"{args.command} failed")
        print(f"ERROR: {e.name}: {e.message}", file=sys.stderr)
        return 1

    Path(args.output).write_bytes(data)
    logger.info("Wrote %d bytes to %s", len(data), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
