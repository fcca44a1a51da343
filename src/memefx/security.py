"""Validation gates and PII scrubbing for memefx."""

import json
import os
import re
from pathlib import Path

# Input image cap (encoded size)
MAX_INPUT_BYTES = 50 * 1024 * 1024  # 50 MB

# Output canvas cap, per side
MAX_CANVAS_SIDE = 4096

# Frame count cap for a single GIF
MAX_FRAME_COUNT = 1000

_ASSET_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_source_size(source) -> list[str]:
    """Validate the encoded size of an image source. Returns list of errors.

    Paths that do not exist are left for the decoder to report.
    """
    errors: list[str] = []
    if isinstance(source, (bytes, bytearray, memoryview)):
        size = len(source)
    else:
        p = Path(source)
        if not p.is_file():
            return errors
        size = p.stat().st_size

    if size > MAX_INPUT_BYTES:
        size_mb = size / (1024 * 1024)
        errors.append(
            f"Image too large: {size_mb:.1f} MB (max {MAX_INPUT_BYTES // (1024 * 1024)} MB)"
        )
    return errors


def validate_canvas_size(width, height) -> list[str]:
    """Validate output canvas dimensions. Returns list of errors (empty = valid)."""
    errors: list[str] = []
    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"Canvas {label} must be an integer, got {type(value).__name__}")
        elif value <= 0:
            errors.append(f"Canvas {label} must be positive, got {value}")
        elif value > MAX_CANVAS_SIDE:
            errors.append(
                f"Canvas {label} {value} exceeds maximum {MAX_CANVAS_SIDE}"
            )
    return errors


def validate_frame_count(count: int) -> list[str]:
    """Validate frame count against MAX_FRAME_COUNT. Returns list of errors."""
    errors: list[str] = []
    if count > MAX_FRAME_COUNT:
        errors.append(f"Frame count {count} exceeds maximum {MAX_FRAME_COUNT}")
    return errors


def validate_asset_name(name: str) -> list[str]:
    """Validate a bundled asset name. Returns list of errors.

    Names are bare identifiers; anything that could walk out of the asset
    directory is rejected.
    """
    errors: list[str] = []
    if not isinstance(name, str) or not name:
        errors.append("Asset name must be a non-empty string")
        return errors
    if not _ASSET_NAME_PATTERN.match(name):
        errors.append(f"Unsafe asset name: {name!r}")
    return errors


# --- PII stripping for Sentry ---

_HOME = os.path.expanduser("~")
_USERNAME = os.path.basename(_HOME)
_PATH_PATTERN = re.compile(r"/Users/[^/\s]+|/home/[^/\s]+|C:\\Users\\[^\\\s]+")
_SENSITIVE_KEYS = {"token", "auth", "key", "secret", "password", "dsn"}


def _scrub_dict(d: dict):
    """Redact values for keys that look sensitive."""
    for key in list(d.keys()):
        if any(s in key.lower() for s in _SENSITIVE_KEYS):
            d[key] = "<REDACTED>"


def strip_pii(event: dict, hint: dict) -> dict:
    """Sentry before_send hook. Strips home paths and secrets."""
    event_str = json.dumps(event)
    if len(_HOME) > 1:
        event_str = event_str.replace(_HOME, "<HOME>")
    if len(_USERNAME) > 2:
        event_str = event_str.replace(_USERNAME, "<USER>")
    event_str = _PATH_PATTERN.sub("<REDACTED_PATH>", event_str)
    event = json.loads(event_str)

    _scrub_dict(event.get("extra", {}))
    for ctx in event.get("contexts", {}).values():
        if isinstance(ctx, dict):
            _scrub_dict(ctx)
    return event
