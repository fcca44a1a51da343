"""Public operations: static pixel effects and animated GIF effects.

Every operation is stateless. Image decode runs off the event loop via
``asyncio.to_thread``; transforms, compositing and encode are synchronous.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import fields, replace

import numpy as np
import sentry_sdk

from memefx.constants import (
    DEFAULT_RGB_ARGS,
    TRIGGER_ASSET,
    TRIGGER_BAND_HEIGHT,
    TRIGGER_BAND_JITTER,
    TRIGGER_DELAY_MS,
    TRIGGER_FRAMES,
    TRIGGER_HEIGHT,
    TRIGGER_IMAGE_JITTER,
    TRIGGER_TINT,
    TRIGGER_WIDTH,
    RGBArgs,
)
from memefx.effects import registry
from memefx.engine import compositor
from memefx.engine.assets import load_asset
from memefx.engine.determinism import jitter, make_rng
from memefx.engine.gif import GifEncoder
from memefx.engine.imaging import check_source, decode_image, encode_png
from memefx.errors import InvalidInput

logger = logging.getLogger(__name__)


def _capture_with_context(e: Exception, effect_id: str, extra: dict):
    """Capture exception to Sentry with effect-level context and fingerprint dedup."""
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("effect_id", effect_id)
        scope.fingerprint = ["effect-crash", effect_id, type(e).__name__]
        scope.set_context("effect", extra)
        sentry_sdk.capture_exception(e, scope=scope)


def run_effect(effect_id: str, frame: np.ndarray, params: dict | None = None) -> np.ndarray:
    """Apply a registered effect to a decoded RGBA frame."""
    info = registry.get(effect_id)
    if info is None:
        raise InvalidInput(f"Unknown effect: {effect_id}")
    try:
        return info["fn"](frame, params or {})
    except Exception as e:
        _capture_with_context(
            e, effect_id, {"shape": list(frame.shape), "dtype": str(frame.dtype)}
        )
        logger.exception(f"Effect {effect_id} failed")
        raise


async def apply_effect(effect_id: str, image) -> bytes:
    """Decode ``image``, apply a registered effect, return PNG bytes."""
    check_source(image)
    if registry.get(effect_id) is None:
        raise InvalidInput(f"Unknown effect: {effect_id}")
    frame = await asyncio.to_thread(decode_image, image)
    output = run_effect(effect_id, frame)
    return encode_png(output)


async def invert(image) -> bytes:
    """Invert the colors of ``image`` (path or bytes). Alpha becomes opaque."""
    return await apply_effect("fx.invert", image)


async def greyscale(image) -> bytes:
    """Greyscale ``image`` (path or bytes)."""
    return await apply_effect("fx.greyscale", image)


async def sepia(image) -> bytes:
    """Sepia-wash ``image`` (path or bytes)."""
    return await apply_effect("fx.sepia", image)


def render_trigger(
    image: np.ndarray, band: np.ndarray, rng: np.random.Generator
) -> bytes:
    """Render the shaking "triggered" animation from decoded frames."""
    encoder = GifEncoder(TRIGGER_WIDTH, TRIGGER_HEIGHT)
    encoder.set_repeat(0)
    encoder.set_delay(TRIGGER_DELAY_MS)

    canvas = compositor.new_canvas(TRIGGER_WIDTH, TRIGGER_HEIGHT)
    image_box = (
        TRIGGER_WIDTH + TRIGGER_IMAGE_JITTER,
        TRIGGER_HEIGHT - TRIGGER_BAND_HEIGHT + TRIGGER_IMAGE_JITTER,
    )
    band_box = (
        TRIGGER_WIDTH + TRIGGER_BAND_JITTER,
        TRIGGER_BAND_HEIGHT + TRIGGER_BAND_JITTER,
    )

    for _ in range(TRIGGER_FRAMES):
        compositor.clear(canvas)
        compositor.draw_image(
            canvas,
            image,
            jitter(rng, TRIGGER_IMAGE_JITTER),
            jitter(rng, TRIGGER_IMAGE_JITTER),
            *image_box,
        )
        compositor.fill(canvas, TRIGGER_TINT)
        compositor.draw_image(
            canvas,
            band,
            jitter(rng, TRIGGER_BAND_JITTER),
            TRIGGER_HEIGHT - TRIGGER_BAND_HEIGHT + jitter(rng, TRIGGER_BAND_JITTER),
            *band_box,
        )
        encoder.add_frame(compositor.flatten(canvas))

    return encoder.finish()


async def trigger(image, *, seed: int | None = None) -> bytes:
    """Apply the "triggered" effect to ``image`` (path or bytes). Returns GIF bytes.

    Each call jitters differently unless ``seed`` is given.
    """
    check_source(image)
    band = await asyncio.to_thread(load_asset, TRIGGER_ASSET)
    frame = await asyncio.to_thread(decode_image, image)
    return render_trigger(frame, band, make_rng(seed))


def resolve_rgb_args(args=None) -> RGBArgs:
    """Build an RGBArgs from None, an RGBArgs, or a mapping of overrides.

    The mapping key ``color`` is accepted as an alias of ``colors``.
    """
    if args is None:
        return DEFAULT_RGB_ARGS
    if isinstance(args, RGBArgs):
        resolved = args
    elif isinstance(args, Mapping):
        overrides = dict(args)
        if "color" in overrides:
            color = overrides.pop("color")
            overrides.setdefault("colors", color)
        known = {f.name for f in fields(RGBArgs)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidInput(f"Unknown rgb arguments: {unknown}")
        colors = overrides.get("colors", DEFAULT_RGB_ARGS.colors)
        if isinstance(colors, str) or not isinstance(colors, (list, tuple)):
            raise InvalidInput(
                f"colors must be a list of color strings, got {type(colors).__name__}"
            )
        overrides["colors"] = tuple(colors)
        resolved = replace(DEFAULT_RGB_ARGS, **overrides)
    else:
        raise InvalidInput(f"Expected RGBArgs or mapping, received {type(args).__name__}")

    if not resolved.colors:
        raise InvalidInput("rgb needs at least one color")
    return resolved


def rgb(args=None) -> bytes:
    """Animated GIF with one solid-color frame per color, in order.

    Colors composite over the previous frame, so translucent colors blend.
    """
    resolved = resolve_rgb_args(args)
    encoder = GifEncoder(resolved.width, resolved.height)
    encoder.set_repeat(0)
    encoder.set_delay(resolved.delay)

    canvas = compositor.new_canvas(resolved.width, resolved.height)
    for color in resolved.colors:
        compositor.fill(canvas, color)
        encoder.add_frame(compositor.flatten(canvas))

    logger.info(
        "Rendered rgb GIF %dx%d with %d frames",
        resolved.width,
        resolved.height,
        len(resolved.colors),
    )
    return encoder.finish()
