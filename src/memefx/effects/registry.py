"""Effect registry: central lookup for all registered effects."""

from typing import Callable

import numpy as np

EffectFn = Callable[[np.ndarray, dict], np.ndarray]

_REGISTRY: dict[str, dict] = {}


def register(effect_id: str, fn: EffectFn, params: dict, name: str, category: str):
    """Register an effect."""
    _REGISTRY[effect_id] = {
        "fn": fn,
        "params": params,
        "name": name,
        "category": category,
    }


def get(effect_id: str) -> dict | None:
    """Get effect info by ID."""
    return _REGISTRY.get(effect_id)


def list_all() -> list[dict]:
    """List all registered effects with metadata."""
    return [
        {
            "id": eid,
            "name": info["name"],
            "category": info["category"],
            "params": info["params"],
        }
        for eid, info in _REGISTRY.items()
    ]


def _auto_register():
    """Import and register all built-in effects."""
    from memefx.effects.fx import greyscale, invert, sepia

    for mod in [invert, greyscale, sepia]:
        register(
            mod.EFFECT_ID, mod.apply, mod.PARAMS, mod.EFFECT_NAME, mod.EFFECT_CATEGORY
        )


_auto_register()
