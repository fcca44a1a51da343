"""Tests for effect registry."""

from memefx.effects.registry import get, list_all


def test_registry_contains_builtin_effects():
    for effect_id, name in [
        ("fx.invert", "Invert"),
        ("fx.greyscale", "Greyscale"),
        ("fx.sepia", "Sepia"),
    ]:
        info = get(effect_id)
        assert info is not None
        assert info["name"] == name
        assert info["category"] == "color"
        assert callable(info["fn"])


def test_list_all_has_correct_shape():
    effects = list_all()
    assert len(effects) >= 3
    for effect in effects:
        assert "id" in effect
        assert "name" in effect
        assert "category" in effect
        assert "params" in effect


def test_get_nonexistent_returns_none():
    assert get("fx.nonexistent") is None
