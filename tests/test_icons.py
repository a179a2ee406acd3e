"""Tests for icon selection and class overrides."""

from __future__ import annotations

from remote_layout.icons import IconResolver, clean_action_name, select_icon_for_action


def test_exact_match_scores_highest() -> None:
    """Exact keyword matches should return the mapped icon at 0.9."""

    icon = select_icon_for_action("Volume_Up")

    assert icon.library == "heroicons"
    assert icon.name == "SpeakerWaveIcon"
    assert icon.variant == "outline"
    assert icon.confidence == 0.9


def test_partial_match_prefers_longest_contained_key() -> None:
    """A name containing several keys should use the longest one."""

    icon = select_icon_for_action("input_hdmi1")

    assert icon.fallback == "input"
    assert icon.confidence == 0.6


def test_unknown_action_uses_fallback_icon() -> None:
    icon = select_icon_for_action("xyzzy")

    assert icon.library == "fallback"
    assert icon.name == "CommandLineIcon"
    assert icon.confidence == 0.3


def test_empty_action_name_uses_fallback_icon() -> None:
    assert select_icon_for_action("").library == "fallback"


def test_material_library_returns_material_names() -> None:
    icon = select_icon_for_action("mute", library="material")

    assert icon.library == "material"
    assert icon.name == "VolumeOff"


def test_clean_action_name_strips_separators() -> None:
    assert clean_action_name("Fast-Forward Now") == "fastforwardnow"


def test_override_replaces_low_confidence_icon() -> None:
    """Class overrides apply only when the generic icon scores below 0.7."""

    resolver = IconResolver({"bass": "GraphicEq", "volume": "VolumeUp"})

    overridden = resolver.resolve("bass_boost")
    kept = resolver.resolve("volume")

    assert overridden.library == "material"
    assert overridden.name == "GraphicEq"
    assert overridden.confidence == 0.9
    assert kept.library == "heroicons"


def test_short_override_keywords_match_whole_tokens_only() -> None:
    """A two-letter keyword must not match inside a longer word."""

    resolver = IconResolver({"ff": "FastForward"}, library="material", force_overrides=True)

    assert resolver.resolve("ff").name == "FastForward"
    assert resolver.resolve("power_off").name != "FastForward"


def test_forced_overrides_apply_above_threshold() -> None:
    resolver = IconResolver({"eject": "Eject"}, library="material", force_overrides=True)

    icon = resolver.resolve("eject")

    assert icon.name == "Eject"
    assert icon.confidence == 0.9
