from __future__ import annotations

import pytest

from fruit_catcher.engine.state import Lane
from fruit_catcher.input import QUIT, RESTART, LaneKeyMapper, ScriptedLaneSource, parse_lane_signal


@pytest.mark.parametrize(
    "signal, lane",
    [
        ("left", Lane.LEFT),
        ("Left_Tilt_Strong", Lane.LEFT),
        ("HEAD RIGHT", Lane.RIGHT),
        ("center", Lane.CENTER),
        ("Centered", Lane.CENTER),
    ],
)
def test_parse_lane_signal(signal, lane):
    assert parse_lane_signal(signal) == lane


@pytest.mark.parametrize("signal", ["jump", "", "   ", None, 3, "centre"])
def test_unrecognised_signals_are_none(signal):
    assert parse_lane_signal(signal) is None


def test_left_takes_precedence_over_other_keywords():
    assert parse_lane_signal("left-of-center") == Lane.LEFT
    assert parse_lane_signal("right-of-center") == Lane.RIGHT


def test_default_key_bindings():
    mapper = LaneKeyMapper.default()
    assert mapper.translate("left") == "left"
    assert mapper.translate("A") == "left"
    assert mapper.translate("RIGHT") == "right"
    assert mapper.translate("d") == "right"
    assert mapper.translate("DOWN") == "center"
    assert mapper.translate("r") == RESTART
    assert mapper.translate("ESCAPE") == QUIT
    assert mapper.translate("Q") is None
    assert mapper.translate(None) is None


def test_rebinding_keys():
    mapper = LaneKeyMapper.default()
    mapper.unbind("A")
    mapper.bind("J", "left")
    mapper.bind("", "right")
    assert mapper.translate("A") is None
    assert mapper.translate("j") == "left"
    assert parse_lane_signal(mapper.translate("J")) == Lane.LEFT


class _AliasedKeys:
    """Key constants where motion aliases share codes with the arrows, as in arcade.key."""

    LEFT = 65361
    UP = 65362
    RIGHT = 65363
    DOWN = 65364
    MOTION_LEFT = 65361
    MOTION_DOWN = 65364
    A = 97
    D = 100
    S = 115
    W = 119
    R = 114
    ENTER = 65293
    RETURN = 65293
    ESCAPE = 65307


def test_key_codes_resolve_arrows_despite_aliases():
    mapper = LaneKeyMapper.default()
    codes = mapper.key_codes(_AliasedKeys)
    assert mapper.translate(codes.get(_AliasedKeys.LEFT)) == "left"
    assert mapper.translate(codes.get(_AliasedKeys.DOWN)) == "center"
    assert mapper.translate(codes.get(_AliasedKeys.UP)) == "center"
    assert mapper.translate(codes.get(_AliasedKeys.RIGHT)) == "right"
    assert [mapper.translate(codes.get(getattr(_AliasedKeys, k))) for k in "ADWS"] == ["left", "right", "center", "center"]
    assert mapper.translate(codes.get(_AliasedKeys.ENTER)) == RESTART
    assert mapper.translate(codes.get(_AliasedKeys.ESCAPE)) == QUIT
    # ESC has no constant of its own and is skipped
    assert "ESC" not in codes.values()


def test_key_codes_with_arcade_constants():
    key = pytest.importorskip("arcade.key")
    mapper = LaneKeyMapper.default()
    codes = mapper.key_codes(key)
    signals = {name: mapper.translate(codes.get(getattr(key, name))) for name in ("LEFT", "RIGHT", "UP", "DOWN")}
    assert signals == {"LEFT": "left", "RIGHT": "right", "UP": "center", "DOWN": "center"}


def test_scripted_source_cycles_on_schedule():
    source = ScriptedLaneSource(["left", "right"], every=2)
    polled = [source.poll() for _ in range(6)]
    assert polled == ["left", None, "right", None, "left", None]


def test_scripted_source_from_csv_skips_blanks():
    source = ScriptedLaneSource.from_csv("left, ,center", every=1)
    assert [source.poll() for _ in range(3)] == ["left", "center", "left"]


def test_empty_script_yields_nothing():
    source = ScriptedLaneSource([], every=1)
    assert source.poll() is None
