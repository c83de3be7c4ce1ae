"""Tests for keyboard layout geometry."""

import pytest

from pianotiles.catalog import NoteCatalog
from pianotiles.layout import build_layouts, next_natural, tile_height

SCALE = 10.0


def _layouts():
    return build_layouts(NoteCatalog(), SCALE)


def test_next_natural():
    assert next_natural("C4") == "D4"
    assert next_natural("B4") == "C5"


def test_every_key_is_placed():
    assert len(_layouts()) == len(NoteCatalog())


def test_keyboard_is_centred_and_scaled():
    layouts = _layouts()
    left = min(k.center_x - k.width / 2 for k in layouts)
    right = max(k.center_x + k.width / 2 for k in layouts)
    bottom = min(k.center_y - k.height / 2 for k in layouts)
    assert right - left == pytest.approx(1.8 * SCALE)
    assert left + right == pytest.approx(0.0, abs=1e-9)
    assert bottom == pytest.approx(-0.9 * SCALE)


def test_black_key_sits_between_its_naturals():
    by_note = {k.definition.note_name: k for k in _layouts()}
    c, d, c_sharp = by_note["C4"], by_note["D4"], by_note["C#4"]
    assert c_sharp.center_x == pytest.approx((c.center_x + d.center_x) / 2)
    assert c_sharp.width < c.width


def test_tile_height_is_twice_a_white_key_width():
    layouts = _layouts()
    white = next(k for k in layouts if not k.definition.is_accidental)
    assert tile_height(layouts, fallback=1.0) == pytest.approx(white.width * 2)
    assert tile_height([], fallback=1.0) == 1.0
