import numpy as np
import pytest
from colorutil.blend import (
    MAX_STEPS,
    blend_color,
    insert_color,
    opacity_mix,
    overlay_mix,
    soft_light_mix,
    step_color,
    tint_color,
    transition_color,
    transition_steps,
)
from colorutil.color import Brightness, Color
from colorutil.errors import InvalidArgument

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
SAMPLES = [BLACK, WHITE, Color(64, 200, 128), Color(1, 2, 3), Color(250, 17, 99)]


def channels_in_range(c):
    return all(0 <= v <= 255 for v in (c.r, c.g, c.b, c.a))


# --- blend_color ---------------------------------------------------------------


@pytest.mark.parametrize("alpha", [0, 37, 128, 255, 300, -40])
def test_blend_with_itself_is_noop(alpha):
    for c in SAMPLES:
        assert blend_color(c, c, alpha).rgb == c.rgb


def test_blend_endpoints():
    fore = Color(100, 200, 10)
    assert blend_color(BLACK, fore, 0) == BLACK
    assert blend_color(BLACK, fore, 255) == fore


def test_blend_truncates():
    assert blend_color(BLACK, Color(100, 200, 10), 128) == Color(50, 100, 5)


def test_blend_clamps_out_of_range_alpha():
    assert blend_color(BLACK, Color(200, 10, 0), 510) == Color(255, 20, 0)
    assert blend_color(Color(100, 100, 100), Color(200, 0, 100), -255) == Color(0, 200, 100)


def test_blend_two_color_form_uses_fore_alpha_as_ratio_only():
    back = Color(10, 20, 30)
    assert blend_color(back, Color(200, 200, 200, 0)) == back
    out = blend_color(back, Color(200, 200, 200, 255))
    assert out == Color(200, 200, 200)
    # fore alpha never reaches the output
    assert blend_color(back, Color(90, 90, 90, 51)).a == 255


# --- insert / opacity --------------------------------------------------------


def test_insert_is_floor_midpoint():
    assert insert_color(Color(10, 20, 31), Color(21, 40, 0)) == Color(15, 30, 15)


def test_insert_commutative_and_opaque():
    a = Color(10, 200, 33, 0)
    b = Color(99, 1, 250, 12)
    assert insert_color(a, b) == insert_color(b, a)
    assert insert_color(a, b).a == 255


def test_opacity_mix_endpoints():
    for base in SAMPLES:
        for blend in SAMPLES:
            assert opacity_mix(base, blend, 0) == base
            assert opacity_mix(base, blend, 100) == blend


def test_opacity_mix_midpoint_truncates():
    assert opacity_mix(BLACK, Color(255, 100, 11), 50) == Color(127, 50, 5)


def test_opacity_mix_out_of_range_is_clamped():
    assert opacity_mix(BLACK, Color(200, 100, 0), 200) == Color(255, 200, 0)
    assert opacity_mix(Color(100, 100, 100), BLACK, 150) == BLACK
    assert opacity_mix(Color(100, 100, 100), BLACK, -50) == Color(150, 150, 150)
    assert channels_in_range(opacity_mix(WHITE, BLACK, -300))


# --- overlay / soft light ----------------------------------------------------


def test_overlay_full_opacity():
    base = Color(64, 200, 128)
    blend = Color(128, 100, 10)
    assert overlay_mix(base, blend, 100) == Color(64, 188, 10)


def test_overlay_zero_opacity_is_base():
    base = Color(64, 200, 128)
    assert overlay_mix(base, Color(128, 100, 10), 0) == base


def test_overlay_branches_on_base():
    # 127 is below the midpoint, 128 is not
    assert overlay_mix(Color(127, 0, 0), Color(200, 0, 0), 100).r == 199
    assert overlay_mix(Color(128, 0, 0), BLACK, 100).r <= 1


def test_soft_light_zero_opacity_is_composite():
    base = Color(64, 200, 128)
    blend = Color(128, 100, 10)
    assert soft_light_mix(base, blend, 0) == Color(64, 190, 69)


def test_soft_light_full_opacity_returns_base():
    base = Color(64, 200, 128)
    assert soft_light_mix(base, Color(128, 100, 10), 100) == base


def test_soft_light_neutral_blend_below_midpoint():
    # a=0 branch reduces to b**2
    assert soft_light_mix(Color(51, 0, 255), BLACK, 0) == Color(10, 0, 255)


def test_compositing_stays_in_range():
    for base in SAMPLES:
        for blend in SAMPLES:
            for op in (0, 33, 100):
                assert channels_in_range(overlay_mix(base, blend, op))
                assert channels_in_range(soft_light_mix(base, blend, op))


# --- step ----------------------------------------------------------------------


def test_step_identity():
    for c in SAMPLES + [Color(5, 6, 7, 8)]:
        assert step_color(c, 100) is c


def test_step_darkens_and_keeps_alpha():
    c = Color(100, 50, 200, 77)
    assert step_color(c, 50) == Color(50, 25, 100, 77)
    assert step_color(c, 0) == Color(0, 0, 0, 77)


def test_step_above_hundred_scales_up():
    c = Color(100, 50, 200, 77)
    assert step_color(c, 150) == Color(150, 75, 255, 77)


def test_step_clamps_percent():
    c = Color(100, 50, 200, 77)
    assert step_color(c, -20) == step_color(c, 0)
    assert step_color(c, 400) == step_color(c, 200) == Color(200, 100, 255, 77)


# --- tint ----------------------------------------------------------------------


def test_tint_saturates():
    assert tint_color(Brightness.DARKER, Color(10, 10, 10), 50) == BLACK
    assert tint_color(Brightness.LIGHTER, Color(250, 250, 250), 10) == WHITE


def test_tint_per_channel():
    assert tint_color(Brightness.DARKER, Color(100, 50, 51), 50) == Color(50, 0, 1)
    assert tint_color(Brightness.LIGHTER, Color(200, 205, 0), 50) == Color(250, 255, 50)


def test_tint_resets_alpha():
    assert tint_color(Brightness.DARKER, Color(1, 2, 3, 0), 0) == Color(1, 2, 3, 255)
    assert tint_color(Brightness.LIGHTER, Color(1, 2, 3, 9), 0).a == 255


@pytest.mark.parametrize("direction", ["darker", None, 0])
def test_tint_rejects_unknown_direction(direction):
    with pytest.raises(InvalidArgument):
        tint_color(direction, Color(1, 2, 3), 10)


def test_tint_rejects_amount_out_of_range():
    with pytest.raises(InvalidArgument):
        tint_color(Brightness.LIGHTER, Color(1, 2, 3), 256)
    with pytest.raises(InvalidArgument):
        tint_color(Brightness.DARKER, Color(1, 2, 3), -1)


# --- transition ----------------------------------------------------------------


def test_transition_endpoints_exact():
    for begin in SAMPLES:
        for end in SAMPLES:
            assert transition_color(0, begin, end) == begin
            assert transition_color(100, begin, end) == end


def test_transition_quarter():
    end = Color(200, 100, 12)
    assert transition_color(25, BLACK, end) == Color(50, 25, 3)
    assert transition_color(25, end, BLACK) == Color(150, 75, 9)


def test_transition_out_of_range_falls_back_to_begin():
    begin = Color(0, 0, 0, 0)
    assert transition_color(150, begin, WHITE) is begin
    assert transition_color(-10, begin, WHITE) is begin
    assert transition_color(float("nan"), begin, WHITE) is begin
    assert transition_color(None, begin, WHITE) is begin


def test_transition_output_is_opaque():
    assert transition_color(0, Color(1, 2, 3, 0), WHITE) == Color(1, 2, 3)


def test_transition_steps():
    steps = transition_steps(BLACK, WHITE, 5)
    assert len(steps) == 5
    assert steps[0] == BLACK
    assert steps[-1] == WHITE
    reds = np.array([c.r for c in steps])
    assert np.all(np.diff(reds) > 0)


def test_transition_steps_clamps_count():
    assert len(transition_steps(BLACK, WHITE, 1)) == 2
    assert len(transition_steps(BLACK, WHITE, 10_000)) == MAX_STEPS


def test_transition_steps_custom_limit():
    assert len(transition_steps(BLACK, WHITE, 800, max_steps=1000)) == 800
    assert len(transition_steps(BLACK, WHITE, 50, max_steps=10)) == 10


@pytest.mark.parametrize("amount", ["5", 5.0, None, True])
def test_tint_rejects_non_int_amount(amount):
    with pytest.raises(InvalidArgument):
        tint_color(Brightness.DARKER, Color(1, 2, 3), amount)


def test_opacity_mix_uses_double_precision():
    # float64 keeps 100 * 0.7 at 70; single precision would truncate to 69
    assert opacity_mix(Color(100, 100, 100), BLACK, 30) == Color(70, 70, 70)
