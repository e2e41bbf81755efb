import pytest

from pointexplorer.view import colors


def test_all_schemes_produce_rgb():
    for scheme in colors.available_schemes():
        r, g, b = colors.get_color(0.3, scheme.value)
        assert all(0 <= c <= 255 for c in (r, g, b))


def test_values_are_clamped():
    assert colors.get_color(-2.0) == colors.get_color(0.0)
    assert colors.get_color(7.0) == colors.get_color(1.0)


def test_unknown_scheme_falls_back_to_viridis():
    assert colors.get_color(0.4, "no-such-scheme") == colors.get_color(0.4, "viridis")


def test_viridis_end_points():
    # viridis runs from dark purple to yellow
    r0, g0, b0 = colors.get_color(0.0, "viridis")
    r1, g1, b1 = colors.get_color(1.0, "viridis")
    assert b0 > r0 and r1 > b1 and g1 > 200


def test_palette():
    palette = colors.generate_palette(5, "magma")
    assert len(palette) == 5
    assert palette[0] == colors.get_color(0.0, "magma")
    assert palette[-1] == colors.get_color(1.0, "magma")
    assert colors.generate_palette(0) == []
    assert colors.generate_palette(1) == [colors.get_color(0.0)]


def test_color_mapper():
    mapper = colors.create_color_mapper(10.0, 20.0, "turbo")
    assert mapper(15.0) == colors.get_color(0.5, "turbo")
    flat = colors.create_color_mapper(3.0, 3.0, "turbo")
    assert flat(100.0) == colors.get_color(0.5, "turbo")


def test_string_forms():
    assert colors.to_rgb_string((1, 2, 3)) == "rgb(1, 2, 3)"
    assert colors.to_rgba_string((1, 2, 3), 0.5) == "rgba(1, 2, 3, 0.5)"
    assert colors.parse_rgb_string("rgb(10, 20, 30)") == (10, 20, 30)
    with pytest.raises(ValueError):
        colors.parse_rgb_string("red")


def test_contrast():
    assert colors.contrast((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)
    assert colors.contrast((120, 30, 200), (120, 30, 200)) == pytest.approx(1.0)
    assert colors.luminance((255, 255, 255)) == pytest.approx(1.0)
