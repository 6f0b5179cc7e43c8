import random

import pytest

from floorgraph.geometry import Position, Size, contain_size, to_display_space, to_image_space


def test_identity_mapping_when_rendered_at_natural_size():
    pos = to_image_space((100, 100), Size(800, 600), Size(800, 600), Size(800, 600))
    assert pos == Position(100, 100)


def test_scaled_and_letterboxed_horizontally():
    # 800x600 image contained in 1000x600 -> rendered 800x600, 100px bars left/right
    natural, rendered, container = Size(800, 600), Size(800, 600), Size(1000, 600)
    assert to_image_space((100, 0), natural, rendered, container) == Position(0, 0)
    assert to_image_space((500, 300), natural, rendered, container) == Position(400, 300)


def test_downscaled_image():
    # 1600x1200 shown at 800x600
    pos = to_image_space((200, 150), Size(1600, 1200), Size(800, 600), Size(800, 600))
    assert pos == Position(400, 300)


def test_rounds_to_nearest_pixel():
    # scale 3: 10.5 * 3 = 31.5 -> 32
    pos = to_image_space((10.5, 10.1), Size(300, 300), Size(100, 100), Size(100, 100))
    assert pos == Position(32, 30)


@pytest.mark.parametrize("point", [(50, 300), (950, 300), (150, -1), (150, 601)])
def test_click_in_padding_is_rejected(point):
    assert to_image_space(point, Size(800, 600), Size(800, 600), Size(1000, 600)) is None


def test_edges_of_image_are_inside():
    natural = rendered = container = Size(800, 600)
    assert to_image_space((0, 0), natural, rendered, container) == Position(0, 0)
    assert to_image_space((800, 600), natural, rendered, container) == Position(800, 600)


@pytest.mark.parametrize("natural,rendered,container", [
    (None, Size(10, 10), Size(10, 10)),
    (Size(10, 10), None, Size(10, 10)),
    (Size(10, 10), Size(0, 10), Size(10, 10)),
    (Size(10, 10), Size(10, 10), Size(10, -5)),
])
def test_missing_geometry_refuses(natural, rendered, container):
    assert to_image_space((1, 1), natural, rendered, container) is None
    assert to_display_space((1, 1), natural, rendered, container) is None


def test_display_space_applies_scale_and_offset():
    x, y = to_display_space((400, 300), Size(1600, 1200), Size(800, 600), Size(800, 700))
    assert (x, y) == (200.0, 200.0)


@pytest.mark.parametrize("natural,container", [
    (Size(800, 600), Size(1280, 800)),
    (Size(600, 1000), Size(1280, 800)),
    (Size(4000, 3000), Size(1280, 800)),
    (Size(123, 457), Size(640, 480)),
])
def test_round_trip_within_one_pixel(natural, container):
    rendered = contain_size(natural, container)
    for px in (0, 1, natural.width // 3, natural.width - 1, natural.width):
        for py in (0, natural.height // 2, natural.height):
            d = to_display_space((px, py), natural, rendered, container)
            back = to_image_space(d, natural, rendered, container)
            assert back is not None
            assert abs(back.x - px) <= 1 and abs(back.y - py) <= 1


def test_mapping_is_stable_across_calls():
    args = (Size(1000, 500), Size(640, 320), Size(640, 480))
    assert to_image_space((321, 240), *args) == to_image_space((321, 240), *args)


def test_contain_size_fits_and_keeps_aspect():
    assert contain_size(Size(800, 600), Size(1280, 800)) == Size(1067, 800)
    assert contain_size(Size(2000, 500), Size(1000, 1000)) == Size(1000, 250)
    assert contain_size(None, Size(10, 10)) is None


def test_round_trip_with_fractional_rects():
    rng = random.Random(7)
    cases = [(Size(3156, 3446), Size(176.92031854347732, 193.17725529176897),
              Size(250.3, 193.17725529176897))]
    for _ in range(500):
        natural = Size(rng.randint(1, 5000), rng.randint(1, 5000))
        container = Size(rng.uniform(50, 2000), rng.uniform(50, 2000))
        s = min(container.width / natural.width, container.height / natural.height)
        cases.append((natural, Size(natural.width * s, natural.height * s), container))

    for natural, rendered, container in cases:
        for px in (0, natural.width):
            for py in (0, natural.height):
                d = to_display_space((px, py), natural, rendered, container)
                back = to_image_space(d, natural, rendered, container)
                assert back is not None, (natural, rendered, container, (px, py))
                assert abs(back.x - px) <= 1 and abs(back.y - py) <= 1


def test_edge_tolerance_still_rejects_padding_clicks():
    natural, rendered, container = Size(800, 600), Size(800.5, 600.25), Size(1000.5, 600.25)
    # 0.3 px left of the image's left edge
    assert to_image_space((99.7, 300), natural, rendered, container) is None
    assert to_image_space((100.3, 300), natural, rendered, container) == Position(0, 300)
