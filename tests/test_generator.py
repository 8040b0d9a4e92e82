import random
from dataclasses import replace

import pytest
from PIL import Image, ImageChops

from potatocat.meme import (
    FRAME_DELAY,
    TOTAL_FRAMES,
    AnimationConfig,
    CompositingMemeGenerator,
    FontLoadError,
    LayerCompositor,
    MemeGenerator,
    MemeValidationError,
    compute_frame_params,
)
from potatocat.meme.phrases import MEME_TEXTS, TICKER_MESSAGES

from .conftest import solid_image


def assert_animation_invariants(animation, config=AnimationConfig()):
    assert len(animation) == TOTAL_FRAMES
    for frame in animation.frames:
        assert frame.size == (config.canvas_width, config.canvas_height)
        assert frame.mode == "P"
    assert animation.delays == [FRAME_DELAY] * TOTAL_FRAMES
    assert animation.loop_count == 0


def test_generate_valid_inputs(generator, potato_image, cat_image):
    animation = generator.generate(potato_image, cat_image, "top text", "bottom text")
    assert_animation_invariants(animation)


def test_generate_missing_potato(generator, cat_image):
    with pytest.raises(MemeValidationError, match="potato image is required"):
        generator.generate(None, cat_image, "a", "b")


def test_generate_missing_cat(generator, potato_image):
    with pytest.raises(MemeValidationError, match="cat image is required"):
        generator.generate(potato_image, None, "a", "b")


def test_generate_random(generator, potato_image, cat_image):
    animation = generator.generate_random(potato_image, cat_image)
    assert_animation_invariants(animation)


def test_generate_random_validates(generator, potato_image, cat_image):
    with pytest.raises(MemeValidationError):
        generator.generate_random(None, cat_image)
    with pytest.raises(MemeValidationError):
        generator.generate_random(potato_image, None)


def test_generate_random_draws_from_phrase_list(monkeypatch, potato_image, cat_image):
    gen = CompositingMemeGenerator(rng=random.Random(7))
    calls = []
    monkeypatch.setattr(gen, "generate", lambda p, c, top, bottom: calls.append((top, bottom)))

    for _ in range(20):
        gen.generate_random(potato_image, cat_image)

    assert len(calls) == 20
    assert all(call in MEME_TEXTS for call in calls)


def test_implements_generator_interface(generator):
    assert isinstance(generator, MemeGenerator)
    with pytest.raises(TypeError):
        MemeGenerator()


def test_bad_font_path_fails_construction(tmp_path):
    with pytest.raises(FontLoadError):
        CompositingMemeGenerator(font_path=tmp_path / "nope.ttf")


def test_prepare_uppercases_and_places_potato(generator, potato_image, cat_image):
    scene = generator.compositor.prepare(potato_image, cat_image, "i can haz", "potato?", TICKER_MESSAGES[0])
    cfg = generator.config

    assert scene.top_text == "I CAN HAZ"
    assert scene.bottom_text == "POTATO?"
    assert scene.background.size == (cfg.canvas_width, cfg.canvas_height)
    assert scene.potato.size == (256, 256)
    assert scene.potato_x == cfg.canvas_width - 256 - 20
    assert scene.potato_y == cfg.canvas_height - 256 - 60


def test_wide_potato_keeps_aspect(generator, cat_image):
    scene = generator.compositor.prepare(solid_image(400, 200), cat_image, "a", "b", "news")
    assert scene.potato.size == (256, 128)


def test_compose_frame_is_reproducible(generator, potato_image, cat_image):
    scene = generator.compositor.prepare(potato_image, cat_image, "a", "b", TICKER_MESSAGES[0])
    params = compute_frame_params(3, TOTAL_FRAMES, 640, 480)

    first = generator.compositor.compose_frame(scene, params)
    second = generator.compositor.compose_frame(scene, params)

    assert first.size == (640, 480)
    assert first.tobytes() == second.tobytes()


def test_frames_vary_over_the_loop(generator, potato_image, cat_image):
    scene = generator.compositor.prepare(potato_image, cat_image, "a", "b", TICKER_MESSAGES[0])
    frames = [
        generator.compositor.compose_frame(scene, compute_frame_params(i, TOTAL_FRAMES, 640, 480))
        for i in (0, 4)
    ]
    assert frames[0].tobytes() != frames[1].tobytes()


def test_plain_config_without_optional_layers(potato_image, cat_image):
    config = AnimationConfig(zoom=False, hypno_wheel=False, glow=False, clones=False, bursts=False, ticker=False)
    gen = CompositingMemeGenerator(config=config)
    scene = gen.compositor.prepare(potato_image, cat_image, "a", "b", "")
    frame = gen.compositor.compose_frame(scene, compute_frame_params(0, TOTAL_FRAMES, 640, 480))
    assert frame.size == (640, 480)
    # without the overlays most of the frame is still plain cat grey
    counts = {color: count for count, color in frame.getcolors(maxcolors=640 * 480)}
    assert counts[(100, 100, 100, 255)] > 640 * 480 // 2


def test_long_text_is_accepted(generator, potato_image, cat_image):
    text = "potato " * 40
    scene = generator.compositor.prepare(potato_image, cat_image, text, text, "")
    frame = generator.compositor.compose_frame(scene, compute_frame_params(1, TOTAL_FRAMES, 640, 480))
    assert frame.size == (640, 480)


def test_very_wide_potato_still_generates(generator, cat_image):
    scene = generator.compositor.prepare(solid_image(600, 2), cat_image, "a", "b", "news")
    assert scene.potato.size == (256, 1)

    animation = generator.generate(solid_image(600, 2), cat_image, "a", "b")
    assert_animation_invariants(animation)


# -- Layer order ----------------------------------------------------------------

GREEN = (0, 255, 0, 255)
CAT_GREY = (100, 100, 100, 255)
TEXT_ONLY = AnimationConfig(zoom=False, hypno_wheel=False, glow=False, clones=False, bursts=False, ticker=False)


def still_params(**changes):
    """Frame 0 parameters with motion and sparkles removed and green text."""
    values = dict(
        text_color=GREEN[:3],
        font_scale=1.0,
        potato_bounce_y=0,
        potato_rotation=0.0,
        shake_dx=0,
        shake_dy=0,
        sparkles=(),
    )
    values.update(changes)
    return replace(compute_frame_params(0, TOTAL_FRAMES, 640, 480), **values)


def render(compositor, potato_image, cat_image, top="", bottom="", **changes):
    scene = compositor.prepare(potato_image, cat_image, top, bottom, "")
    return compositor.compose_frame(scene, still_params(**changes))


def green_pixels(frame, box):
    left, top, right, bottom = box
    return [
        (x, y)
        for y in range(top, bottom)
        for x in range(left, right)
        if frame.getpixel((x, y)) == GREEN
    ]


def test_ticker_banner_covers_bottom_caption(generator, potato_image, cat_image):
    config = replace(TEXT_ONLY, bottom_margin=465)
    plain = LayerCompositor(generator.fonts, config)
    with_ticker = LayerCompositor(generator.fonts, replace(config, ticker=True))

    below = render(plain, potato_image, cat_image, bottom="MMMM")
    above = render(with_ticker, potato_image, cat_image, bottom="MMMM")

    # rows under the 2px accent line hold only the translucent black bar
    caption = green_pixels(below, (0, 452, 640, 480))
    assert caption
    for x, y in caption:
        red, green, blue, alpha = above.getpixel((x, y))
        assert red == blue == 0
        assert 60 < green < 95
        assert alpha == 255

    grey = above.getpixel((5, 470))
    assert grey[0] == grey[1] == grey[2] and 25 < grey[0] < 35


def test_caption_is_drawn_over_potato(generator, potato_image, cat_image):
    compositor = LayerCompositor(generator.fonts, replace(TEXT_ONLY, top_margin=300))
    scene = compositor.prepare(potato_image, cat_image, "", "", "")
    potato_box = (
        scene.potato_x,
        scene.potato_y,
        scene.potato_x + scene.potato.width,
        scene.potato_y + scene.potato.height,
    )

    frame = render(compositor, potato_image, cat_image, top="WWWWWWWWWWWW")

    assert frame.getpixel((potato_box[2] - 5, potato_box[3] - 5)) == potato_image.getpixel((0, 0))
    assert green_pixels(frame, potato_box)


@pytest.mark.parametrize("font_scale", [0.85, 1.15])
def test_outline_width_ignores_font_scale(generator, potato_image, cat_image, font_scale):
    outlined = LayerCompositor(generator.fonts, TEXT_ONLY)
    bare = LayerCompositor(generator.fonts, replace(TEXT_ONLY, outline_shift=0))
    shift = TEXT_ONLY.outline_shift

    def caption_box(compositor):
        frame = render(compositor, potato_image, cat_image, top="HELLO", font_scale=font_scale)
        band = frame.crop((0, 0, 640, 120))
        return ImageChops.difference(band, Image.new("RGBA", band.size, CAT_GREY)).getbbox()

    left, top, right, bottom = caption_box(bare)
    assert caption_box(outlined) == (left - shift, top - shift, right + shift, bottom + shift)


def test_caption_grows_with_font_scale(generator, potato_image, cat_image):
    compositor = LayerCompositor(generator.fonts, TEXT_ONLY)
    widths = []
    for font_scale in (0.85, 1.15):
        frame = render(compositor, potato_image, cat_image, top="HELLO", font_scale=font_scale)
        band = frame.crop((0, 0, 640, 120))
        left, _, right, _ = ImageChops.difference(band, Image.new("RGBA", band.size, CAT_GREY)).getbbox()
        widths.append(right - left)
    assert widths[0] < widths[1]
