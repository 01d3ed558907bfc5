"""End-to-end tests for the render orchestrator."""

import numpy as np
import pytest

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import DitherAlgorithm, EdgeMethod
from ascii_transcoder.renderer import CharacterGrid, render, render_text

from conftest import make_pixels, make_vertical_step


class TestPlainMode:
    def test_uniform_mid_gray_two_levels(self):
        config = RenderConfig(ascii_width=2, custom_palette="AB", dithering_enabled=False)
        grid = render(make_pixels(2, 2, (128, 128, 128)), config)
        assert grid.lines == ("BB", "BB")

    def test_black_maps_to_first_glyph(self):
        config = RenderConfig(ascii_width=3, dithering_enabled=False)
        grid = render(make_pixels(3, 2, (0, 0, 0)), config)
        assert grid.lines == ("$$$", "$$$")

    def test_ignore_white(self):
        pixels = make_pixels(4, 2, (250, 250, 250))
        pixels[:, :2, :3] = 0
        # +20 brightness pushes the light half to exactly 255
        config = RenderConfig(ascii_width=4, brightness=20, charset="binary",
                              dithering_enabled=False)
        assert render(pixels, config).lines == ("00  ", "00  ")
        kept = config.replace(ignore_white=False)
        assert render(pixels, kept).lines == ("0011", "0011")

    def test_ignore_white_applies_to_dithering(self):
        pixels = make_pixels(5, 5, (255, 255, 255))
        config = RenderConfig(ascii_width=5, brightness=10, charset="binary")
        for algorithm in DitherAlgorithm:
            grid = render(pixels, config.replace(dither_algorithm=algorithm, seed=3))
            assert grid.lines == ("     ",) * 5

    def test_invert(self):
        pixels = make_pixels(2, 1, (0, 0, 0))
        config = RenderConfig(ascii_width=2, invert=True, charset="binary",
                              ignore_white=False, dithering_enabled=False)
        assert render(pixels, config).lines == ("11",)

    def test_dithered_output_uses_palette(self, random_pixels):
        config = RenderConfig(ascii_width=16, charset="standard", ignore_white=False)
        for algorithm in DitherAlgorithm:
            grid = render(random_pixels, config.replace(dither_algorithm=algorithm))
            assert set("".join(grid.lines)) <= set("@%#*+=-:.")

    def test_ordered_is_deterministic(self, random_pixels):
        config = RenderConfig(ascii_width=16, dither_algorithm="ordered")
        assert render(random_pixels, config) == render(random_pixels, config)

    def test_seeded_noise_is_reproducible(self, random_pixels):
        config = RenderConfig(ascii_width=16, dither_algorithm="noise", seed=99)
        assert render(random_pixels, config) == render(random_pixels, config)

    def test_input_not_mutated(self, random_pixels):
        before = random_pixels.copy()
        render(random_pixels, RenderConfig(ascii_width=16))
        np.testing.assert_array_equal(random_pixels, before)


class TestSobelMode:
    @pytest.mark.parametrize("threshold", [1, 100, 250])
    def test_uniform_buffer_has_no_edges(self, threshold):
        config = RenderConfig(ascii_width=5, edge_method="sobel", edge_threshold=threshold,
                              charset="binary")
        grid = render(make_pixels(5, 4, (128, 128, 128)), config)
        assert grid.lines == ("11111",) * 4

    def test_step_edge_is_dark(self):
        config = RenderConfig(ascii_width=6, edge_method="sobel", edge_threshold=100,
                              charset="binary", ignore_white=False)
        grid = render(make_vertical_step(6, 5, split=3), config)
        assert grid.lines == ("111111", "110011", "110011", "110011", "111111")

    def test_dithering_is_bypassed(self):
        pixels = make_vertical_step(6, 5, split=3)
        config = RenderConfig(ascii_width=6, edge_method="sobel", charset="binary",
                              ignore_white=False, dithering_enabled=False)
        for algorithm in DitherAlgorithm:
            dithered = config.replace(dithering_enabled=True, dither_algorithm=algorithm)
            assert render(pixels, dithered) == render(pixels, config)

    def test_ignore_white_uses_tone_before_edges(self):
        config = RenderConfig(ascii_width=4, edge_method="sobel", charset="binary",
                              brightness=10)
        grid = render(make_pixels(4, 3, (255, 255, 255)), config)
        assert grid.lines == ("    ",) * 3


class TestDogMode:
    @pytest.mark.parametrize("threshold", [0, 10, 100])
    def test_black_buffer_is_blank(self, threshold):
        config = RenderConfig(ascii_width=7, edge_method=EdgeMethod.DOG,
                              dog_edge_threshold=threshold)
        grid = render(make_pixels(7, 5, (0, 0, 0)), config)
        assert grid.lines == (" " * 7,) * 5

    def test_only_contour_glyphs(self, random_pixels):
        config = RenderConfig(ascii_width=16, edge_method="dog", dog_edge_threshold=5)
        grid = render(random_pixels, config)
        assert set("".join(grid.lines)) <= set("-/|\\ ")

    def test_palette_and_ignore_white_do_not_apply(self):
        pixels = make_vertical_step(12, 9, split=6)
        config = RenderConfig(ascii_width=12, edge_method="dog", dog_edge_threshold=1)
        other = config.replace(charset="hex", ignore_white=False, dithering_enabled=False)
        assert render(pixels, config) == render(pixels, other)
        assert "|" in render(pixels, config).lines[4]


class TestCharacterGrid:
    @pytest.mark.parametrize("edge_method", list(EdgeMethod))
    def test_dimensions(self, random_pixels, edge_method):
        grid = render(random_pixels, RenderConfig(ascii_width=16, edge_method=edge_method))
        assert isinstance(grid, CharacterGrid)
        assert (grid.width, grid.height) == (16, 12)
        assert len(grid.lines) == 12
        assert all(len(line) == 16 for line in grid.lines)

    def test_text(self):
        config = RenderConfig(ascii_width=2, custom_palette="AB", dithering_enabled=False)
        pixels = make_pixels(2, 3, (128, 128, 128))
        assert render_text(pixels, config) == "BB\nBB\nBB"
        assert str(render(pixels, config)) == "BB\nBB\nBB"

    def test_width_mismatch(self):
        with pytest.raises(ValueError):
            render(make_pixels(5, 2), RenderConfig(ascii_width=4))

    def test_bad_buffer_shape(self):
        with pytest.raises(ValueError):
            render(np.zeros((3, 4)), RenderConfig(ascii_width=4))

    def test_rgb_buffer(self):
        config = RenderConfig(ascii_width=3, charset="binary", dithering_enabled=False)
        grid = render(make_pixels(3, 2, (0, 0, 0))[:, :, :3], config)
        assert grid.lines == ("000", "000")
