"""변환 계획(TransformPlan) 테스트."""

from pathlib import Path

import pytest
from PIL import Image

from model.config import OptimizationConfig, ResizeConfig
from model.image import SourceImage
from processor.formats import SUPPORTED_OUTPUTS
from processor.planner import build_plan, resolve_resize

from conftest import make_config


def _source(width=1920, height=1080, alpha=False) -> SourceImage:
    mode = "RGBA" if alpha else "RGB"
    return SourceImage(
        path=Path("photo.png"),
        image=Image.new(mode, (width, height)),
        width=width,
        height=height,
        has_alpha=alpha,
        format="png",
    )


class TestResolveResize:
    def test_width_only_keeps_aspect(self):
        assert resolve_resize(1920, 1080, 1200, None, "inside") == (1200, 675)

    def test_height_only_keeps_aspect(self):
        assert resolve_resize(1920, 1080, None, 540, "inside") == (960, 540)

    def test_inside_fits_box(self):
        assert resolve_resize(1000, 500, 400, 400, "inside") == (400, 200)

    def test_cover_crops_to_box(self):
        assert resolve_resize(1000, 500, 400, 400, "cover") == (400, 400)

    def test_outside_covers_box_without_crop(self):
        assert resolve_resize(1000, 500, 400, 400, "outside") == (800, 400)

    def test_contain_letterboxes(self):
        assert resolve_resize(1000, 500, 400, 400, "contain") == (400, 400)

    def test_fill_ignores_aspect(self):
        assert resolve_resize(1000, 500, 300, 100, "fill") == (300, 100)

    def test_no_dimensions_keeps_source(self):
        assert resolve_resize(640, 480, None, None, "cover") == (640, 480)

    @pytest.mark.parametrize("fit", ["cover", "contain", "fill", "inside", "outside"])
    @pytest.mark.parametrize(
        "width,height",
        [(5000, None), (None, 5000), (5000, 5000), (5000, 100), (100, 5000), (300, 200)],
    )
    def test_never_enlarges(self, fit, width, height):
        """어떤 설정이어도 원본보다 커지지 않는다."""
        target_w, target_h = resolve_resize(640, 480, width, height, fit)
        assert target_w <= 640
        assert target_h <= 480


class TestBuildPlan:
    def test_fixed_order_with_everything_enabled(self):
        config = make_config(
            resize=ResizeConfig(enabled=True, width=1200),
            optimizations=OptimizationConfig(sharpen=True),
        )
        plan = build_plan(_source(alpha=True), config, "jpeg")

        assert plan.kinds == ["reorient", "resize", "sharpen", "metadata", "flatten_alpha"]

    def test_minimal_plan(self):
        config = make_config(optimizations=OptimizationConfig(sharpen=False))
        plan = build_plan(_source(), config, "png")

        assert plan.kinds == ["reorient", "metadata"]

    def test_resize_step_carries_target(self):
        config = make_config(resize=ResizeConfig(enabled=True, width=1200, fit="inside"))
        step = build_plan(_source(), config, "jpeg").find("resize")

        assert (step.width, step.height) == (1200, 675)

    def test_metadata_stripped_by_default(self):
        plan = build_plan(_source(), make_config(), "jpeg")
        assert plan.find("metadata").strip is True

    def test_metadata_preserved_on_request(self):
        config = make_config(optimizations=OptimizationConfig(remove_metadata=False))
        assert build_plan(_source(), config, "jpeg").find("metadata").strip is False

    @pytest.mark.parametrize("fmt", SUPPORTED_OUTPUTS)
    @pytest.mark.parametrize("alpha", [True, False])
    def test_flatten_only_for_jpeg_with_alpha(self, fmt, alpha):
        plan = build_plan(_source(alpha=alpha), make_config(), fmt)
        assert plan.has("flatten_alpha") == (fmt == "jpeg" and alpha)

    def test_flatten_uses_configured_background(self):
        config = make_config(flatten_background="#000000")
        step = build_plan(_source(alpha=True), config, "jpeg").find("flatten_alpha")
        assert step.background == "#000000"
