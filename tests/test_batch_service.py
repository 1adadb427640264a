"""배치 오케스트레이터 end-to-end 테스트."""

import pytest
from PIL import Image

from core.exceptions import InputDirectoryError
from model.config import ResizeConfig, WatermarkConfig
from service import batch_service
from service.batch_service import output_path_for, run_batch

from conftest import make_config, write_image


def test_resize_jpeg_end_to_end(input_dir, output_dir):
    """1920x1080 JPEG, width 1200 inside → 1200x675 JPEG."""
    write_image(input_dir / "photo.jpg", (1920, 1080))
    config = make_config(resize=ResizeConfig(enabled=True, width=1200, fit="inside"))

    stats = run_batch(input_dir, output_dir, config)

    assert (stats.succeeded, stats.errored, stats.skipped) == (1, 0, 0)
    assert stats.format_counts == {"jpeg": 1}
    with Image.open(output_dir / "photo.jpeg") as out:
        assert out.format == "JPEG"
        assert out.width <= 1200
        assert out.size == (1200, 675)


def test_transparent_png_to_jpeg_is_flattened(input_dir, output_dir):
    write_image(input_dir / "logo.png", (40, 40), "RGBA", (0, 0, 0, 0))

    stats = run_batch(input_dir, output_dir, make_config(output_format="jpeg"))

    assert stats.succeeded == 1
    with Image.open(output_dir / "logo.jpeg") as out:
        assert out.mode == "RGB"
        assert out.getpixel((20, 20)) == (255, 255, 255)


def test_corrupt_file_counts_as_error(input_dir, output_dir):
    (input_dir / "broken.jpg").write_bytes(b"\x00\x01 not an image")

    stats = run_batch(input_dir, output_dir, make_config())

    assert (stats.succeeded, stats.errored, stats.skipped) == (0, 1, 0)
    assert not (output_dir / "broken.jpeg").exists()


def test_failure_does_not_abort_run(input_dir, output_dir):
    (input_dir / "a_broken.png").write_bytes(b"garbage")
    write_image(input_dir / "b_good.png", (20, 20))

    stats = run_batch(input_dir, output_dir, make_config(output_format="png"))

    assert (stats.succeeded, stats.errored) == (1, 1)
    assert (output_dir / "b_good.png").exists()


def test_empty_directory(input_dir, output_dir):
    stats = run_batch(input_dir, output_dir, make_config())

    assert stats.model_dump(exclude={"elapsed"}) == {
        "processed": 0, "succeeded": 0, "errored": 0, "skipped": 0, "watermarked": 0,
        "input_bytes": 0, "output_bytes": 0, "format_counts": {},
    }


def test_directories_and_other_files_are_skipped(input_dir, output_dir):
    (input_dir / "nested").mkdir()
    (input_dir / "notes.txt").write_text("hello")
    write_image(input_dir / "pic.PNG", (10, 10))

    stats = run_batch(input_dir, output_dir, make_config(output_format="original"))

    assert (stats.succeeded, stats.errored, stats.skipped) == (1, 0, 2)
    assert (output_dir / "pic.png").exists()


def test_missing_input_directory_is_fatal(tmp_path, output_dir):
    with pytest.raises(InputDirectoryError):
        run_batch(tmp_path / "does-not-exist", output_dir, make_config())


def test_original_format_fallback_for_gif(input_dir, output_dir):
    write_image(input_dir / "anim.gif", (10, 10))

    stats = run_batch(input_dir, output_dir, make_config(output_format="original"))

    assert stats.format_counts == {"jpeg": 1}
    assert (output_dir / "anim.jpeg").exists()


def test_missing_watermark_asset_is_not_an_error(input_dir, output_dir, tmp_path):
    write_image(input_dir / "a.jpg", (50, 50))
    config = make_config(
        watermark=WatermarkConfig(enabled=True, type="image", image_path=str(tmp_path / "missing.png")),
    )

    stats = run_batch(input_dir, output_dir, config)

    assert (stats.succeeded, stats.errored, stats.watermarked) == (1, 0, 0)


def test_image_watermark_counted(input_dir, output_dir, tmp_path):
    write_image(input_dir / "a.jpg", (50, 50))
    write_image(input_dir / "b.jpg", (50, 50))
    mark = write_image(tmp_path / "mark.png", (10, 10), "RGBA", (255, 255, 255, 255))
    config = make_config(watermark=WatermarkConfig(enabled=True, type="image", image_path=str(mark)))

    stats = run_batch(input_dir, output_dir, config)

    assert stats.watermarked == 2


def test_same_stem_overwrites(input_dir, output_dir):
    write_image(input_dir / "dup.png", (10, 10))
    write_image(input_dir / "dup.jpg", (20, 20))

    stats = run_batch(input_dir, output_dir, make_config(output_format="webp"))

    assert stats.succeeded == 2
    assert [p.name for p in output_dir.iterdir()] == ["dup.webp"]


def test_thread_pool_matches_sequential(input_dir, output_dir):
    for i in range(6):
        write_image(input_dir / f"img{i}.png", (30, 20))
    (input_dir / "bad.jpg").write_bytes(b"nope")

    stats = run_batch(input_dir, output_dir, make_config(output_format="png"), workers=3)

    assert (stats.succeeded, stats.errored) == (6, 1)
    assert stats.format_counts == {"png": 6}
    assert len(list(output_dir.iterdir())) == 6


def test_output_path_for(tmp_path):
    assert output_path_for(tmp_path / "in" / "a.b.JPG", tmp_path, "jpeg") == tmp_path / "a.b.jpeg"


def test_decompression_bomb_counts_as_error(input_dir, output_dir, monkeypatch):
    """픽셀 수 제한 초과 파일도 파일 하나의 실패로 끝난다."""
    write_image(input_dir / "big.png", (200, 200))
    write_image(input_dir / "ok.png", (50, 50))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10_000)

    stats = run_batch(input_dir, output_dir, make_config(output_format="png"))

    assert (stats.succeeded, stats.errored) == (1, 1)
    assert (output_dir / "ok.png").exists()


@pytest.mark.parametrize("workers", [1, 3])
def test_unexpected_exception_does_not_abort_run(input_dir, output_dir, monkeypatch, workers):
    """예상 못한 예외 타입도 에러로 집계되고 나머지 파일은 처리된다."""
    write_image(input_dir / "a.png", (20, 20))
    write_image(input_dir / "b.png", (20, 20))
    original = batch_service.process_file

    def flaky(path, *args, **kwargs):
        if path.name == "a.png":
            raise RuntimeError("codec exploded")
        return original(path, *args, **kwargs)

    monkeypatch.setattr(batch_service, "process_file", flaky)

    stats = run_batch(input_dir, output_dir, make_config(output_format="png"), workers=workers)

    assert (stats.succeeded, stats.errored) == (1, 1)
    assert (output_dir / "b.png").exists()
