"""일괄 처리 테스트 — 부분 실패, 빈 배치, 드로잉 표면 오류, 인코딩."""

import logging

import pytest
from PIL import Image

from batch import BatchFailure, BatchItem, BatchRunner, EmptyBatchError, run_batch
from codec import DecodeError, decode_image, encode_image, read_source
from content.options import Anchor, Anchored, FilterSettings, LogoLayer, TextLayer
from renderer.canvas import NoDrawingSurfaceError
from renderer.layers import LayerCompositor


def _jpeg(size=(40, 30), color=(200, 200, 200)) -> bytes:
    return encode_image(Image.new("RGB", size, color))


TEXTS = [TextLayer(id="t", text="Hi", font_size=12, shadow=False,
                   placement=Anchored(Anchor.BOTTOM_LEFT, 2))]


def _run(sources, **kwargs):
    return BatchRunner(**kwargs).run(sources, None, TEXTS, LogoLayer(), FilterSettings())


def test_bad_item_is_skipped_and_reported_once(caplog):
    sources = [("one.jpg", _jpeg()), ("two.jpg", b"not an image"), ("three.jpg", _jpeg((20, 10)))]
    with caplog.at_level(logging.WARNING, logger="batch"):
        result = _run(sources)

    assert [item.name for item in result.items] == ["one.jpg", "three.jpg"]
    assert [item.index for item in result.items] == [0, 2]
    assert len(result.outputs) == 2
    assert [(f.index, f.name) for f in result.failures] == [(1, "two.jpg")]
    warnings = [r for r in caplog.records if r.name == "batch" and r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "two.jpg" in warnings[0].getMessage()


def test_outputs_are_jpeg_of_source_size():
    result = _run([_jpeg((40, 30)), _jpeg((25, 60))])
    sizes = [decode_image(data).size for data in result.outputs]
    assert sizes == [(40, 30), (25, 60)]
    assert decode_image(result.outputs[0]).format == "JPEG"


def test_png_output_keeps_alpha_channel():
    result = _run([_jpeg()], output_format="png")
    img = decode_image(result.outputs[0])
    assert img.format == "PNG"
    assert img.mode == "RGBA"


def test_empty_batch_is_rejected():
    with pytest.raises(EmptyBatchError):
        BatchRunner().iter_batch([], None, [], LogoLayer(), FilterSettings())
    with pytest.raises(EmptyBatchError):
        run_batch([], None, [], LogoLayer(), FilterSettings())


def test_missing_surface_aborts_batch():
    def no_surface():
        raise MemoryError("no canvas")

    with pytest.raises(NoDrawingSurfaceError):
        _run([_jpeg()], canvas_factory=no_surface)


def test_iter_batch_is_lazy_and_ordered():
    decoded = []

    def decoder(data):
        decoded.append(data)
        return decode_image(data)

    sources = [_jpeg(color=(i, i, i)) for i in (10, 20, 30)]
    outcomes = BatchRunner(decoder=decoder).iter_batch(
        sources, None, [], LogoLayer(), FilterSettings())
    assert decoded == []
    first = next(outcomes)
    assert isinstance(first, BatchItem) and first.index == 0
    assert len(decoded) == 1
    assert [o.index for o in outcomes] == [1, 2]


def test_encode_failure_does_not_abort():
    calls = []

    def flaky_encoder(image, fmt, quality):
        calls.append(fmt)
        if len(calls) == 1:
            raise OSError("disk full")
        return encode_image(image, fmt, quality)

    result = _run([_jpeg(), _jpeg()], encoder=flaky_encoder)
    assert len(result.items) == 1
    assert isinstance(result.failures[0], BatchFailure)
    assert result.failures[0].index == 0


def test_batch_matches_preview_without_selection():
    source = _jpeg((60, 40))
    batch = _run([source], output_format="png").outputs[0]
    preview = LayerCompositor().compose(decode_image(source), None, TEXTS,
                                        LogoLayer(), FilterSettings(), selected_id=None)
    assert decode_image(batch).convert("RGB").tobytes() == preview.tobytes()


def test_path_sources(tmp_path):
    good = tmp_path / "good.jpg"
    good.write_bytes(_jpeg())
    result = _run([good, tmp_path / "missing.jpg"])
    assert [item.name for item in result.items] == ["good.jpg"]
    assert [f.name for f in result.failures] == ["missing.jpg"]


def test_decode_error():
    with pytest.raises(DecodeError):
        decode_image(b"\x89PNG broken")


def test_read_source_handles():
    assert read_source(b"abc") == ("<bytes>", b"abc")
    assert read_source(("x.png", b"abc")) == ("x.png", b"abc")


def test_encode_rejects_unknown_format():
    with pytest.raises(ValueError):
        encode_image(Image.new("RGB", (2, 2)), "tiff")


def test_unusable_handle_is_a_failure():
    result = _run([_jpeg(), None, _jpeg()])
    assert [item.index for item in result.items] == [0, 2]
    assert [(f.index, f.name) for f in result.failures] == [(1, "#2")]
