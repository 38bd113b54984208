"""일괄 처리 모듈 — 소스 이미지마다 합성 후 인코딩한다.

소스는 순서대로 하나씩 처리한다 (디코드 → 합성 → 인코드가 끝난 뒤 다음 소스).
한 소스의 실패는 기록만 하고 계속 진행한다.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

from PIL import Image

from codec import decode_image, encode_image, read_source, source_name
from content.options import FilterSettings, LogoLayer, TextLayer
from renderer.canvas import Canvas, NoDrawingSurfaceError, create_canvas
from renderer.layers import render

logger = logging.getLogger(__name__)


class EmptyBatchError(ValueError):
    """처리할 소스가 없다."""


@dataclass(frozen=True)
class BatchItem:
    """인코딩된 결과 하나."""
    index: int
    name: str
    data: bytes


@dataclass(frozen=True)
class BatchFailure:
    """처리에 실패한 소스."""
    index: int
    name: str
    error: str


@dataclass
class BatchResult:
    items: list[BatchItem] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def outputs(self) -> list[bytes]:
        return [item.data for item in self.items]


class BatchRunner:
    """소스 목록을 같은 레이어 설정으로 합성한다."""

    def __init__(
        self,
        output_format: str = "jpeg",
        quality: float = 1.0,
        decoder: Callable[[bytes], Image.Image] = decode_image,
        encoder: Callable[..., bytes] = encode_image,
        canvas_factory: Callable[[], Canvas] = create_canvas,
    ):
        self._format = output_format
        self._quality = quality
        self._decode = decoder
        self._encode = encoder
        self._canvas_factory = canvas_factory

    def iter_batch(
        self,
        sources: list,
        logo: Image.Image | None,
        texts: list[TextLayer],
        logo_layer: LogoLayer,
        filters: FilterSettings,
    ) -> Iterator[BatchItem | BatchFailure]:
        """소스마다 BatchItem 또는 BatchFailure를 하나씩 돌려준다."""
        if not sources:
            raise EmptyBatchError("처리할 소스 이미지가 없습니다")

        try:
            canvas = self._canvas_factory()
        except NoDrawingSurfaceError:
            raise
        except Exception as e:
            raise NoDrawingSurfaceError(f"캔버스 생성 실패: {e}") from e

        return self._iterate(canvas, list(sources), logo, list(texts), logo_layer, filters)

    def _iterate(self, canvas, sources, logo, texts, logo_layer, filters):
        for index, handle in enumerate(sources):
            name = f"#{index + 1}"
            try:
                name = source_name(handle, index)
                _, data = read_source(handle)
                image = self._decode(data)
                render(canvas, image, logo, texts, logo_layer, filters)
                encoded = self._encode(canvas.image, self._format, self._quality)
            except NoDrawingSurfaceError:
                raise
            except Exception as e:
                logger.warning("이미지 처리 실패: %s (%s)", name, e)
                yield BatchFailure(index, name, str(e))
                continue
            logger.debug("이미지 처리 완료: %s (%d bytes)", name, len(encoded))
            yield BatchItem(index, name, encoded)

    def run(
        self,
        sources: list,
        logo: Image.Image | None,
        texts: list[TextLayer],
        logo_layer: LogoLayer,
        filters: FilterSettings,
    ) -> BatchResult:
        """모든 소스를 처리하고 결과와 실패 목록을 반환한다."""
        result = BatchResult()
        for outcome in self.iter_batch(sources, logo, texts, logo_layer, filters):
            if isinstance(outcome, BatchFailure):
                result.failures.append(outcome)
            else:
                result.items.append(outcome)
        logger.info("일괄 처리 완료: 성공 %d, 실패 %d", len(result.items), len(result.failures))
        return result


def run_batch(
    sources: list,
    logo: Image.Image | None,
    texts: list[TextLayer],
    logo_layer: LogoLayer,
    filters: FilterSettings,
    output_format: str = "jpeg",
    quality: float = 1.0,
) -> BatchResult:
    return BatchRunner(output_format, quality).run(sources, logo, texts, logo_layer, filters)
