"""공용 테스트 픽스처."""

import pytest
from PIL import Image


def fake_measure(text: str, family: str, size: float) -> float:
    """글자당 크기의 절반 폭을 가정한 측정 함수."""
    return len(text) * size * 0.5


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def white_base():
    return Image.new("RGB", (200, 120), (255, 255, 255))


@pytest.fixture
def gradient_base():
    """픽셀마다 값이 다른 베이스 이미지."""
    img = Image.new("RGB", (64, 48))
    img.putdata([((x * 4) % 256, (y * 5) % 256, (x + y) % 256)
                 for y in range(48) for x in range(64)])
    return img


def same_pixels(a: Image.Image, b: Image.Image) -> bool:
    return a.size == b.size and a.tobytes() == b.tobytes()
