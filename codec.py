"""이미지 디코드/인코드 모듈."""

from io import BytesIO
from pathlib import Path

from PIL import ExifTags, Image, ImageOps, UnidentifiedImageError

# 출력 포맷 → Pillow 포맷 이름
_FORMATS = {
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
}


class DecodeError(Exception):
    """손상되었거나 지원하지 않는 이미지 데이터."""


def source_name(handle, index: int = 0) -> str:
    """로그·결과에 쓸 소스 이름."""
    if isinstance(handle, tuple):
        return str(handle[0])
    if isinstance(handle, (bytes, bytearray)):
        return f"#{index + 1}"
    return Path(handle).name


def read_source(handle) -> tuple[str, bytes]:
    """소스 핸들(bytes, 경로, (이름, bytes))을 (이름, 데이터)로 변환한다."""
    if isinstance(handle, tuple):
        name, data = handle
        return str(name), bytes(data)
    if isinstance(handle, (bytes, bytearray)):
        return "<bytes>", bytes(handle)
    path = Path(handle)
    try:
        return path.name, path.read_bytes()
    except OSError as e:
        raise DecodeError(f"파일 읽기 실패: {path} ({e})") from e


def decode_image(data: bytes) -> Image.Image:
    """이미지 바이트를 디코드한다. 픽셀까지 모두 읽어 두고 EXIF 회전을 적용한다."""
    try:
        img = Image.open(BytesIO(data))
        img.load()
        # 회전 정보가 있을 때만 (복사본은 format 정보를 잃는다)
        if img.getexif().get(ExifTags.Base.Orientation, 1) != 1:
            img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"이미지 디코드 실패: {e}") from e
    return img


def load_image(path: str | Path) -> Image.Image:
    """파일에서 이미지를 읽어 디코드한다."""
    _, data = read_source(Path(path))
    return decode_image(data)


def encode_image(image: Image.Image, format: str = "jpeg", quality: float = 1.0) -> bytes:
    """이미지를 인코드한다. quality는 0~1 (1.0 = 최고 품질)."""
    try:
        pil_format = _FORMATS[format.lower()]
    except KeyError:
        raise ValueError(f"지원하지 않는 출력 포맷: {format}") from None

    if pil_format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")

    buf = BytesIO()
    if pil_format == "PNG":
        image.save(buf, format=pil_format)
    else:
        image.save(buf, format=pil_format, quality=round(quality * 100))
    return buf.getvalue()
