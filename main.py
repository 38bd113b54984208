"""메인 — 설정 파일에 따라 소스 이미지들을 일괄 합성한다.

사용법: python main.py [config.json]
"""

import logging
import sys
from pathlib import Path

from config import filter_settings, load_config, logo_layer, text_layers
from batch import BatchRunner, EmptyBatchError
from codec import DecodeError, load_image
from renderer.text import set_font_directories

# 출력 포맷 → 확장자
_EXTENSIONS = {"jpeg": "jpg", "jpg": "jpg", "png": "png", "webp": "webp"}


def find_sources(directory: Path, patterns: list[str]) -> list[Path]:
    """소스 디렉토리에서 이미지 파일을 이름순으로 찾는다."""
    if not directory.exists():
        logging.warning("소스 디렉토리 없음: %s", directory)
        return []
    found = {p for pattern in patterns for p in directory.glob(pattern)}
    return sorted(found)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    config_path = Path(argv[0]) if argv else None
    config = load_config(config_path)

    logging.basicConfig(
        level=config["logging"].get("level", "INFO"),
        format="%(asctime)s [%(name)s] %(message)s",
    )
    logging.info("설정 로드: %s", config_path or "config.json (기본값)")
    set_font_directories(config["fonts"].get("directories", []))

    sources = find_sources(
        Path(config["sources"]["directory"]), config["sources"]["patterns"],
    )

    # 로고 로드 (실패하면 로고 없이 진행)
    logo = None
    logo_path = config["logo"].get("path")
    if logo_path:
        try:
            logo = load_image(logo_path)
            logging.info("로고 로드: %s (%dx%d)", logo_path, logo.width, logo.height)
        except DecodeError as e:
            logging.warning("로고 로드 실패, 로고 없이 진행: %s", e)

    output = config["output"]
    runner = BatchRunner(output_format=output["format"], quality=output["quality"])
    try:
        result = runner.run(
            sources, logo, text_layers(config), logo_layer(config), filter_settings(config),
        )
    except EmptyBatchError as e:
        logging.error("%s", e)
        return 1

    out_dir = Path(output["directory"])
    out_dir.mkdir(parents=True, exist_ok=True)
    ext = _EXTENSIONS.get(output["format"].lower(), output["format"].lower())
    for n, item in enumerate(result.items, start=1):
        (out_dir / f"processed_image_{n}.{ext}").write_bytes(item.data)

    logging.info("%d개 이미지 저장: %s (실패 %d개)", len(result.items), out_dir, len(result.failures))
    return 0 if not result.failures else 2


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("종료")
