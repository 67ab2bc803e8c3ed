"""Загрузка изображений из файла или байтов и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за декодирование и базовое извлечение свойств.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- Ошибки декодирования приводятся к `DecodeError`; частично прочитанное изображение наружу не попадает.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from mirror_flip.errors import DecodeError
from mirror_flip.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            DecodeError: если путь не указывает на файл или файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise DecodeError(f"Файл не найден: {path}")

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DecodeError(f"Не удалось прочитать файл: {path}") from exc

        image_data = self.decode_bytes(data)
        return ImageData(
            pil_image=image_data.pil_image,
            width=image_data.width,
            height=image_data.height,
            mode=image_data.mode,
            path=path,
            size_bytes=image_data.size_bytes,
        )

    def decode_bytes(self, data: bytes) -> ImageData:
        """Декодирует байты файла в `ImageData`.

        Raises:
            DecodeError: если байты не являются изображением поддерживаемого формата.
        """
        if not data:
            raise DecodeError("Пустые данные изображения")

        try:
            with Image.open(io.BytesIO(data)) as src:
                mode = src.mode
                # EXIF orientation first; convert() forces a full decode
                pil_image = ImageOps.exif_transpose(src).convert("RGBA")
        except UnidentifiedImageError as exc:
            raise DecodeError("Данные не являются изображением") from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Изображение слишком велико: {exc}") from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Не удалось декодировать изображение: {exc}") from exc

        width, height = pil_image.size
        if width == 0 or height == 0:
            raise DecodeError(f"Изображение нулевого размера: {width}x{height}")

        size_bytes: Optional[int] = len(data)
        logger.debug(f"Decoded {width}x{height} {mode} image ({size_bytes} bytes)")
        return ImageData(
            pil_image=pil_image,
            width=width,
            height=height,
            mode=mode,
            size_bytes=size_bytes,
        )
