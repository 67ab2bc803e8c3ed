"""Экспорт готового кадра в PNG.

Принципы:
- SRP: сервис только кодирует холст и передаёт байты приёмнику (файл, буфер обмена и т.п.).
- Экспорт до загрузки изображения не является ошибкой: сохраняется пустой прозрачный холст.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "flipped-image.png"


class ExportService:
    def export_raster(self, surface: Image.Image) -> bytes:
        """Кодирует текущее содержимое холста в PNG и возвращает байты."""
        buffer = io.BytesIO()
        surface.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, surface: Image.Image, file_path: str | Path) -> Path:
        """Записывает PNG-представление холста в файл.

        Raises:
            OSError: если файл не удалось записать.
        """
        path = Path(file_path)
        data = self.export_raster(surface)
        path.write_bytes(data)
        logger.info(f"Exported: {path} ({len(data)} bytes)")
        return path
