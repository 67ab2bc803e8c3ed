"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель декодированного изображения и его метаданные.

    Fields:
        pil_image: Декодированное изображение PIL (в режиме RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла, например "RGB".
        path: Путь к исходному файлу, если изображение загружено с диска.
        size_bytes: Размер исходных данных, если известен.
    """
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    path: Optional[Path] = None
    size_bytes: Optional[int] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height
