"""Композиция кадра: исходное изображение, его отражение и затухающий градиент.

Принципы:
- SRP: сервис только рисует; параметры и их валидация живут в `SessionState`.
- Чистая функция: результат `render` зависит лишь от (изображение, параметры, S), состояния между вызовами нет.
- Геометрия считается в вещественных числах; растеризация через `Image.transform` и numpy.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from mirror_flip.models.geometry import Affine, DrawRect, GradientSpec
from mirror_flip.models.parameters import Direction

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class CompositorService:
    def __init__(self, draw_original: bool = True) -> None:
        # False leaves only the mirrored layer and the gradient in the frame
        self._draw_original = draw_original

    def create_surface(self, canvas_size: int) -> Image.Image:
        """Создаёт пустой прозрачный квадратный холст RGBA."""
        return Image.new("RGBA", (canvas_size, canvas_size), TRANSPARENT)

    # ---------- Геометрия ----------
    def compute_draw_rect(self, image_size: Tuple[int, int], canvas_size: int, scale_factor: float) -> DrawRect:
        """
        Вписывает изображение в холст с сохранением пропорций и домножает на `scale_factor`.
        При scale_factor = 1 большая сторона изображения равна стороне холста.
        """
        img_w, img_h = image_size
        scale = min(canvas_size / img_w, canvas_size / img_h) * scale_factor
        return DrawRect(scale=scale, width=img_w * scale, height=img_h * scale, canvas_size=canvas_size)

    def base_transform(self, canvas_size: int) -> Affine:
        """Локальная система координат с началом в центре холста."""
        return Affine.identity().translate(canvas_size / 2, canvas_size / 2)

    def mirror_transform(self, direction: Direction, canvas_size: int) -> Affine:
        """
        Переворот оси относительно центра холста.
        Below/Above переворачивают Y, Left/Right переворачивают X; внутри пары преобразование одинаково,
        различие между ними задаёт только градиент.
        """
        base = self.base_transform(canvas_size)
        if direction.is_vertical:
            return base.scale(1, -1)
        return base.scale(-1, 1)

    def compute_gradient(self, direction: Direction, rect: DrawRect, offset: float, opacity: float) -> GradientSpec:
        """
        Прямоугольник градиента у края отражения шириной `offset` и порядок опорных точек:
        - Below: от нижнего края, альфа 0 -> opacity сверху вниз;
        - Above: от верхнего края, opacity -> 0;
        - Left: от левого края, opacity -> 0 слева направо;
        - Right: от правого края, 0 -> opacity.
        """
        size = rect.canvas_size
        if direction is Direction.BELOW:
            return GradientSpec(0.0, rect.bottom - offset, size, offset, True, 0.0, opacity)
        if direction is Direction.ABOVE:
            return GradientSpec(0.0, rect.top, size, offset, True, opacity, 0.0)
        if direction is Direction.LEFT:
            return GradientSpec(rect.left, 0.0, offset, size, False, opacity, 0.0)
        return GradientSpec(rect.right - offset, 0.0, offset, size, False, 0.0, opacity)

    # ---------- Отрисовка ----------
    def render(
        self,
        surface: Image.Image,
        image: Optional[Image.Image],
        direction: Direction,
        offset: float,
        opacity: float,
        scale_factor: float,
    ) -> None:
        """
        Полностью перерисовывает `surface`:
        очистка, отражённая копия, исходное изображение, затем градиент у края отражения.
        Без изображения холст только очищается.
        """
        canvas_size = surface.width
        surface.paste(TRANSPARENT, (0, 0, surface.width, surface.height))
        if image is None or image.width == 0 or image.height == 0:
            return

        direction = Direction.parse(direction)
        rect = self.compute_draw_rect(image.size, canvas_size, scale_factor)
        source = self._prepare_source(image, rect)

        self._draw_image(surface, source, self.mirror_transform(direction, canvas_size), rect)
        if self._draw_original:
            # unflipped frame rebuilt from scratch
            self._draw_image(surface, source, self.base_transform(canvas_size), rect)

        gradient = self.compute_gradient(direction, rect, offset, opacity)
        self._fill_gradient(surface, gradient)
        logger.debug(
            f"Rendered {direction.value}: draw {rect.width:.1f}x{rect.height:.1f}, "
            f"gradient {gradient.as_box()} alpha {gradient.alpha_start:.2f}->{gradient.alpha_end:.2f}"
        )

    def _prepare_source(self, image: Image.Image, rect: DrawRect) -> Image.Image:
        """Приводит к RGBA и заранее ресэмплирует до размера отрисовки (LANCZOS)."""
        src = image if image.mode == "RGBA" else image.convert("RGBA")
        target = (max(1, int(round(rect.width))), max(1, int(round(rect.height))))
        if src.size == target:
            return src
        return src.resize(target, Image.Resampling.LANCZOS)

    def _draw_image(self, surface: Image.Image, source: Image.Image, transform: Affine, rect: DrawRect) -> None:
        """
        Рисует `source` в локальный прямоугольник (-w/2, -h/2, w, h) под преобразованием `transform`
        и накладывает результат на холст (source-over).
        """
        src_w, src_h = source.size
        image_to_canvas = (
            transform
            .translate(-rect.width / 2, -rect.height / 2)
            .scale(rect.width / src_w, rect.height / src_h)
        )
        # Image.transform expects the output -> input mapping
        canvas_to_image = image_to_canvas.inverse()
        layer = source.transform(
            surface.size,
            Image.Transform.AFFINE,
            canvas_to_image.as_pil_data(),
            resample=Image.Resampling.BILINEAR,
            fillcolor=TRANSPARENT,
        )
        surface.alpha_composite(layer)

    def _fill_gradient(self, surface: Image.Image, gradient: GradientSpec) -> None:
        """
        Заливает прямоугольник градиента белым с линейно меняющейся альфой.
        Пиксель попадает в заливку, если его центр лежит внутри прямоугольника; вне его холст не меняется.
        """
        if gradient.is_empty:
            return

        width, height = surface.size
        xs = np.arange(width, dtype=np.float64) + 0.5
        ys = np.arange(height, dtype=np.float64) + 0.5
        x0, y0, x1, y1 = gradient.as_box()
        in_x = (xs >= x0) & (xs < x1)
        in_y = (ys >= y0) & (ys < y1)

        if gradient.vertical:
            t = (ys - y0) / gradient.height
            ramp = np.where(in_y, gradient.alpha_start + (gradient.alpha_end - gradient.alpha_start) * t, 0.0)
            alpha = np.outer(ramp, in_x)
        else:
            t = (xs - x0) / gradient.width
            ramp = np.where(in_x, gradient.alpha_start + (gradient.alpha_end - gradient.alpha_start) * t, 0.0)
            alpha = np.outer(in_y, ramp)

        alpha_u8 = np.rint(np.clip(alpha, 0.0, 1.0) * 255).astype(np.uint8)
        if not alpha_u8.any():
            return

        overlay = np.zeros((height, width, 4), dtype=np.uint8)
        overlay[..., :3] = gradient.color
        overlay[..., 3] = alpha_u8
        surface.alpha_composite(Image.fromarray(overlay))
