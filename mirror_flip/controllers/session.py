"""Состояние сеанса: текущее изображение, параметры и перерисовка при каждом изменении.

Принципы:
- SRP: хранит состояние и решает, когда перерисовывать; саму отрисовку выполняет `CompositorService`.
- Не зависит от UI: планировщик (`scheduler`) внедряется снаружи, в приложении это `after_idle` окна.
- Значения вне диапазона не считаются ошибкой и зажимаются к ближайшей границе.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from mirror_flip.config import AppConfig
from mirror_flip.errors import DecodeError
from mirror_flip.models.image_model import ImageData
from mirror_flip.models.parameters import Direction, Parameters
from mirror_flip.services.compositor_service import CompositorService
from mirror_flip.services.export_service import ExportService
from mirror_flip.services.image_service import ImageService

logger = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], None]], None]


def run_now(callback: Callable[[], None]) -> None:
    """Планировщик по умолчанию: выполняет задачу сразу."""
    callback()


def _clamp(value: float, low: float, high: float, name: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        number = low
    clamped = max(low, min(high, number))
    if clamped != value:
        logger.debug(f"{name}={value!r} clamped to {clamped}")
    return clamped


class SessionState:
    """Текущее изображение и параметры; каждое изменение планирует одну перерисовку.

    Если перерисовка уже запланирована, новые изменения к ней присоединяются:
    она выполнится один раз и прочитает последние значения.

    Callbacks:
        on_frame: вызывается после каждой перерисовки с холстом.
        on_image_loaded: изображение декодировано и сохранено.
        on_parameters_change: параметры заменены (для синхронизации элементов UI).
        on_error: декодирование не удалось; состояние не изменилось.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        compositor: Optional[CompositorService] = None,
        image_service: Optional[ImageService] = None,
        export_service: Optional[ExportService] = None,
        scheduler: Scheduler = run_now,
    ) -> None:
        self._config = config or AppConfig()
        self._compositor = compositor or CompositorService()
        self._image_service = image_service or ImageService()
        self._export_service = export_service or ExportService()
        self._schedule = scheduler

        self._surface = self._compositor.create_surface(self._config.canvas_size)
        self._image: Optional[ImageData] = None
        self._parameters = Parameters(
            opacity=_clamp(self._config.default_opacity, 0.0, 1.0, "opacity"),
            offset=_clamp(self._config.default_offset, 0.0, self._config.canvas_size, "offset"),
            scale_factor=_clamp(
                self._config.default_scale_factor,
                self._config.min_scale_factor,
                self._config.max_scale_factor,
                "scale_factor",
            ),
            direction=Direction.parse(self._config.default_direction),
        )
        self._redraw_pending = False
        self.redraw_count = 0

        self.on_frame: Optional[Callable[[Image.Image], None]] = None
        self.on_image_loaded: Optional[Callable[[ImageData], None]] = None
        self.on_parameters_change: Optional[Callable[[Parameters], None]] = None
        self.on_error: Optional[Callable[[Exception], None]] = None

    # ---- State ----
    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def image(self) -> Optional[ImageData]:
        return self._image

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def surface(self) -> Image.Image:
        return self._surface

    @property
    def redraw_pending(self) -> bool:
        return self._redraw_pending

    # ---- Image ----
    def load_image(self, data: bytes) -> None:
        """Планирует декодирование байтов; изображение заменяется только после успешного декодирования."""
        self._schedule(lambda: self._decode_and_store(lambda: self._image_service.decode_bytes(data)))

    def load_file(self, file_path: str | Path) -> None:
        """То же, что `load_image`, но читает файл с диска (метаданные включают путь)."""
        self._schedule(lambda: self._decode_and_store(lambda: self._image_service.load_image(file_path)))

    def set_image(self, image: ImageData) -> None:
        self._image = image
        logger.info(f"Image set: {image.width}x{image.height} {image.mode}")
        if self.on_image_loaded:
            self.on_image_loaded(image)
        self._request_redraw()

    def _decode_and_store(self, decode: Callable[[], ImageData]) -> None:
        try:
            image = decode()
        except DecodeError as exc:
            logger.warning(f"Image rejected: {exc}")
            if self.on_error:
                self.on_error(exc)
            return
        self.set_image(image)

    # ---- Parameters ----
    def set_direction(self, direction: Direction | str) -> None:
        try:
            parsed = Direction.parse(direction)
        except ValueError:
            logger.warning(f"Ignoring unknown direction {direction!r}")
            return
        self._update(direction=parsed)

    def set_offset(self, offset: float) -> None:
        self._update(offset=_clamp(offset, 0.0, self._config.canvas_size, "offset"))

    def set_opacity(self, opacity: float) -> None:
        self._update(opacity=_clamp(opacity, 0.0, 1.0, "opacity"))

    def set_scale_factor(self, scale_factor: float) -> None:
        self._update(
            scale_factor=_clamp(
                scale_factor, self._config.min_scale_factor, self._config.max_scale_factor, "scale_factor"
            )
        )

    def zoom_in(self) -> bool:
        """Увеличивает масштаб на шаг. Возвращает False, если масштаб уже максимальный."""
        return self._zoom(self._config.zoom_step)

    def zoom_out(self) -> bool:
        """Уменьшает масштаб на шаг. Возвращает False, если масштаб уже минимальный."""
        return self._zoom(-self._config.zoom_step)

    def _zoom(self, step: float) -> bool:
        current = self._parameters.scale_factor
        if step > 0 and current >= self._config.max_scale_factor:
            return False
        if step < 0 and current <= self._config.min_scale_factor:
            return False
        # rounding keeps repeated steps from drifting (1.2000000000000002)
        self.set_scale_factor(round(current + step, 6))
        return True

    def _update(self, **changes) -> None:
        self._parameters = replace(self._parameters, **changes)
        if self.on_parameters_change:
            self.on_parameters_change(self._parameters)
        self._request_redraw()

    # ---- Rendering ----
    def _request_redraw(self) -> None:
        if self._redraw_pending:
            return
        self._redraw_pending = True
        self._schedule(self._run_pending_redraw)

    def _run_pending_redraw(self) -> None:
        self._redraw_pending = False
        self.redraw()

    def redraw(self) -> None:
        """Синхронно перерисовывает холст по текущим значениям."""
        params = self._parameters
        self._compositor.render(
            self._surface,
            self._image.pil_image if self._image is not None else None,
            params.direction,
            params.offset,
            params.opacity,
            params.scale_factor,
        )
        self.redraw_count += 1
        if self.on_frame:
            self.on_frame(self._surface)

    # ---- Export ----
    def export_png(self) -> bytes:
        return self._export_service.export_raster(self._surface)

    def save_png(self, file_path: str | Path) -> Path:
        return self._export_service.save(self._surface, file_path)
