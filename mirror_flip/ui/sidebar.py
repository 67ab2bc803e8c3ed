"""Боковая панель: загрузка файла, информация об изображении, параметры отражения, экспорт.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: события наружу через `on_*`, синхронизация значений через `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from mirror_flip.models.image_model import ImageData
from mirror_flip.models.parameters import Direction, Parameters


def _format_size(size_bytes: Optional[int]) -> str:
    """Человекочитаемый размер файла."""
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, направление, смещение, непрозрачность."""
    def __init__(self, master: ctk.CTk, max_offset: float = 100.0, opacity_step: float = 0.05, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_direction_change: Optional[Callable[[str], None]] = None
        self.on_offset_change: Optional[Callable[[float], None]] = None
        self.on_opacity_change: Optional[Callable[[float], None]] = None
        self.on_generate: Optional[Callable[[], None]] = None
        self.on_download: Optional[Callable[[], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Mirror Flip Tool", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Upload Image", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Direction
        self._direction_title = ctk.CTkLabel(self, text="Select Position", font=ctk.CTkFont(size=14, weight="bold"))
        self._direction_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")
        self._direction_buttons = ctk.CTkSegmentedButton(
            self,
            values=[d.value for d in Direction],
            command=self._emit_direction_change,
        )
        self._direction_buttons.set(Direction.BELOW.value)
        self._direction_buttons.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Offset
        self._offset_title = ctk.CTkLabel(self, text="Offset Adjustment", font=ctk.CTkFont(size=14, weight="bold"))
        self._offset_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")
        self._offset_val = ctk.StringVar(value="0")
        self._offset_slider = ctk.CTkSlider(
            self, from_=0, to=max_offset, number_of_steps=int(max_offset), command=self._on_offset_slider
        )
        self._offset_slider.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._offset_value = ctk.CTkLabel(self, textvariable=self._offset_val, width=48, anchor="w")
        self._offset_value.grid(row=10, column=0, padx=8, pady=(0, 8), sticky="w")

        # Opacity
        self._opacity_title = ctk.CTkLabel(self, text="Opacity Adjustment", font=ctk.CTkFont(size=14, weight="bold"))
        self._opacity_title.grid(row=11, column=0, padx=8, pady=(8, 4), sticky="w")
        self._opacity_val = ctk.StringVar(value="0.00")
        self._opacity_slider = ctk.CTkSlider(
            self, from_=0, to=1, number_of_steps=int(round(1 / opacity_step)), command=self._on_opacity_slider
        )
        self._opacity_slider.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._opacity_value = ctk.CTkLabel(self, textvariable=self._opacity_val, width=48, anchor="w")
        self._opacity_value.grid(row=13, column=0, padx=8, pady=(0, 8), sticky="w")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Actions
        self._generate_btn = ctk.CTkButton(self, text="Generate Mirror", command=self._emit_generate)
        self._generate_btn.grid(row=100, column=0, padx=8, pady=(8, 4), sticky="ew")
        self._download_btn = ctk.CTkButton(
            self, text="Download Image", fg_color="transparent", border_width=1, command=self._emit_download
        )
        self._download_btn.grid(row=101, column=0, padx=8, pady=(4, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image: ImageData) -> None:
        self._path_val.set(f"Файл: {image.path.name}" if image.path else "Файл: —")
        self._dims_val.set(f"Размер: {image.width}×{image.height} ({image.mode})")
        self._size_val.set(f"Объём: {_format_size(image.size_bytes)}")

    def set_parameters(self, params: Parameters) -> None:
        """Синхронизирует элементы управления с текущими параметрами без генерации событий."""
        self._direction_buttons.set(params.direction.value)
        self._offset_slider.set(params.offset)
        self._offset_val.set(f"{params.offset:.0f}")
        self._opacity_slider.set(params.opacity)
        self._opacity_val.set(f"{params.opacity:.2f}")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_direction_change(self, value: str) -> None:
        if self.on_direction_change:
            self.on_direction_change(value)

    def _on_offset_slider(self, value: float) -> None:
        self._offset_val.set(f"{value:.0f}")
        if self.on_offset_change:
            self.on_offset_change(value)

    def _on_opacity_slider(self, value: float) -> None:
        self._opacity_val.set(f"{value:.2f}")
        if self.on_opacity_change:
            self.on_opacity_change(value)

    def _emit_generate(self) -> None:
        if self.on_generate:
            self.on_generate()

    def _emit_download(self) -> None:
        if self.on_download:
            self.on_download()
