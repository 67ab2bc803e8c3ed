"""Контроллер приложения: оркестрация UI и состояния сеанса.

SOLID:
- SRP: класс управляет связями между UI и `SessionState` (без логики композиции).
- DIP: диалоги выбора файла и сохранения являются внешними коллабораторами, ядро о них не знает.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from tkinter import filedialog, messagebox, TclError

import customtkinter as ctk
from PIL import Image

from mirror_flip.controllers.session import SessionState
from mirror_flip.models.image_model import ImageData
from mirror_flip.models.parameters import Parameters
from mirror_flip.ui.bottom_bar import BottomBar
from mirror_flip.ui.preview import PreviewCanvas
from mirror_flip.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с состоянием сеанса.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер -> `SessionState`).
    - Выбор файла для загрузки и пути для сохранения.
    - Синхронизация элементов управления и предпросмотра с состоянием.
    """
    session: SessionState
    preview: PreviewCanvas
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами и сеансом.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_direction_change = self.session.set_direction
        self.sidebar.on_offset_change = self.session.set_offset
        self.sidebar.on_opacity_change = self.session.set_opacity
        self.sidebar.on_generate = self.session.redraw
        self.sidebar.on_download = self._handle_download

        self.bottom.on_zoom_in = self.session.zoom_in
        self.bottom.on_zoom_out = self.session.zoom_out
        self.preview.on_zoom_in = self.session.zoom_in
        self.preview.on_zoom_out = self.session.zoom_out

        self.session.on_frame = self._handle_frame
        self.session.on_image_loaded = self._handle_image_loaded
        self.session.on_parameters_change = self._handle_parameters_change
        self.session.on_error = self._handle_error

        # initial sync + blank frame
        self._handle_parameters_change(self.session.parameters)
        self.session.redraw()

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Upload Image",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.session.load_file(file_path)

    def _handle_download(self) -> None:
        try:
            file_path = filedialog.asksaveasfilename(
                title="Download Image",
                initialfile=self.session.config.export_filename,
                defaultextension=".png",
                filetypes=(("PNG", "*.png"),),
            )
        except TclError:
            return

        if not file_path:
            return
        try:
            self.session.save_png(file_path)
        except OSError as exc:
            logger.error(f"Failed to save {file_path}: {exc}")
            messagebox.showerror("Download Image", f"Не удалось сохранить файл:\n{exc}", parent=self.window)

    def _handle_frame(self, frame: Image.Image) -> None:
        self.preview.show_frame(frame)

    def _handle_image_loaded(self, image: ImageData) -> None:
        self.sidebar.set_image_info(image)

    def _handle_parameters_change(self, params: Parameters) -> None:
        config = self.session.config
        self.sidebar.set_parameters(params)
        self.bottom.set_scale_factor(params.scale_factor, config.min_scale_factor, config.max_scale_factor)

    def _handle_error(self, exc: Exception) -> None:
        messagebox.showerror("Upload Image", str(exc), parent=self.window)
