"""Виджет предпросмотра: показывает последний кадр холста и принимает зум колесом мыши.

Принципы:
- SRP: отвечает только за представление кадра; рисует кадр `CompositorService`.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class PreviewCanvas(ctk.CTkFrame):
    """Квадратная канва фиксированного размера с кадром по центру."""
    def __init__(self, master: ctk.CTk | tk.Misc, canvas_size: int, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas_size = canvas_size
        self._canvas = tk.Canvas(
            self,
            width=canvas_size,
            height=canvas_size,
            highlightthickness=0,
            bg=self._get_canvas_bg(),
        )
        self._canvas.grid(row=0, column=0, padx=8, pady=8)

        self._tk_frame: Optional[ImageTk.PhotoImage] = None
        self._frame_item: Optional[int] = None

        self.on_zoom_in: Optional[Callable[[], None]] = None
        self.on_zoom_out: Optional[Callable[[], None]] = None

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

    # ---- Public API ----
    def show_frame(self, frame: Image.Image) -> None:
        """Отображает кадр; PhotoImage хранится в атрибуте, иначе Tk потеряет его при сборке мусора."""
        self._tk_frame = ImageTk.PhotoImage(frame)
        if self._frame_item is None:
            self._frame_item = self._canvas.create_image(0, 0, image=self._tk_frame, anchor="nw")
        else:
            self._canvas.itemconfigure(self._frame_item, image=self._tk_frame)

    # ---- Internals ----
    def _get_canvas_bg(self) -> str:
        # Soft checker-like color; CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta == 0:
            return
        self._emit_zoom(event.delta > 0)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        self._emit_zoom(getattr(event, "num", None) == 4)

    def _emit_zoom(self, zoom_in: bool) -> None:
        callback = self.on_zoom_in if zoom_in else self.on_zoom_out
        if callback:
            callback()
