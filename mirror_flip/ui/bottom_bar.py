from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_zoom_in: Optional[Callable[[], None]] = None
        self.on_zoom_out: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)

        self._zoom_out_btn = ctk.CTkButton(self, text="−", width=40, command=self._emit_zoom_out)
        self._zoom_out_btn.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=64)
        self._zoom_value_label.grid(row=0, column=1, padx=6, pady=8)

        self._zoom_in_btn = ctk.CTkButton(self, text="+", width=40, command=self._emit_zoom_in)
        self._zoom_in_btn.grid(row=0, column=2, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_scale_factor(self, scale_factor: float, min_factor: float, max_factor: float) -> None:
        self._zoom_value.set(f"{int(round(scale_factor * 100))}%")
        # zoom is a no-op at the bounds
        self._zoom_out_btn.configure(state="disabled" if scale_factor <= min_factor else "normal")
        self._zoom_in_btn.configure(state="disabled" if scale_factor >= max_factor else "normal")

    # events
    def _emit_zoom_in(self) -> None:
        if self.on_zoom_in:
            self.on_zoom_in()

    def _emit_zoom_out(self) -> None:
        if self.on_zoom_out:
            self.on_zoom_out()
