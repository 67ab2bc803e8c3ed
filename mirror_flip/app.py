import customtkinter as ctk

from mirror_flip.config import AppConfig
from mirror_flip.controllers.app_controller import AppController
from mirror_flip.controllers.session import SessionState
from mirror_flip.ui.preview import PreviewCanvas
from mirror_flip.ui.sidebar import Sidebar
from mirror_flip.ui.bottom_bar import BottomBar


class MirrorFlipApp(ctk.CTk):
    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("Mirror Flip Tool")
        self.minsize(760, 520)

        # root layout: left preview, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._preview = PreviewCanvas(self, canvas_size=config.canvas_size)
        self._preview.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self, max_offset=config.max_offset_slider, opacity_step=config.opacity_step)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        # decode and redraw run on the next idle turn of the Tk loop
        self._session = SessionState(config=config, scheduler=self.after_idle)

        self._controller = AppController(
            session=self._session, preview=self._preview, sidebar=self._sidebar, bottom=self._bottom, window=self
        )
        self._controller.bind_events()
