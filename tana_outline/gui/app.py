"""Main window: choose an export and an output folder, convert, review the pages."""

import threading
from pathlib import Path
from tkinter import messagebox
from typing import List, Optional

import customtkinter as ctk

from tana_outline.core.converter import TanaToOutline
from tana_outline.core.exceptions import InvalidPathError
from tana_outline.core.models import ConversionSettings, ConversionProgress, ConversionResult

from .components import PathField, ProgressPanel, ResultTabs
from .styles import (
    CONVERT_BUTTON_WIDTH,
    PAD_X,
    PAD_Y,
    WINDOW_GEOMETRY,
    WINDOW_MIN_SIZE,
    WINDOW_TITLE,
)


def describe_progress(progress: ConversionProgress) -> str:
    """Status line for a progress update, with a counter when the phase has a total."""
    if progress.total > 0:
        return f"{progress.phase} ({progress.current}/{progress.total})"
    return progress.phase


def summarize(result: ConversionResult) -> List[str]:
    """Log lines for a finished run."""
    if not result.success:
        return ["Conversion failed", f"Error: {result.error_message}"]
    return [
        f"Nodes resolved: {result.nodes_count}",
        f"Blocks built: {result.blocks_count}",
        f"Pages written: {result.pages_written}",
        f"Finish in {result.elapsed_seconds:.3f}s",
    ]


class TanaToOutlineApp(ctk.CTk):
    """Converter window. The conversion runs on a worker thread."""

    def __init__(self):
        super().__init__()

        self.title(WINDOW_TITLE)
        self.geometry(WINDOW_GEOMETRY)
        self.minsize(*WINDOW_MIN_SIZE)

        self.worker: Optional[threading.Thread] = None

        self._create_widgets()
        self._setup_layout()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _create_widgets(self):
        self.paths_frame = ctk.CTkFrame(self)
        self.input_field = PathField(
            self.paths_frame,
            label_text="Tana export:",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
            on_change=self._on_input_chosen,
        )
        self.output_field = PathField(
            self.paths_frame,
            label_text="Output folder:",
            choose_directory=True,
        )

        self.convert_button = ctk.CTkButton(
            self,
            text="Convert",
            width=CONVERT_BUTTON_WIDTH,
            command=self._start_conversion,
        )
        self.progress_panel = ProgressPanel(self)
        self.result_tabs = ResultTabs(self)

    def _setup_layout(self):
        self.paths_frame.pack(fill="x", padx=PAD_X, pady=(PAD_Y + 5, PAD_Y))
        self.input_field.pack(fill="x")
        self.output_field.pack(fill="x")

        self.convert_button.pack(anchor="e", padx=PAD_X)
        self.progress_panel.pack(fill="x", padx=PAD_X, pady=PAD_Y)
        self.result_tabs.pack(fill="both", expand=True, padx=PAD_X, pady=(0, PAD_Y + 5))

    def _on_input_chosen(self, path: Path):
        """Propose `<stem>-pages` beside the export while no output folder is set."""
        if self.output_field.get_path() is None:
            self.output_field.set_path(path.parent / f"{path.stem}-pages")

    def _collect_settings(self) -> Optional[ConversionSettings]:
        """Read both fields and check them, showing each problem under its own field.

        Returns None when either path is missing or invalid.
        """
        json_path = self.input_field.get_path()
        output_dir = self.output_field.get_path()
        self.input_field.clear_error()
        self.output_field.clear_error()

        if json_path is None:
            self.input_field.set_error("Choose a Tana export JSON file")
        if output_dir is None:
            self.output_field.set_error("Choose an output folder")
        if json_path is None or output_dir is None:
            return None

        settings = ConversionSettings(json_path=json_path, output_dir=output_dir)
        valid = True
        for check, path_field in (
            (settings.check_input, self.input_field),
            (settings.check_output, self.output_field),
        ):
            try:
                check()
            except InvalidPathError as e:
                path_field.set_error(str(e))
                valid = False

        return settings if valid else None

    def _start_conversion(self):
        settings = self._collect_settings()
        if settings is None:
            return

        self.convert_button.configure(state="disabled")
        self.progress_panel.reset()
        self.result_tabs.clear()
        self.result_tabs.log(f"Converting {settings.json_path} into {settings.output_dir}")

        self.worker = threading.Thread(target=self._run_conversion, args=(settings,), daemon=True)
        self.worker.start()

    def _run_conversion(self, settings: ConversionSettings):
        """Worker thread body. Widgets are only touched through after()."""
        result = TanaToOutline(settings, progress_callback=self._on_progress).run()
        self.after(0, self._on_complete, result)

    def _on_progress(self, progress: ConversionProgress):
        # Called on the worker thread
        self.after(0, self._show_progress, progress)

    def _show_progress(self, progress: ConversionProgress):
        self.progress_panel.set_status(describe_progress(progress))
        if progress.total > 0:
            self.progress_panel.set_fraction(progress.current / progress.total)
        if progress.message:
            self.result_tabs.log(f"[{progress.phase}] {progress.message}")

    def _on_complete(self, result: ConversionResult):
        self.convert_button.configure(state="normal")
        for line in summarize(result):
            self.result_tabs.log(line)

        if result.success:
            self.progress_panel.set_fraction(1.0)
            self.progress_panel.set_status(f"Wrote {result.pages_written} pages")
            self.result_tabs.show_pages(result.page_files)
        else:
            self.progress_panel.set_fraction(0.0)
            self.progress_panel.set_status("Conversion failed")
            messagebox.showerror("Conversion failed", result.error_message)

    def _on_close(self):
        if self.worker and self.worker.is_alive():
            if not messagebox.askyesno(
                "Conversion running",
                "Pages are still being written. Quit anyway?"
            ):
                return
        self.destroy()


def launch():
    """Start the desktop application."""
    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    app = TanaToOutlineApp()
    app.mainloop()
