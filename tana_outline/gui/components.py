"""Widgets of the converter window."""

import customtkinter as ctk
from pathlib import Path
from tkinter import filedialog
from typing import Callable, List, Optional

from .styles import (
    BUTTON_WIDTH,
    ENTRY_WIDTH,
    ERROR_COLOR,
    LABEL_WIDTH,
    LOG_TAB,
    PAGES_TAB,
    RESULTS_HEIGHT,
)


class PathField(ctk.CTkFrame):
    """Editable path entry with a browse button and an error line below it."""

    def __init__(
        self,
        parent,
        label_text: str,
        choose_directory: bool = False,
        filetypes: list = None,
        on_change: Optional[Callable[[Path], None]] = None,
        **kwargs
    ):
        super().__init__(parent, **kwargs)

        self.label_text = label_text
        self.choose_directory = choose_directory
        self.filetypes = filetypes or [("All files", "*.*")]
        self.on_change = on_change

        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text=label_text, width=LABEL_WIDTH, anchor="w").grid(
            row=0, column=0, padx=(10, 5), pady=(8, 0), sticky="w"
        )
        self.entry = ctk.CTkEntry(self, width=ENTRY_WIDTH)
        self.entry.grid(row=0, column=1, padx=5, pady=(8, 0), sticky="ew")
        ctk.CTkButton(self, text="Browse...", width=BUTTON_WIDTH, command=self._browse).grid(
            row=0, column=2, padx=(5, 10), pady=(8, 0)
        )

        self.error_label = ctk.CTkLabel(self, text="", text_color=ERROR_COLOR, anchor="w")
        self.error_label.grid(row=1, column=1, columnspan=2, padx=5, pady=(0, 4), sticky="w")

    def _browse(self):
        title = f"Select {self.label_text.rstrip(':')}"
        if self.choose_directory:
            chosen = filedialog.askdirectory(title=title)
        else:
            chosen = filedialog.askopenfilename(title=title, filetypes=self.filetypes)

        if chosen:
            self.set_path(Path(chosen))
            if self.on_change:
                self.on_change(Path(chosen))

    def get_path(self) -> Optional[Path]:
        """Return the typed or chosen path, or None when the entry is blank."""
        text = self.entry.get().strip()
        return Path(text) if text else None

    def set_path(self, path: Path):
        self.entry.delete(0, "end")
        self.entry.insert(0, str(path))
        self.clear_error()

    def set_error(self, message: str):
        self.error_label.configure(text=message)

    def clear_error(self):
        self.error_label.configure(text="")


class ProgressPanel(ctk.CTkFrame):
    """Phase line and progress bar."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)

        self.status_label = ctk.CTkLabel(self, text="Ready", anchor="w")
        self.status_label.pack(fill="x", padx=15, pady=(10, 4))

        self.bar = ctk.CTkProgressBar(self)
        self.bar.pack(fill="x", padx=15, pady=(0, 10))
        self.bar.set(0)

    def set_status(self, text: str):
        self.status_label.configure(text=text)

    def set_fraction(self, value: float):
        """Move the bar; values outside 0..1 are clamped."""
        self.bar.set(max(0.0, min(1.0, value)))

    def reset(self):
        self.set_status("Ready")
        self.bar.set(0)


class ResultTabs(ctk.CTkTabview):
    """Log of the current run and the list of pages it wrote."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, height=RESULTS_HEIGHT, **kwargs)

        self.log_box = self._add_text_tab(LOG_TAB)
        self.pages_box = self._add_text_tab(PAGES_TAB)
        self.set(LOG_TAB)

    def _add_text_tab(self, name: str) -> ctk.CTkTextbox:
        tab = self.add(name)
        textbox = ctk.CTkTextbox(tab, state="disabled")
        textbox.pack(fill="both", expand=True)
        return textbox

    def log(self, message: str):
        _append(self.log_box, message)

    def show_pages(self, page_files: List[str]):
        """List the written page files, sorted, and bring the tab forward."""
        _replace(self.pages_box, "\n".join(sorted(page_files, key=str.lower)))
        self.set(PAGES_TAB)

    def clear(self):
        _replace(self.log_box, "")
        _replace(self.pages_box, "")
        self.set(LOG_TAB)


def _append(textbox: ctk.CTkTextbox, line: str):
    textbox.configure(state="normal")
    textbox.insert("end", line + "\n")
    textbox.see("end")
    textbox.configure(state="disabled")


def _replace(textbox: ctk.CTkTextbox, text: str):
    textbox.configure(state="normal")
    textbox.delete("1.0", "end")
    textbox.insert("1.0", text)
    textbox.configure(state="disabled")
