"""Download task model and its progress widget."""

import logging
import threading
from pathlib import Path
from typing import Optional

import customtkinter as ctk

from ..core import DownloadError, DownloadProgress, ProxyDownloader
from ..utils import format_file_size
from .components import COLORS

logger = logging.getLogger(__name__)


class DownloadTask:
    """Handles the download logic and state (Model)."""
    def __init__(self, title: str, url: str, filename: str, download_dir: Path,
                 proxy_endpoint: str):
        self.title_text = title
        self.url = url
        self.filename = filename
        self.download_dir = download_dir
        self.proxy_endpoint = proxy_endpoint

        # State
        self.is_downloading = False
        self.error_msg: Optional[str] = None
        self.progress: Optional[DownloadProgress] = None
        self.saved_path: Optional[Path] = None
        self.status_text = "Waiting..."

        # Callbacks for UI updates: func(task)
        self.observers = []

    def start(self):
        """Start the download on a worker thread."""
        if self.is_downloading:
            return
        self.is_downloading = True
        self.error_msg = None
        self.progress = None
        self.status_text = "Downloading..."
        self._notify()

        threading.Thread(target=self._run_download, daemon=True).start()

    def add_observer(self, callback):
        self.observers.append(callback)
        callback(self)

    def remove_observer(self, callback):
        if callback in self.observers:
            self.observers.remove(callback)

    def _notify(self):
        for cb in list(self.observers):
            cb(self)

    def _run_download(self):
        downloader = ProxyDownloader(
            self.url, self.filename, self.download_dir, self.proxy_endpoint,
            progress_callback=self._update_progress,
        )
        try:
            self.saved_path = downloader.start()
            if self.saved_path is None:
                self.status_text = "Opened in browser"
            else:
                self.status_text = "Completed"
        except DownloadError as e:
            logger.error(f"Download error: {e}")
            self.error_msg = str(e)
            self.status_text = "Download failed"
        except Exception as e:
            logger.error(f"Task error: {e}", exc_info=True)
            self.error_msg = f"Download error: {e}"
            self.status_text = "Download failed"
        finally:
            self.is_downloading = False
            self._notify()

    def _update_progress(self, progress: DownloadProgress):
        self.progress = progress
        self.status_text = f"Downloading... {progress.percentage}%"
        self._notify()


class DownloadItem(ctk.CTkFrame):
    """View widget for a DownloadTask."""

    def __init__(self, parent, task: DownloadTask, fonts: dict):
        super().__init__(parent, fg_color=COLORS["surface_dark"], corner_radius=12)
        self.task = task
        self.fonts = fonts
        self.setup_ui()

        # Subscribe to task updates
        self.task.add_observer(self.on_task_update)

    def destroy(self):
        # Unsubscribe before destroying
        self.task.remove_observer(self.on_task_update)
        super().destroy()

    def setup_ui(self):
        meta = ctk.CTkFrame(self, fg_color="transparent")
        meta.pack(fill="x", padx=16, pady=(12, 4))

        self.lbl_size = ctk.CTkLabel(meta, text="", font=self.fonts["small"],
                                     text_color=COLORS["text_secondary"])
        self.lbl_size.pack(side="left")

        self.lbl_status = ctk.CTkLabel(meta, text="", font=self.fonts["small"],
                                       text_color=COLORS["primary"])
        self.lbl_status.pack(side="right")

        self.progress_bar = ctk.CTkProgressBar(self, height=8, corner_radius=4,
                                               progress_color=COLORS["primary"],
                                               fg_color=COLORS["border"])
        self.progress_bar.set(0)
        self.progress_bar.pack(fill="x", padx=16, pady=(0, 12))

    def on_task_update(self, task):
        """Update UI based on task state."""
        # Use after() to ensure thread safety with Tkinter
        self.after(0, self._update_ui_safe)

    def _update_ui_safe(self):
        if not self.winfo_exists():
            return

        progress = self.task.progress
        if progress:
            self.progress_bar.set(progress.percentage / 100.0)
            self.lbl_size.configure(
                text=f"{format_file_size(progress.loaded)} / {format_file_size(progress.total)}"
            )

        if self.task.error_msg:
            self.lbl_status.configure(text=self.task.status_text, text_color=COLORS["accent_error"])
        elif self.task.saved_path:
            self.progress_bar.set(1)
            self.lbl_status.configure(text=f"Saved to {self.task.saved_path}",
                                      text_color=COLORS["accent_green"])
        else:
            self.lbl_status.configure(text=self.task.status_text, text_color=COLORS["primary"])
