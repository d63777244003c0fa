"""Main application window."""

import logging
import threading
import tkinter as tk
from io import BytesIO
from typing import Optional

import customtkinter as ctk
import requests
from customtkinter import CTkImage
from PIL import Image

from ..core import (
    RelayClient,
    TubeRelayError,
    VideoInfo,
    extract_video_id,
    is_valid_youtube_url,
    select_download_url,
)
from ..core.selection import DEFAULT_QUALITY
from ..utils import Config, generate_filename
from ..version import __version__
from .components import COLORS, FORMAT_CHOICES, QUALITY_LABELS, make_fonts
from .download_item import DownloadItem, DownloadTask

logger = logging.getLogger(__name__)

# Configure CustomTkinter theme
ctk.set_appearance_mode("dark")
ctk.set_default_color_theme("blue")

THUMB_SIZE = (128, 80)


class TubeRelayApp(ctk.CTk):
    """Paste a link, pick a format and download it through the relay."""

    def __init__(self, config: Optional[Config] = None, relay: Optional[RelayClient] = None):
        super().__init__()
        self.title(f"TubeRelay v{__version__}")
        self.geometry("720x760")
        self.configure(fg_color=COLORS["background_dark"])

        self.config_store = config or Config()
        self.relay = relay or RelayClient(self.config_store.server_url)
        self.fonts = make_fonts()

        # Data
        self.media_format = "mp4"
        self.video_info: Optional[VideoInfo] = None
        self.download_url = ""
        self.task: Optional[DownloadTask] = None
        self.download_item: Optional[DownloadItem] = None

        self.grid_columnconfigure(0, weight=1)
        self.create_header()
        self.create_form()
        self.create_result_area()

    def create_header(self):
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, pady=(32, 16))
        ctk.CTkLabel(header, text="YouTube Downloader", font=self.fonts["h1"],
                     text_color=COLORS["primary"]).pack()
        ctk.CTkLabel(header, text="Download high quality video and audio",
                     font=self.fonts["body"], text_color=COLORS["text_secondary"]).pack(pady=(6, 0))

    def create_form(self):
        card = ctk.CTkFrame(self, fg_color=COLORS["surface_dark"], corner_radius=16,
                            border_width=1, border_color=COLORS["border"])
        card.grid(row=1, column=0, sticky="ew", padx=32)

        ctk.CTkLabel(card, text="YouTube link", font=self.fonts["small"],
                     text_color=COLORS["text_secondary"]).pack(anchor="w", padx=24, pady=(20, 4))

        url_row = ctk.CTkFrame(card, fg_color="transparent")
        url_row.pack(fill="x", padx=24)
        self.url_var = ctk.StringVar()
        self.url_entry = ctk.CTkEntry(url_row, textvariable=self.url_var, height=44,
                                      placeholder_text="https://www.youtube.com/watch?v=...",
                                      fg_color=COLORS["input_bg"], font=self.fonts["body"])
        self.url_entry.pack(side="left", fill="x", expand=True)
        self.url_entry.bind('<Return>', lambda e: self.convert())
        ctk.CTkButton(url_row, text="Paste", width=70, height=44, command=self.paste_clip,
                      fg_color="transparent", border_width=1,
                      border_color=COLORS["border"]).pack(side="right", padx=(8, 0))

        options = ctk.CTkFrame(card, fg_color="transparent")
        options.pack(fill="x", padx=24, pady=16)

        self.format_var = ctk.StringVar(value="MP4")
        ctk.CTkSegmentedButton(options, values=FORMAT_CHOICES, variable=self.format_var,
                               command=self.on_format_change,
                               selected_color=COLORS["primary"]).pack(side="left")

        self.quality_var = ctk.StringVar()
        self.quality_menu = ctk.CTkOptionMenu(options, variable=self.quality_var, values=[],
                                              fg_color=COLORS["input_bg"])
        self.quality_menu.pack(side="right")
        self._reset_quality()

        self.error_label = ctk.CTkLabel(card, text="", font=self.fonts["small"],
                                        text_color=COLORS["accent_error"], wraplength=560)
        self.error_label.pack(fill="x", padx=24)

        self.convert_btn = ctk.CTkButton(card, text="Convert", height=48, font=self.fonts["h2"],
                                         fg_color=COLORS["primary"],
                                         hover_color=COLORS["primary_hover"],
                                         command=self.convert)
        self.convert_btn.pack(fill="x", padx=24, pady=(8, 24))

    def create_result_area(self):
        self.result_frame = ctk.CTkFrame(self, fg_color="transparent")
        self.result_frame.grid(row=2, column=0, sticky="ew", padx=32, pady=16)

    def paste_clip(self):
        """Paste URL from clipboard into the URL entry field."""
        try:
            clipboard_text = self.clipboard_get()
        except tk.TclError:  # empty clipboard
            return
        if clipboard_text:
            self.url_var.set(clipboard_text.strip())

    def _reset_quality(self):
        labels = QUALITY_LABELS[self.media_format]
        self.quality_menu.configure(values=list(labels))
        default = DEFAULT_QUALITY[self.media_format]
        self.quality_var.set(next(k for k, v in labels.items() if v == default))

    @property
    def quality(self) -> str:
        return QUALITY_LABELS[self.media_format][self.quality_var.get()]

    def on_format_change(self, value: str):
        self.media_format = value.lower()
        self._reset_quality()

    def show_error(self, message: str):
        self.error_label.configure(text=message)

    def clear_result(self):
        for widget in self.result_frame.winfo_children():
            widget.destroy()
        self.video_info = None
        self.download_url = ""
        self.download_item = None

    def convert(self):
        """Validate the link and resolve it through the relay."""
        self.show_error("")
        self.clear_result()

        url = self.url_var.get().strip()
        if not url:
            self.show_error("Please enter a YouTube link")
            return
        if not is_valid_youtube_url(url):
            self.show_error("Invalid YouTube link. Please check it and try again.")
            return
        video_id = extract_video_id(url)
        if not video_id:
            self.show_error("Could not extract the video ID. Please check the YouTube URL.")
            return

        self.convert_btn.configure(state="disabled", text="Processing...")
        threading.Thread(target=self._convert_worker,
                         args=(video_id, self.media_format, self.quality), daemon=True).start()

    def _convert_worker(self, video_id: str, media_format: str, quality: str):
        try:
            info = self.relay.resolve_video(video_id)
            url = select_download_url(info, media_format, quality)
            self.after(0, lambda: self.show_result(info, url))
        except TubeRelayError as e:
            logger.error(f"API error: {e}")
            self.after(0, lambda msg=str(e): self.show_error(msg))
        except Exception as e:
            logger.error(f"Convert error: {e}", exc_info=True)
            self.after(0, lambda msg=f"Could not process the video: {e}": self.show_error(msg))
        finally:
            self.after(0, lambda: self.convert_btn.configure(state="normal", text="Convert"))

    def show_result(self, info: VideoInfo, download_url: str):
        self.video_info = info
        self.download_url = download_url

        card = ctk.CTkFrame(self.result_frame, fg_color=COLORS["surface_dark"], corner_radius=12,
                            border_width=1, border_color=COLORS["primary"])
        card.pack(fill="x")

        self.result_thumb = ctk.CTkLabel(card, text="No thumbnail", width=THUMB_SIZE[0],
                                         height=THUMB_SIZE[1], fg_color=COLORS["input_bg"],
                                         corner_radius=8)
        self.result_thumb.pack(side="left", padx=16, pady=16)
        if info.thumbnail_url:
            threading.Thread(target=self._load_result_thumb, args=(info.thumbnail_url,),
                             daemon=True).start()

        text = ctk.CTkFrame(card, fg_color="transparent")
        text.pack(side="left", fill="both", expand=True, pady=16)
        ready = "Ready to download" if download_url else "No downloadable format found"
        ctk.CTkLabel(text, text=ready, font=self.fonts["small"],
                     text_color=COLORS["primary"]).pack(anchor="w")
        ctk.CTkLabel(text, text=info.title, font=self.fonts["h2"], wraplength=420,
                     justify="left", text_color=COLORS["text_primary"]).pack(anchor="w")
        ctk.CTkLabel(text, text=f"Duration: {info.duration_label}", font=self.fonts["small"],
                     text_color=COLORS["text_secondary"]).pack(anchor="w")
        ctk.CTkLabel(text, text=f"Channel: {info.author}", font=self.fonts["small"],
                     text_color=COLORS["text_secondary"]).pack(anchor="w")

        if download_url:
            self.download_btn = ctk.CTkButton(
                self.result_frame, height=48, font=self.fonts["h2"],
                text=f"Download {self.media_format.upper()} - {self.quality}",
                fg_color=COLORS["primary"], hover_color=COLORS["primary_hover"],
                command=self.start_download,
            )
            self.download_btn.pack(fill="x", pady=(16, 8))

    def _load_result_thumb(self, url: str):
        """Load result thumbnail."""
        try:
            resp = requests.get(url, timeout=10, headers={'User-Agent': 'Mozilla/5.0'})
            resp.raise_for_status()
            pil_img = Image.open(BytesIO(resp.content))
            pil_img = pil_img.resize(THUMB_SIZE, Image.Resampling.LANCZOS)
        except (requests.RequestException, OSError) as e:
            logger.warning(f"Error loading thumbnail: {e}")
            return

        ctk_img = CTkImage(light_image=pil_img, dark_image=pil_img, size=THUMB_SIZE)

        def update_thumb(img=ctk_img):
            if self.result_thumb.winfo_exists():
                self.result_thumb.configure(image=img, text="")
                self.result_thumb.image = img

        self.after(0, update_thumb)

    def start_download(self):
        if not self.download_url or not self.video_info:
            return
        if self.task and self.task.is_downloading:
            return

        self.show_error("")
        filename = generate_filename(self.video_info.title, self.media_format)
        self.task = DownloadTask(self.video_info.title, self.download_url, filename,
                                 self.config_store.download_path, self.relay.proxy_endpoint)

        if self.download_item is not None:
            self.download_item.destroy()
        self.download_item = DownloadItem(self.result_frame, self.task, self.fonts)
        self.download_item.pack(fill="x")

        self.download_btn.configure(state="disabled")
        self.task.add_observer(self.on_task_update)
        self.task.start()

    def on_task_update(self, task: DownloadTask):
        self.after(0, lambda: self._sync_download_state(task))

    def _sync_download_state(self, task: DownloadTask):
        if task.is_downloading:
            return
        if self.download_btn.winfo_exists():
            self.download_btn.configure(state="normal")
        if task.error_msg:
            self.show_error(task.error_msg)
