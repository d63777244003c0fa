"""UI components for TubeRelay."""

from .main_window import TubeRelayApp
from .download_item import DownloadItem, DownloadTask

__all__ = ["TubeRelayApp", "DownloadItem", "DownloadTask"]
