"""Shared UI constants for the CustomTkinter views."""

import customtkinter as ctk

COLORS = {
    "primary": "#06b6d4",
    "primary_hover": "#0891b2",
    "background_dark": "#1e293b",
    "surface_dark": "#334155",
    "text_primary": "#ecfeff",
    "text_secondary": "#94a3b8",
    "border": "#475569",
    "input_bg": "#0f172a",
    "accent_green": "#22c55e",
    "accent_error": "#ef4444",
}

FORMAT_CHOICES = ["MP4", "MP3"]

QUALITY_LABELS = {
    "mp4": {"720p (HD)": "720p", "480p": "480p", "360p": "360p"},
    "mp3": {"128 kbps": "128kbps", "192 kbps": "192kbps", "320 kbps (Highest)": "320kbps"},
}


def make_fonts() -> dict:
    """Standardized font set - Helvetica system font."""
    return {
        "h1": ctk.CTkFont(family="Helvetica", size=32, weight="bold"),
        "h2": ctk.CTkFont(family="Helvetica", size=18, weight="bold"),
        "body": ctk.CTkFont(family="Helvetica", size=15),
        "small": ctk.CTkFont(family="Helvetica", size=12),
    }
