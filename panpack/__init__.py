"""Build and package PanPan game crates for Android and desktop."""

__version__ = "0.1.0"
