"""Bridge crate generation for Android builds."""

from .atlas import DEFAULT_ATLAS, GlyphAtlasLayout
from .generator import BRIDGE_CRATE_NAME, BRIDGE_LIBRARY_FILENAME, BridgeGenerator
from .jni import native_symbol

__all__ = [
    "BRIDGE_CRATE_NAME",
    "BRIDGE_LIBRARY_FILENAME",
    "BridgeGenerator",
    "DEFAULT_ATLAS",
    "GlyphAtlasLayout",
    "native_symbol",
]
