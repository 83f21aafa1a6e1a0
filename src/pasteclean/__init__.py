"""Cleaning of rich text pasted from Word into an editor."""

from .capture import (
    CaptureError,
    CaptureState,
    DummyGrabStrategy,
    PasteCaptureController,
    PasteCleanError,
    SwapRestoreStrategy,
)
from .config import CleanerConfig, load_config
from .deep_clean import HtmlDeepCleaner
from .host import EditorHost
from .insert import CursorAwareInserter
from .lists import ListReconstructor
from .memory import MemoryEditor
from .plugin import install
from .preclean import MarkupPreCleaner
from .selection import Range
from .styles import StyleCleaner, StyleRules, clean_style_attribute

__all__ = [
    "CaptureError",
    "CaptureState",
    "DummyGrabStrategy",
    "PasteCaptureController",
    "PasteCleanError",
    "SwapRestoreStrategy",
    "CleanerConfig",
    "load_config",
    "HtmlDeepCleaner",
    "EditorHost",
    "CursorAwareInserter",
    "ListReconstructor",
    "MemoryEditor",
    "install",
    "MarkupPreCleaner",
    "Range",
    "StyleCleaner",
    "StyleRules",
    "clean_style_attribute",
]
