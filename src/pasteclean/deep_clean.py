"""Composition of the cleaning stages into one HTML-to-HTML transform."""

import logging
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from .config import CleanerConfig
from .lists import ListReconstructor
from .preclean import MarkupPreCleaner
from .sanitize import repair_markup
from .stages import TextStage, TextStageChain, TreeStage, TreeStageChain
from .styles import StyleCleaner

logger = logging.getLogger(__name__)


class PreCleanStage(TreeStage):
    """Strip bookmark spans, empty font tags and name-only anchors."""

    def __init__(self, cleaner: MarkupPreCleaner):
        self._cleaner = cleaner

    @property
    def name(self) -> str:
        return "MarkupPreCleaner"

    @property
    def slug(self) -> str:
        return "pre-clean"

    def process(self, fragment: Tag) -> None:
        self._cleaner.pre_clean(fragment)


class ListStage(TreeStage):
    """Turn Word pseudo-list paragraphs into real lists."""

    def __init__(self, reconstructor: ListReconstructor):
        self._reconstructor = reconstructor

    @property
    def name(self) -> str:
        return "ListReconstructor"

    @property
    def slug(self) -> str:
        return "fix-lists"

    def process(self, fragment: Tag) -> None:
        self._reconstructor.reconstruct(fragment)


class StyleStage(TreeStage):
    """Remove denied declarations from every style attribute."""

    def __init__(self, cleaner: StyleCleaner):
        self._cleaner = cleaner

    @property
    def name(self) -> str:
        return "StyleCleaner"

    @property
    def slug(self) -> str:
        return "clean-styles"

    def process(self, fragment: Tag) -> None:
        self._cleaner.clean_tree(fragment)


class HostSanitizeStage(TextStage):
    """Hand the markup to the host editor's generic sanitizer."""

    def __init__(self, sanitizer: Callable[[str], str]):
        self._sanitizer = sanitizer

    @property
    def name(self) -> str:
        return "HostSanitizer"

    @property
    def slug(self) -> str:
        return "host-sanitize"

    def process(self, html: str) -> str:
        return self._sanitizer(html)


class RepairStage(TextStage):
    """Regex repairs on the sanitizer's serialized output."""

    @property
    def name(self) -> str:
        return "MarkupRepair"

    @property
    def slug(self) -> str:
        return "repair"

    def process(self, html: str) -> str:
        return repair_markup(html)


# Slug -> (name, description), in execution order
STAGES = {
    "pre-clean": ("MarkupPreCleaner", "Unwraps bookmarks, drops empty fonts and name-only anchors"),
    "fix-lists": ("ListReconstructor", "Rebuilds Word pseudo-lists as real lists"),
    "clean-styles": ("StyleCleaner", "Removes mso-*, tab-stops and font-family styles"),
    "host-sanitize": ("HostSanitizer", "Runs the editor's generic HTML sanitizer"),
    "repair": ("MarkupRepair", "Fixes list types, line-height, empty styles and quotes"),
}


class HtmlDeepCleaner:
    """Clean a raw pasted HTML fragment into editor-ready HTML.

    Args:
        sanitizer: The host's generic sanitizer, str -> str.
        config: Cleaner settings; package defaults when omitted.
        disabled: Extra stage slugs to skip on top of config.disabled_stages.
    """

    def __init__(
        self,
        sanitizer: Callable[[str], str],
        config: Optional[CleanerConfig] = None,
        disabled: Optional[set[str]] = None,
    ):
        config = config or CleanerConfig()
        skip = set(config.disabled_stages) | set(disabled or ())
        unknown = skip - STAGES.keys()
        if unknown:
            raise ValueError(f"Unknown stage slugs: {', '.join(sorted(unknown))}")

        self.tree_chain = TreeStageChain()
        self.text_chain = TextStageChain()

        tree_stages = [
            PreCleanStage(MarkupPreCleaner(config.compiled_bookmark_pattern())),
            ListStage(ListReconstructor(config.compiled_list_pattern())),
            StyleStage(StyleCleaner(config.style_rules())),
        ]
        text_stages = [HostSanitizeStage(sanitizer), RepairStage()]

        for stage in tree_stages:
            if stage.slug not in skip:
                self.tree_chain.add(stage)
        for stage in text_stages:
            if stage.slug not in skip:
                self.text_chain.add(stage)

    @property
    def stage_slugs(self) -> list[str]:
        return [s.slug for s in self.tree_chain.stages + self.text_chain.stages]

    def clean_fragment(self, fragment: Tag) -> Tag:
        """Run only the tree stages, in place."""
        return self.tree_chain.execute(fragment)

    def deep_clean(self, raw_html: str) -> str:
        if not raw_html:
            return ""

        fragment = BeautifulSoup(raw_html, "html.parser")
        self.clean_fragment(fragment)
        html = fragment.decode()
        html = self.text_chain.execute(html)

        logger.debug("Deep clean: %d chars in, %d chars out", len(raw_html), len(html))
        return html
