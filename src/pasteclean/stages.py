"""Base stage classes for tree and text cleaning."""

from abc import ABC, abstractmethod
from typing import Optional

from bs4 import Tag


class CleanStage(ABC):
    """Common interface of every cleaning stage."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable stage name."""
        pass

    @property
    @abstractmethod
    def slug(self) -> str:
        """Canonical slug for --disable flags and config (e.g., 'fix-lists')."""
        pass


class TreeStage(CleanStage):
    """Stage that transforms a parsed fragment in place."""

    @abstractmethod
    def process(self, fragment: Tag) -> None:
        pass

    def should_process(self, fragment: Tag) -> bool:
        """Return True if this stage should handle this fragment."""
        return True


class TextStage(CleanStage):
    """Stage that transforms serialized HTML."""

    @abstractmethod
    def process(self, html: str) -> str:
        pass

    def should_process(self, html: str) -> bool:
        """Return True if this stage should handle this markup."""
        return bool(html)


class TreeStageChain:
    """Chain of tree stages executed in order."""

    def __init__(self, stages: Optional[list[TreeStage]] = None):
        self.stages = stages or []

    def add(self, stage: TreeStage) -> None:
        self.stages.append(stage)

    def execute(self, fragment: Tag) -> Tag:
        for stage in self.stages:
            if stage.should_process(fragment):
                stage.process(fragment)
        return fragment


class TextStageChain:
    """Chain of text stages, each receiving the previous stage's output."""

    def __init__(self, stages: Optional[list[TextStage]] = None):
        self.stages = stages or []

    def add(self, stage: TextStage) -> None:
        self.stages.append(stage)

    def execute(self, html: str) -> str:
        for stage in self.stages:
            if stage.should_process(html):
                html = stage.process(html)
        return html
