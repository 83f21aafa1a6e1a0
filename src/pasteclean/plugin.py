"""Registration of the paste cleaner with an editor."""

import logging
from typing import Optional

from .capture import CAPTURE_STRATEGIES, PasteCaptureController
from .config import CleanerConfig, load_config
from .deep_clean import HtmlDeepCleaner
from .host import EditorHost
from .insert import CursorAwareInserter

logger = logging.getLogger(__name__)


def install(host: EditorHost, config: Optional[CleanerConfig] = None) -> PasteCaptureController:
    """Build a controller for host from config and hook it to paste events.

    When config is None it is loaded from the usual config locations.
    """
    if config is None:
        config = load_config()

    try:
        strategy_cls = CAPTURE_STRATEGIES[config.strategy]
    except KeyError:
        raise ValueError(f"Unknown capture strategy: {config.strategy!r}") from None

    controller = PasteCaptureController(
        host,
        cleaner=HtmlDeepCleaner(host.sanitize_html, config),
        strategy=strategy_cls(),
        inserter=CursorAwareInserter(host, scroll_buffer=config.scroll_buffer),
    )
    controller.attach()
    logger.debug("Paste cleaner installed with %s strategy", config.strategy)
    return controller
