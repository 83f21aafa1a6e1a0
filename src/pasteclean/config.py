"""Configuration loader for the paste cleaning pipeline.

Loads cleaner settings from YAML files with priority resolution:
1. Explicit path passed to load_config() (highest priority)
2. User config: ~/.config/pasteclean/config.yaml
3. Project config: .pasteclean/config.yaml in current directory
4. Package defaults: shipped with pasteclean (fallback)

User and project files only need the keys they override.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .styles import StyleRules

logger = logging.getLogger(__name__)

# Lazy import yaml to avoid startup cost
_yaml = None


def _get_yaml():
    """Lazy-load PyYAML."""
    global _yaml
    if _yaml is None:
        import yaml
        _yaml = yaml
    return _yaml


def _get_package_defaults_path() -> Path:
    """Get path to package default config using importlib.resources."""
    try:
        from importlib.resources import files
        return files("pasteclean.config_data") / "defaults.yaml"
    except (ImportError, TypeError):
        # Fallback for editable installs
        return Path(__file__).parent / "config_data" / "defaults.yaml"


CONFIG_LOCATIONS = [
    Path.home() / ".config" / "pasteclean" / "config.yaml",  # User overrides
    Path.cwd() / ".pasteclean" / "config.yaml",               # Project config
]

STRATEGIES = ("dummy-grab", "swap-restore")


@dataclass(frozen=True)
class CleanerConfig:
    """Immutable settings for one editor's paste cleaning."""
    style_denied_prefixes: tuple[str, ...] = ("mso-",)
    style_denied_properties: tuple[str, ...] = ("tab-stops", "font-family")
    bookmark_pattern: str = "mso-bookmark"
    list_pattern: str = r"mso-list:.+?level(\d+)"
    scroll_buffer: int = 32
    strategy: str = "dummy-grab"
    disabled_stages: frozenset[str] = frozenset()

    def style_rules(self) -> StyleRules:
        return StyleRules(
            denied_prefixes=tuple(p.lower() for p in self.style_denied_prefixes),
            denied_properties=frozenset(p.lower() for p in self.style_denied_properties),
        )

    def compiled_list_pattern(self) -> re.Pattern:
        return re.compile(self.list_pattern, re.IGNORECASE)

    def compiled_bookmark_pattern(self) -> re.Pattern:
        return re.compile(self.bookmark_pattern, re.IGNORECASE)

    @classmethod
    def from_dict(cls, data: dict) -> "CleanerConfig":
        """Build a config from the nested YAML layout.

        Missing sections and keys keep the dataclass defaults.
        """
        style = data.get("style") or {}
        markup = data.get("markup") or {}
        insert = data.get("insert") or {}
        capture = data.get("capture") or {}
        defaults = cls()

        strategy = capture.get("strategy", defaults.strategy)
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown capture strategy: {strategy!r}")

        return cls(
            style_denied_prefixes=tuple(style.get("denied_prefixes", defaults.style_denied_prefixes)),
            style_denied_properties=tuple(style.get("denied_properties", defaults.style_denied_properties)),
            bookmark_pattern=markup.get("bookmark_pattern", defaults.bookmark_pattern),
            list_pattern=markup.get("list_pattern", defaults.list_pattern),
            scroll_buffer=int(insert.get("scroll_buffer", defaults.scroll_buffer)),
            strategy=strategy,
            disabled_stages=frozenset(data.get("disabled_stages") or ()),
        )


def _merge(base: dict, override: dict) -> dict:
    """Merge override into base one section deep."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            section = dict(merged[key])
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value
    return merged


def _read_yaml(config_file) -> Optional[dict]:
    """Read a YAML mapping, returning None if it is unreadable or invalid."""
    yaml = _get_yaml()
    try:
        content = config_file.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", config_file, e)
        return None

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", config_file)
        return None
    return data


def find_config_file() -> Optional[Path]:
    """Return the first user or project config file that exists."""
    for config_file in CONFIG_LOCATIONS:
        if config_file.exists():
            return config_file
    return None


def load_config(path: Optional[Path] = None) -> CleanerConfig:
    """Load the cleaner config.

    Args:
        path: Explicit config file. Must exist when given.

    Returns:
        CleanerConfig with user values merged over package defaults.
    """
    data = _read_yaml(_get_package_defaults_path()) or {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        config_file = path
    else:
        config_file = find_config_file()

    if config_file is not None:
        override = _read_yaml(config_file)
        if override:
            logger.debug("Loaded config overrides from %s", config_file)
            data = _merge(data, override)

    return CleanerConfig.from_dict(data)
