"""Read-only access to the YAML configuration under BACKOFFICE_CONFIG_DIR."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .contenttypes import ContentType, parse_contenttypes

logger = logging.getLogger(__name__)

# Section name -> file name, relative to the config directory
CONFIG_FILES = {
    "general": "config.yaml",
    "contenttypes": "contenttypes.yaml",
    "taxonomies": "taxonomy.yaml",
    "menu": "menu.yaml",
    "routing": "routing.yaml",
}


class Config:
    """Configuration source.

    Sections are loaded on first access and kept for the lifetime of the
    instance only; build a new ``Config`` to see edits made on disk.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir or settings.BACKOFFICE_CONFIG_DIR)
        self._sections: Dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._sections:
            self._sections[name] = self._load(name)
        value = self._sections[name]
        return default if value is None else value

    def contenttypes(self) -> List[ContentType]:
        return self.get("contenttypes", [])

    def contenttype(self, slug: str) -> ContentType:
        return ContentType.factory(slug, self.contenttypes())

    def path_for(self, name: str) -> Path:
        try:
            return self.config_dir / CONFIG_FILES[name]
        except KeyError:
            raise ImproperlyConfigured(f"Unknown configuration section: {name!r}")

    def _load(self, name: str) -> Any:
        if name == "contenttypes":
            inline = getattr(settings, "BACKOFFICE_CONTENTTYPES", None)
            if inline is not None:
                return parse_contenttypes(inline)
            return parse_contenttypes(self._read_yaml(self.path_for(name)))
        return self._read_yaml(self.path_for(name))

    def _read_yaml(self, path: Path) -> Any:
        if not path.exists():
            logger.debug("Config file %s not found, section left empty", path)
            return None
        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ImproperlyConfigured(f"Invalid YAML in {path}: {exc}") from exc
