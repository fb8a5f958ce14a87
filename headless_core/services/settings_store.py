"""Option storage, settings sanitisation and legacy settings migration."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from headless_core.models.settings import HeadlessSettings
from headless_core.services.normalizer import sanitize_text_field

logger = logging.getLogger(__name__)

OPTION_NAME = "headless_config"
VERSION_OPTION = "headless_core_version"
LEGACY_404_OPTION = "options_error_404_page"


class OptionStore:
    """Key/value option storage.

    Backed by a JSON file when *path* is given, in-memory otherwise. The file
    is rewritten on every update.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path else None
        self._options: Dict[str, Any] = {}
        if self._path and self._path.exists():
            self._options = json.loads(self._path.read_text(encoding="utf-8"))

    def get(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def update(self, name: str, value: Any) -> None:
        self._options[name] = value
        self._flush()

    def delete(self, name: str) -> None:
        self._options.pop(name, None)
        self._flush()

    def _flush(self) -> None:
        if self._path is None:
            return
        self._path.write_text(json.dumps(self._options, indent=2), encoding="utf-8")


def parse_content_id(value: Any) -> Optional[int]:
    """Return *value* as a non-negative integer id, or *None* when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def sanitize_settings(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Clean raw settings form input before it is stored.

    ``error_404_page`` is kept only when it is a valid id; every other value
    is reduced to plain text.
    """
    sanitized: Dict[str, Any] = {}
    if not raw:
        return sanitized

    for key, value in raw.items():
        if key == "error_404_page":
            page_id = parse_content_id(value)
            if page_id is None:
                logger.debug("Dropping invalid error_404_page value %r", value)
                continue
            sanitized[key] = page_id
            continue

        sanitized[key] = sanitize_text_field(value)

    return sanitized


def load_settings(store: OptionStore) -> HeadlessSettings:
    """Read the ``headless_config`` option into a typed value.

    Unknown or malformed stored values fall back to defaults.
    """
    raw = store.get(OPTION_NAME)
    if not isinstance(raw, dict):
        return HeadlessSettings()
    return HeadlessSettings(**sanitize_settings(raw))


def save_settings(store: OptionStore, raw: Optional[Mapping[str, Any]]) -> HeadlessSettings:
    sanitized = sanitize_settings(raw)
    store.update(OPTION_NAME, sanitized)
    return HeadlessSettings(**sanitized)


def migrate_settings(store: OptionStore, version: str) -> bool:
    """Move the legacy 404 page setting into ``headless_config``.

    Runs once per version. Returns *True* when settings were migrated.
    """
    if store.get(VERSION_OPTION) == version:
        return False

    store.update(VERSION_OPTION, version)

    error_404_page = parse_content_id(store.get(LEGACY_404_OPTION))
    if not error_404_page:
        return False

    store.update(OPTION_NAME, {"error_404_page": error_404_page})
    logger.info("Migrated legacy headless settings", extra={"version": version})
    return True
