"""JSON registry of providers installed into a host project.

File shape::

    {"providers": {"<name>": {"path": "<install path>", "installed_at": "<ISO-8601>"}}}

The chat and configuration layers never read this file; it is bookkeeping
for installer tooling and the ``registry`` CLI subcommand. A missing or
unreadable file is treated as an empty registry.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..base.logging import get_logger, log_event
from ..config.defaults import REGISTRY_DEFAULT_PATH, REGISTRY_FILE_ENV

_logger = get_logger("aihub.registry")


def default_registry_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    return Path(env.get(REGISTRY_FILE_ENV) or REGISTRY_DEFAULT_PATH)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class Registry:
    """Read/modify/write access to the registry file.

    Every mutation is saved immediately; parent directories are created on
    first save.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._data: Dict[str, Any] = {"providers": {}}
        self._load()

    def _load(self) -> None:
        if not self.path.is_file():
            return
        try:
            decoded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log_event(_logger, "registry.unreadable", path=str(self.path), error=str(exc), level=logging.WARNING)
            return
        if isinstance(decoded, dict):
            providers = decoded.get("providers")
            self._data = {**decoded, "providers": providers if isinstance(providers, dict) else {}}

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=4, ensure_ascii=False) + "\n", encoding="utf-8")

    def add_provider(self, name: str, path: str = "") -> Dict[str, str]:
        """Record ``name`` as installed now; re-adding refreshes the timestamp."""
        entry = {"path": path, "installed_at": _now_iso()}
        self._data["providers"][name] = entry
        self.save()
        log_event(_logger, "registry.added", provider=name)
        return entry

    def remove_provider(self, name: str) -> bool:
        """Forget ``name``; returns False when it was not registered."""
        if name not in self._data["providers"]:
            return False
        del self._data["providers"][name]
        self.save()
        log_event(_logger, "registry.removed", provider=name)
        return True

    def has_provider(self, name: str) -> bool:
        return name in self._data["providers"]

    def get_provider_path(self, name: str) -> str:
        entry = self._data["providers"].get(name) or {}
        return str(entry.get("path", "")) if isinstance(entry, dict) else ""

    def providers(self) -> Dict[str, Dict[str, Any]]:
        return {k: dict(v) if isinstance(v, dict) else {} for k, v in self._data["providers"].items()}


__all__ = ["Registry", "default_registry_path"]
