"""Installed-provider registry file."""

from .registry import Registry, default_registry_path

__all__ = ["Registry", "default_registry_path"]
