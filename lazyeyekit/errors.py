from __future__ import annotations


class LazyEyeKitError(Exception):
    """Base for errors raised by lazyeyekit."""


class ConfigError(LazyEyeKitError):
    def __init__(self, path, reason: str):
        super().__init__(f"invalid config {path}: {reason}")
        self.path = path
        self.reason = reason
