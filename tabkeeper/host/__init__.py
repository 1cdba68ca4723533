"""Editor host capability."""

from tabkeeper.host.base import EditorHost

__all__ = ["EditorHost"]
