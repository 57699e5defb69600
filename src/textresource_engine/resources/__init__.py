"""Resources module — find bound text resources on disk."""

from textresource_engine.resources.resolver import ResourceResolver

__all__ = ["ResourceResolver"]
