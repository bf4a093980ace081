"""Publish browser extension bundles to multiple extension stores."""

__version__ = "3.0.0"
