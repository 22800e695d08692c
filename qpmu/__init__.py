"""Core of a plugin-driven application launcher: configuration, plugins, results and model."""

__version__ = "0.1.0"