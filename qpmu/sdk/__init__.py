"""Toolkit for writing launcher plugins: item lists, callbacks, storage and request handling."""

__version__ = "0.1.0"