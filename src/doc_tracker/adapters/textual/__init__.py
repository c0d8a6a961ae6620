"""Textual host for the document tracker.

The app module needs the ``textual`` package; the controller does not.
"""

from .controller import TextualSessionAdapter, TextualUIHooks

__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
