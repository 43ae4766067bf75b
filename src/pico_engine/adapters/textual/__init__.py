"""Textual host. ``app`` needs the ``textual`` package; ``controller`` does not."""

from .controller import TextualEditorAdapter, TextualUIHooks, translate_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "translate_key"]
