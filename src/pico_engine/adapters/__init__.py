"""Hosts that drive an :class:`~pico_engine.editor.Editor`."""
