"""Modal terminal text editor engine: buffer, highlighting, viewport and modes."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "display",
    "editor",
    "errors",
    "keymaps",
    "modes",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
