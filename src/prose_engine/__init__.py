"""UI-agnostic structural prose editing engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "document",
    "keymaps",
    "runtime",
    "selection",
    "session",
]

__version__ = "0.1.0"
