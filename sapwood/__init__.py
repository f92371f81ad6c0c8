"""Fine-grained reactive signals, effects, reactive lists and an in-memory DOM tree."""

__version__ = "0.1.0"