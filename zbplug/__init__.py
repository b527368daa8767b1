"""Chat-bot plugin logic: emoji mixing, fortunes, card draws, music guessing and more."""

__version__ = "0.1.0"