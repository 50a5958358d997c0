"""vaultterm - terminal-style command interpreter for a password vault."""

__version__ = "0.1.0"
