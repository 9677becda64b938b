"""Termcap lookup, capability expansion and padding, tty modes and window buffers."""

__version__ = "0.1.0"