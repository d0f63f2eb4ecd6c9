"""senkyoku: assigns electoral sub-district roles on Discord."""

__version__ = "0.1.0"
