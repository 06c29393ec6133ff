"""bundlesqueeze - explain where the bytes in a bundle come from."""

__version__ = "0.1.0"
