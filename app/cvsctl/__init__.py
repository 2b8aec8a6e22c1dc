"""cvsctl - inspect and operate on CVS working copies."""

__version__ = "0.1.0"
