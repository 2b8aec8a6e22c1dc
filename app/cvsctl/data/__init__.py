"""Bundled data files for cvsctl."""
