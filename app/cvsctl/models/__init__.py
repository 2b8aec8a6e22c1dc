"""Data models for cvsctl.

This module exports the core data structures used throughout the application.
"""

from cvsctl.models.status import CvsInfo, FileDetail, FileStatus

__all__ = [
    "CvsInfo",
    "FileDetail",
    "FileStatus",
]
