"""Helpers for mod management tools: versions, text decoding, file operations,
task progress, remembered choices and Steam lookup."""

__version__ = "0.1.0"

__all__ = [
    "choicememory",
    "fileops",
    "steam",
    "taskprogress",
    "textio",
    "versioninfo",
]