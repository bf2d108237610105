"""
notexfr - Transfer note data between note-taking services.
This package converts Evernote data (API exports or ENEX files) into the
StandardNotes import format, and reconciles records that were already
migrated with an external conversion tool.

This version uses synchronous operations.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notexfr")
except PackageNotFoundError:
    __version__ = "0.3.0"
