"""Readers and writers for local note data files."""

from notexfr.storage.edam_reader import read_notebooks, read_notes, read_tags
from notexfr.storage.enex_reader import read_enex
from notexfr.storage.files import read_json, write_resources
from notexfr.storage.sn_reader import read_conversion_file

__all__ = [
    "read_conversion_file",
    "read_enex",
    "read_json",
    "read_notebooks",
    "read_notes",
    "read_tags",
    "write_resources",
]
