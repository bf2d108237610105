"""Notes read from an Evernote export (ENEX) file.

An export file carries no IDs, notebooks or tag records: each note names
its tags inline. Converters generate fresh IDs for everything.
"""

from notexfr.models.edam import NoteRecord


class Note(NoteRecord):
    """A note entity in an enex file."""
