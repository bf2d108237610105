"""Heuristic joins between Evernote and StandardNotes resources.

Resources are associated across services by bucketing on link values.
Two policies are left deliberately loose and are isolated here as named
functions so callers and tests can see (or swap) them:

* ambiguity: when a bucket holds several candidates, the first one wins
  (:func:`first_candidate`). Nothing breaks the tie.
* unmatched: a resource with no candidate is dropped without a warning
  (:func:`ignore_unmatched`).
"""

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence

from notexfr.exceptions import ErrorCode, LinkValuesError
from notexfr.models.edam import Note as EdamNote
from notexfr.models.entity import LinkID, ServiceID
from notexfr.models.sn import CrossReference, Note as SNNote
from notexfr.services.collection import KeyedCollection

# Chooses one candidate out of a bucket of same-key resources
TieBreaker = Callable[[Sequence[LinkID]], Optional[LinkID]]
# Receives a resource for which nothing matched
UnmatchedHandler = Callable[[LinkID], None]

NUM_NOTE_LINKS = 3


def first_candidate(candidates: Sequence[LinkID]) -> Optional[LinkID]:
    """Pick the first candidate in source order.

    Buckets with more than one candidate are not resolved any further; a
    wrong pairing is possible when the first link value is not unique.
    """
    return candidates[0] if candidates else None


def ignore_unmatched(resource: LinkID) -> None:
    """Drop an unmatched resource silently."""


class BucketedMatcher:
    """Single-key join on the first link value of each resource."""

    def __init__(
        self,
        tie_breaker: TieBreaker = first_candidate,
        on_unmatched: UnmatchedHandler = ignore_unmatched,
    ):
        self.tie_breaker = tie_breaker
        self.on_unmatched = on_unmatched

    def match(
        self,
        en_resources: Sequence[LinkID],
        sn_resources: Sequence[LinkID],
    ) -> List[CrossReference]:
        """Pair each StandardNotes resource with an Evernote resource.

        Args:
            en_resources: Evernote resources to bucket on their first link value.
            sn_resources: StandardNotes items to look up, in output order.

        Returns:
            One cross reference per matched StandardNotes item, in the order
            of ``sn_resources``.

        Raises:
            LinkValuesError: If any resource has no link values. Nothing is
                returned in that case.
        """
        grouped: Dict[str, List[LinkID]] = defaultdict(list)
        for i, resource in enumerate(en_resources):
            links = resource.link_values()
            if not links:
                raise LinkValuesError(
                    "links empty",
                    service="evernote",
                    entity_id=f"[{i}]",
                    code=ErrorCode.LINK_VALUES_EMPTY,
                )
            grouped[links[0]].append(resource)

        out: List[CrossReference] = []
        for i, resource in enumerate(sn_resources):
            links = resource.link_values()
            if not links:
                raise LinkValuesError(
                    "links empty",
                    service="standardnotes",
                    entity_id=f"[{i}]",
                    code=ErrorCode.LINK_VALUES_EMPTY,
                )
            candidates = grouped.get(links[0])
            chosen = self.tie_breaker(candidates) if candidates else None
            if chosen is None:
                self.on_unmatched(resource)
                continue
            out.append(
                CrossReference(item=resource, evernote_id=ServiceID(value=chosen.get_id()))
            )
        return out


def _check_note_links(note: LinkID, service: str) -> List[str]:
    links = note.link_values()
    if len(links) != NUM_NOTE_LINKS:
        raise LinkValuesError(
            f"expected links length to be {NUM_NOTE_LINKS}; got {len(links)}",
            service=service,
            entity_id=note.get_id(),
            expected=NUM_NOTE_LINKS,
            actual=len(links),
        )
    return links


class NoteLinker:
    """Three-dimension join for notes, where one key is too weak.

    Notes are bucketed by each of their link values (created at, title,
    updated at) separately. A StandardNotes note is matched on the first
    dimension, in that order, whose bucket holds exactly one Evernote note
    with the same value at the same position. Later dimensions are not
    consulted once one succeeds.
    """

    def __init__(self, on_unmatched: UnmatchedHandler = ignore_unmatched):
        self.on_unmatched = on_unmatched

    def link(
        self,
        en_notes: KeyedCollection[EdamNote],
        sn_notes: KeyedCollection[SNNote],
    ) -> List[CrossReference]:
        """Match notes and backfill each matched note's notebook as a tag.

        The Evernote notebook ID is appended to the StandardNotes note's
        references as a tag reference, unless it is already there.

        Raises:
            LinkValuesError: If any note does not have exactly 3 link values.
        """
        degrees: List[Dict[str, List[EdamNote]]] = [
            defaultdict(list) for _ in range(NUM_NOTE_LINKS)
        ]

        def bucket(note: EdamNote) -> None:
            for i, value in enumerate(_check_note_links(note, "evernote")):
                degrees[i][value].append(note)

        en_notes.each(bucket)

        out: List[CrossReference] = []

        def visit(note: SNNote) -> None:
            links = _check_note_links(note, "standardnotes")
            for i, value in enumerate(links):
                candidates = degrees[i].get(value)
                if not candidates or len(candidates) != 1:
                    continue
                en_note = candidates[0]
                if en_note.link_values()[i] != value:
                    continue
                note.append_tags(en_note.notebook_id)
                out.append(
                    CrossReference(item=note, evernote_id=ServiceID(value=en_note.get_id()))
                )
                return
            self.on_unmatched(note)

        sn_notes.each(visit)
        return out
