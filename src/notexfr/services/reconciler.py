"""Operations that tie readers, matchers, converters and the writer together.

Each operation reads its input files, runs one matcher, linker, synthesizer
or converter, and writes the result only when every stage succeeded.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from notexfr.config import config
from notexfr.exceptions import ErrorCode, NotexfrError
from notexfr.models.entity import LinkID
from notexfr.models.sn import CrossReference, SNItem
from notexfr.observability import timed_operation
from notexfr.services.collection import KeyedCollection
from notexfr.services.convert import EdamToSN, EnexToSN
from notexfr.services.matching import BucketedMatcher, NoteLinker
from notexfr.services.notebooks import NotebookSynthesizer
from notexfr.storage import (
    read_conversion_file,
    read_enex,
    read_notebooks,
    read_notes,
    read_tags,
    write_resources,
)

logger = logging.getLogger(__name__)

PathValue = Optional[Union[str, Path]]


class BackfillParams(BaseModel):
    """Named inputs and outputs for reconciling Evernote and StandardNotes data.

    Output paths left empty are written to standard output.
    """

    input_sn: PathValue = None
    input_en_notebooks: PathValue = None
    input_en_notes: PathValue = None
    input_en_tags: PathValue = None
    output_notebooks: PathValue = None
    output_notes: PathValue = None
    output_tags: PathValue = None
    verbose: bool = False


class ConvertParams(BaseModel):
    """Named inputs and outputs for converting data between formats."""

    input_en_notebooks: PathValue = None
    input_en_notes: PathValue = None
    input_en_tags: PathValue = None
    input: PathValue = None
    output: PathValue = None
    verbose: bool = False


class UnmatchedCollector:
    """Unmatched handler that keeps what it is given, for reporting."""

    def __init__(self):
        self.resources: List[LinkID] = []

    def __call__(self, resource: LinkID) -> None:
        self.resources.append(resource)

    def __len__(self) -> int:
        return len(self.resources)


def _require(value: PathValue, flag: str) -> PathValue:
    if not value:
        raise NotexfrError(
            f"missing input file: {flag}",
            code=ErrorCode.CONFIG_MISSING,
            details={"flag": flag},
        )
    return value


class Reconciler:
    """Runs backfill and conversion operations on local files.

    Args:
        conflict_prefix: Prefix for notebook tags whose name is taken by a tag.
            Defaults to the configured value.
        json_indent: Indentation of the written JSON. Defaults to the
            configured value.
    """

    def __init__(
        self,
        conflict_prefix: Optional[str] = None,
        json_indent: Optional[int] = None,
    ):
        self.conflict_prefix = (
            conflict_prefix if conflict_prefix is not None else config.conflict_prefix
        )
        self.json_indent = json_indent if json_indent is not None else config.json_indent

    def _write(self, resources: Any, path: PathValue, verbose: bool, name: str) -> None:
        write_resources(
            resources, path, indent=self.json_indent, verbose=verbose, name=name
        )

    def _report_unmatched(self, operation: str, unmatched: UnmatchedCollector) -> None:
        if len(unmatched):
            logger.info(f"{operation}: {len(unmatched)} StandardNotes item(s) not matched")

    def match_tags(self, params: BackfillParams) -> List[CrossReference]:
        """Reconcile tags by comparing their names."""
        en_path = _require(params.input_en_tags, "--input-en-tags")
        sn_path = _require(params.input_sn, "--input-sn")
        with timed_operation("match_tags", en_file=en_path, sn_file=sn_path) as op:
            en_tags = read_tags(en_path)
            _, sn_tags = read_conversion_file(sn_path)

            unmatched = UnmatchedCollector()
            tags = BucketedMatcher(on_unmatched=unmatched).match(en_tags, sn_tags)
            self._report_unmatched("match_tags", unmatched)

            self._write(tags, params.output_tags, params.verbose, "matched tags")
            op["result_count"] = len(tags)
        return tags

    def match_notes(self, params: BackfillParams) -> List[CrossReference]:
        """Reconcile notes on their creation time alone.

        Notes created within the same second are not told apart; see
        :meth:`backfill_notes` for the stricter join.
        """
        en_path = _require(params.input_en_notes, "--input-en-notes")
        sn_path = _require(params.input_sn, "--input-sn")
        with timed_operation("match_notes", en_file=en_path, sn_file=sn_path) as op:
            en_notes = read_notes(en_path)
            sn_notes, _ = read_conversion_file(sn_path)

            unmatched = UnmatchedCollector()
            notes = BucketedMatcher(on_unmatched=unmatched).match(en_notes, sn_notes)
            self._report_unmatched("match_notes", unmatched)

            self._write(notes, params.output_notes, params.verbose, "matched notes")
            op["result_count"] = len(notes)
        return notes

    def reconcile_notebooks(self, params: BackfillParams) -> List[CrossReference]:
        """Approximate Evernote notebooks and stacks as StandardNotes tags.

        Returns:
            Cross references sorted by tag title, then Evernote ID.
        """
        en_path = _require(params.input_en_notebooks, "--input-en-notebooks")
        sn_path = _require(params.input_sn, "--input-sn")
        with timed_operation(
            "reconcile_notebooks", en_file=en_path, sn_file=sn_path
        ) as op:
            en_notebooks = read_notebooks(en_path)
            _, sn_tags = read_conversion_file(sn_path)

            synthesizer = NotebookSynthesizer(self.conflict_prefix)
            notebook_tags = sorted(
                synthesizer.synthesize(en_notebooks, sn_tags),
                key=lambda ref: (ref.item.title, ref.evernote_id.get_id()),
            )

            self._write(
                notebook_tags,
                params.output_notebooks,
                params.verbose,
                "reconciled notebooks",
            )
            op["result_count"] = len(notebook_tags)
        return notebook_tags

    def backfill_notes(self, params: BackfillParams) -> List[CrossReference]:
        """Match notes on all link values and backfill their notebook as a tag.

        Use this if the data was already imported into StandardNotes from an
        export file, which carries no notebook information.
        """
        en_path = _require(params.input_en_notes, "--input-en-notes")
        sn_path = _require(params.input_sn, "--input-sn")
        with timed_operation("backfill_notes", en_file=en_path, sn_file=sn_path) as op:
            en_notes = KeyedCollection(read_notes(en_path))
            sn_notes, _ = read_conversion_file(sn_path)

            unmatched = UnmatchedCollector()
            notes = NoteLinker(on_unmatched=unmatched).link(
                en_notes, KeyedCollection(sn_notes)
            )
            self._report_unmatched("backfill_notes", unmatched)

            self._write(notes, params.output_notes, params.verbose, "backfilled notes")
            op["result_count"] = len(notes)
        return notes

    def convert_edam_to_sn(self, params: ConvertParams) -> Dict[str, List[SNItem]]:
        """Convert saved Evernote notebooks, notes and tags to a StandardNotes file."""
        notebooks_path = _require(params.input_en_notebooks, "--input-en-notebooks")
        notes_path = _require(params.input_en_notes, "--input-en-notes")
        tags_path = _require(params.input_en_tags, "--input-en-tags")
        with timed_operation("convert_edam_to_sn", notes_file=notes_path) as op:
            notebooks = KeyedCollection(read_notebooks(notebooks_path))
            notes = KeyedCollection(read_notes(notes_path))
            tags = KeyedCollection(read_tags(tags_path))

            resources = notes.to_list() + tags.to_list() + notebooks.to_list()
            out = {"items": EdamToSN().convert(resources)}

            self._write(out, params.output, params.verbose, "standardnotes resources")
            op["result_count"] = len(out["items"])
        return out

    def convert_enex_to_sn(self, params: ConvertParams) -> Dict[str, List[SNItem]]:
        """Convert an ENEX export file to a StandardNotes file."""
        path = _require(params.input, "--input")
        with timed_operation("convert_enex_to_sn", input_file=path) as op:
            out = {"items": EnexToSN().convert(read_enex(path))}

            self._write(out, params.output, params.verbose, "standardnotes resources")
            op["result_count"] = len(out["items"])
        return out

    def enex_to_json(self, params: ConvertParams) -> list:
        """Convert an ENEX export file to a JSON array of notes."""
        path = _require(params.input, "--input")
        with timed_operation("enex_to_json", input_file=path) as op:
            notes = read_enex(path)

            self._write(notes, params.output, params.verbose, "notes")
            op["result_count"] = len(notes)
        return notes
