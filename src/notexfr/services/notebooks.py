"""Approximate Evernote notebooks and stacks as StandardNotes tags.

StandardNotes has no notebooks; each Evernote notebook becomes a Tag. A
notebook stack becomes a placeholder notebook of its own, since there is no
other place for that grouping to live.
"""

import logging
from typing import Dict, List, Sequence

from notexfr.exceptions import EntityKindError
from notexfr.models.edam import Notebook, new_notebook
from notexfr.models.entity import ServiceID
from notexfr.models.sn import CrossReference, Tag, new_tag

logger = logging.getLogger(__name__)

DEFAULT_CONFLICT_PREFIX = "conflict - "


class NotebookSynthesizer:
    """Builds notebook tags that do not collide with existing tag titles."""

    def __init__(self, conflict_prefix: str = DEFAULT_CONFLICT_PREFIX):
        self.conflict_prefix = conflict_prefix

    def synthesize(
        self, en_notebooks: Sequence[Notebook], sn_tags: Sequence[Tag]
    ) -> List[CrossReference]:
        """Create one StandardNotes Tag per notebook and per stack.

        Each StandardNotes tag imported from Evernote keeps its name, but the
        uniqueness constraint in Evernote does not span notebooks and tags.
        A notebook named like an existing tag is renamed with the conflict
        prefix, applied again until the name is taken by no other notebook
        or tag.

        The output follows the order notebooks were registered; sort it if
        a stable order matters.

        Raises:
            EntityKindError: If an input is not a Notebook or a Tag.
        """
        all_notebooks: Dict[str, Notebook] = {}

        for notebook in en_notebooks:
            if not isinstance(notebook, Notebook):
                raise EntityKindError(notebook, expected="Notebook")
            # Evernote notebook names are unique, case-insensitively
            all_notebooks[notebook.name] = notebook

            if not notebook.stack or notebook.stack in all_notebooks:
                continue
            all_notebooks[notebook.stack] = new_notebook(notebook.stack)

        tag_titles = set()
        for tag in sn_tags:
            if not isinstance(tag, Tag):
                raise EntityKindError(tag, expected="Tag")
            tag_titles.add(tag.content.title)

        for tag in sn_tags:
            title = tag.content.title
            notebook = all_notebooks.pop(title, None)
            if notebook is None:
                continue
            renamed = self.conflict_prefix + title
            # the prefixed name may itself be taken by a notebook or a tag
            while self.conflict_prefix and (
                renamed in all_notebooks or renamed in tag_titles
            ):
                renamed = self.conflict_prefix + renamed
            logger.debug(f"Notebook name {title!r} taken by a tag, using {renamed!r}")
            all_notebooks[renamed] = notebook.model_copy(update={"name": renamed})

        return [
            CrossReference(
                item=new_tag(notebook.name, notebook.created_at, notebook.updated_at),
                evernote_id=ServiceID(value=notebook.get_id()),
            )
            for notebook in all_notebooks.values()
        ]
