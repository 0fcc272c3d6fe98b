"""Editing of free-text notes attached to graph nodes."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from archivist.models.graph import GraphNode
from archivist.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

SaveCallback = Callable[[str, str], None]
DeleteCallback = Callable[[str], None]


class AnnotationEditor:
    """Editor session for one node's annotation.

    The save and delete callbacks are supplied by the page that owns the
    graph and are the only way annotations reach the backend.

    Attributes:
        node: Node being annotated.
        text: Current editor contents.
        is_open: Whether the editor is showing.
    """

    def __init__(self, node: GraphNode, on_save: SaveCallback, on_delete: DeleteCallback):
        self.node = node
        self.on_save = on_save
        self.on_delete = on_delete
        self.text = ""
        self.is_open = False

    @property
    def title(self) -> str:
        return "Edit Annotation" if self.node.annotation else "Add Annotation"

    @property
    def subtitle(self) -> str:
        return f"{self.node.label} ({self.node.type})"

    @property
    def can_save(self) -> bool:
        """Saving is disabled until the text differs from the stored note."""
        return self.is_open and self.text != (self.node.annotation or "")

    @property
    def can_delete(self) -> bool:
        return self.is_open and bool(self.node.annotation)

    def open(self) -> None:
        self.text = self.node.annotation or ""
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def edit(self, text: str) -> None:
        if not self.is_open:
            raise ValidationError("Annotation editor is not open")
        self.text = text

    def save(self) -> Optional[str]:
        """Persist the edited text through the save callback and close.

        Returns:
            The saved text, or None when there was nothing to save.
        """
        if not self.can_save:
            return None
        logger.debug("Saving annotation for node %s", self.node.id)
        self.on_save(self.node.id, self.text)
        saved = self.text
        self.close()
        return saved

    def delete(self) -> bool:
        """Remove the annotation through the delete callback and close."""
        if not self.can_delete:
            return False
        logger.debug("Deleting annotation for node %s", self.node.id)
        self.on_delete(self.node.id)
        self.close()
        return True
