"""Exceptions raised by the mind map core."""


class MindMapError(Exception):
    """Base class for mind map errors."""


class OperationRejected(MindMapError):
    """An operation would violate a tree or navigation invariant.

    Raised before any new snapshot is produced, so the tree is unchanged.
    """

    def __init__(self, node_id: str, reason: str) -> None:
        super().__init__(reason)
        self.node_id = node_id
        self.reason = reason


class MalformedDocumentError(MindMapError):
    """The seed document can't be turned into a valid tree (load time only)."""
