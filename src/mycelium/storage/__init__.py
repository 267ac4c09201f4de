"""Document loading, export and the built-in seed."""

from mycelium.storage.document import (
    dumps_document,
    export_document,
    load_document,
    read_document,
    write_document,
)
from mycelium.storage.seed import seed_document

__all__ = [
    "load_document",
    "read_document",
    "export_document",
    "dumps_document",
    "write_document",
    "seed_document",
]
