# =============================================================================
# Import Module
# =============================================================================
# Bulk account import: parsing delimited text, reading import files, and
# persisting the result.
# =============================================================================

from flaremail.importer.files import pick_text_file, read_import_file
from flaremail.importer.parser import (
    DEFAULT_SEPARATOR,
    ImportOutcome,
    ParsedLine,
    ParseResult,
    parse_batch,
    parse_line,
)
from flaremail.importer.service import ImportService

__all__ = [
    "DEFAULT_SEPARATOR",
    "ImportOutcome",
    "ImportService",
    "ParsedLine",
    "ParseResult",
    "parse_batch",
    "parse_line",
    "pick_text_file",
    "read_import_file",
]
