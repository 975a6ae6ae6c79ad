"""Error types raised while loading, parsing, and assembling documents"""


class SiteError(Exception):
    """Base class for mdsite failures reported to the operator."""


class ParseError(SiteError):
    """Malformed document: bad header block, table, code fence, or inline marker.

    Only the offending document is skipped; the rest of the run proceeds.
    """

    def __init__(self, message: str, document: str | None = None, line: int | None = None):
        self.message = message
        self.document = document
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        where = self.document or "<input>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.message}"


class AssemblyError(SiteError):
    """Two or more documents resolve to the same output identifier. Fatal for the run."""

    def __init__(self, duplicates: dict[str, list[str]]):
        self.duplicates = duplicates
        listing = "; ".join(f"'{slug}' <- {', '.join(paths)}" for slug, paths in sorted(duplicates.items()))
        super().__init__(f"Duplicate document identifiers: {listing}")
