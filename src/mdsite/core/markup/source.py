"""Source text context shared by block and inline conversion"""

from dataclasses import dataclass

from mdsite.errors import ParseError


@dataclass
class Source:
    """Markup lines plus what is needed to point errors back into the original file."""
    lines:       list[str]
    document:    str | None = None
    line_offset: int = 0           # lines preceding the markup in its file (header block)

    def lineno(self, token) -> int | None:
        """1-based file line where a token starts."""
        if not token.map:
            return None
        return token.map[0] + 1 + self.line_offset

    def error(self, message: str, token=None) -> ParseError:
        return ParseError(message, self.document, self.lineno(token) if token is not None else None)

    def slice(self, token) -> list[str]:
        """Raw source lines covered by a block token via token.map."""
        if not token.map:
            return []
        start, end = token.map
        return self.lines[start:end]
