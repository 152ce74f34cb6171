"""Parser error types."""

from mqstrip.errors import StripperError


class ParseError(StripperError):
    """Raised when CSS source cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        path: str = "",
    ):
        self.line = line
        self.column = column
        self.path = path
        location = f"{path or '<css>'}:{line}:{column}" if line is not None else path
        super().__init__(f"{location}: {message}" if location else message)
