"""Custom exceptions for the P&L dashboard.

The metrics engine never raises; these cover the input boundaries that feed it.
"""


class EntryImportError(Exception):
    """Raised when a P&L export row cannot be parsed.

    Attributes:
        line_number: 1-based line in the source file (header is line 1)
        field: Column that failed to parse ("date" or "pnl")
        raw_value: The offending text as read from the file
    """

    def __init__(self, line_number: int, field: str, raw_value: str):
        """Initialize EntryImportError.

        Args:
            line_number: 1-based line number of the bad row
            field: Column name that failed to parse
            raw_value: Raw text of the failing cell
        """
        self.line_number = line_number
        self.field = field
        self.raw_value = raw_value
        message = f"Line {line_number}: invalid {field} value {raw_value!r}"
        super().__init__(message)


class InvalidCapitalError(Exception):
    """Raised when initial capital is missing or not strictly positive.

    Attributes:
        capital: The rejected capital value
    """

    def __init__(self, capital: float):
        self.capital = capital
        super().__init__(f"Initial capital must be positive, got {capital}")
