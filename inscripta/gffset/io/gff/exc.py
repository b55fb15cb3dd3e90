from typing import Optional

from inscripta.gffset.io.exc import InvalidInputError


class GFFParserError(InvalidInputError):
    """
    Raised when a GFF record is malformed. Carries the 1-based line number of the offending record.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
