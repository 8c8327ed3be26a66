"""Custom exceptions for DRFO Analyzer."""


class DRFOAnalyzerError(Exception):
    """Base exception for all DRFO Analyzer errors."""

    pass


class ParseError(DRFOAnalyzerError):
    """Error loading or parsing the statement file."""

    pass


class UnsupportedFileError(ParseError):
    """Declared file type is not XML."""

    pass


class ReadError(ParseError):
    """File could not be read or has no content."""

    pass


class MalformedContentError(ParseError):
    """File content is not well-formed XML."""

    pass


class SchemaMismatchError(ParseError):
    """Document is well-formed but belongs to another form variant."""

    def __init__(self, expected: str, actual: str | None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Невідомий формат відомості: {actual or 'схему не вказано'}. "
            f"Очікується {expected}."
        )


class UnsupportedVersionError(ParseError):
    """Form variant is not supported."""

    pass


class ReconstructionError(DRFOAnalyzerError):
    """Statement rows contradict the structure the form guarantees.

    Unlike ParseError this is not a user mistake: the message asks the
    user to report the file.
    """

    REPORT_HINT = "Будь ласка, повідомте про помилку розробникам."

    def __init__(self, message: str, row_key: str | None = None):
        self.row_key = row_key
        prefix = f"Рядок {row_key}: " if row_key is not None else ""
        super().__init__(f"{prefix}{message}. {self.REPORT_HINT}")


class ValidationError(DRFOAnalyzerError):
    """Data validation error."""

    pass


class InvalidFilterError(ValidationError):
    """Category filter names a category the form variant does not know."""

    pass
