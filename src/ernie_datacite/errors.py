class DataCiteError(Exception):
    """Base exception for DataCite export/import errors."""


class ExportError(DataCiteError):
    """Resource could not be exported in the requested format."""


class XmlImportError(DataCiteError, ValueError):
    """Uploaded XML was rejected. ``field`` names the offending form field."""

    def __init__(self, message: str, field: str = "file") -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict[str, list[str]]:
        return {self.field: [self.message]}


class ResourceValidationError(DataCiteError, ValueError):
    """Editor payload failed save-time validation"""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        summary = "; ".join(f"{k}: {v}" for k, v in errors.items())
        super().__init__(f"Invalid resource: {summary}")


class MslVocabularyError(DataCiteError):
    """MSL laboratory vocabulary could not be fetched or decoded."""


class SchemaValidationError(DataCiteError, ValueError):
    """Exported document does not conform to the bundled DataCite schema"""

    def __init__(self, fmt: str, errors: list[str]) -> None:
        self.fmt = fmt
        self.errors = errors
        super().__init__(f"Invalid DataCite {fmt.upper()}: {'; '.join(errors)}")
