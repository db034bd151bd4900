"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InputFileError(PipelineError):
    """Raised when an input file cannot be read as a JSON array of records."""

    error_code = "INPUT_ERROR"


class RecordRejected(PipelineError):
    """Raised when a single record cannot be transformed.

    Recoverable: the batch driver counts it and moves on to the next record.
    """

    error_code = "RECORD_REJECTED"

    def __init__(self, record_id: str, reason: str) -> None:
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"ERROR: {record_id} {reason}")


class NoLocationError(RecordRejected):
    error_code = "NO_LOCATION"

    def __init__(self, record_id: str) -> None:
        super().__init__(record_id, "no location")


class MalformedLocationError(RecordRejected):
    error_code = "MALFORMED_LOCATION"

    def __init__(self, record_id: str, detail: str = "") -> None:
        reason = "has malformed location"
        if detail:
            reason = f"{reason}: {detail}"
        super().__init__(record_id, reason)


class MalformedDateError(RecordRejected):
    error_code = "MALFORMED_DATE"


class MalformedUriError(RecordRejected):
    error_code = "MALFORMED_URI"


class InvalidLocationError(RecordRejected):
    """Raised by the strict location validator."""

    error_code = "INVALID_LOCATION"


class InvalidBoundsError(RecordRejected):
    error_code = "INVALID_BOUNDS"


class AuxiliaryDocumentError(RecordRejected):
    """Raised when embedded FGDC text cannot be parsed or written.

    Only the auxiliary document is lost; the normalized record is kept.
    """

    error_code = "MALFORMED_FGDC"


class UnencodableTextError(RecordRejected):
    """Raised when a field holds text that cannot be written as UTF-8."""

    error_code = "UNENCODABLE_TEXT"
