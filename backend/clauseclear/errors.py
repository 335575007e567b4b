"""
Error taxonomy for contract analysis.
Services raise these; routes decide how each one reaches the user.
"""
from typing import Optional


class ClauseClearError(Exception):
    """Base class for every failure the analysis pipeline reports to users."""


class UnsupportedFileTypeError(ClauseClearError):
    def __init__(self, content_type: Optional[str] = None):
        super().__init__("Unsupported file type. Please upload a PDF or DOCX.")
        self.content_type = content_type


class ExtractionError(ClauseClearError):
    pass


class ConfigurationError(ClauseClearError):
    pass


class RemoteAPIError(ClauseClearError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(ClauseClearError):
    pass


class NetworkError(ClauseClearError):
    pass
