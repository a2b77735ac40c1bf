"""
Custom exception classes for traffic correlation audits.
"""
from typing import Optional


class AuditError(Exception):
    """Base exception for audit errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ParserError(AuditError):
    """Exception raised when an uploaded input cannot be read at all."""

    def __init__(self, message: str, input_kind: Optional[str] = None):
        self.input_kind = input_kind
        super().__init__(message, "PARSER_ERROR")


class ReportGenerationError(AuditError):
    """Exception raised when report generation or export fails."""

    def __init__(self, message: str):
        super().__init__(message, "REPORT_ERROR")


class AIReportError(AuditError):
    """Exception raised when the text-generation service call fails."""

    def __init__(self, message: str):
        super().__init__(message, "AI_REPORT_ERROR")
