"""
Base report generator for audit results.
"""
from abc import ABC, abstractmethod
from app.models.base import AuditSummary


class BaseReportGenerator(ABC):
    """Abstract base class for report generators."""

    @abstractmethod
    def generate_audit_report(self, summary: AuditSummary) -> str:
        """
        Generate a report from an audit summary.

        Args:
            summary: Results from an audit run

        Returns:
            Formatted report as string
        """
        pass

    @abstractmethod
    def export_report(self, report_content: str, format: str, filename: str) -> bool:
        """
        Export report to a specific format.

        Args:
            report_content: The report content to export
            format: The format to export to (json, csv)
            filename: The filename to save to

        Returns:
            True if successful
        """
        pass
