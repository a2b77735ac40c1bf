"""
JSON and CSV report generator for audit results.
"""
import csv
import io
import json
from datetime import datetime, timezone
from app.reports.base import BaseReportGenerator
from app.models.base import AuditSummary
from app.exceptions.custom_exceptions import ReportGenerationError

CSV_HEADER = ["Finding", "Flow ID", "Source IP", "Dest IP", "Dest Port", "Protocol", "Action", "Description"]


class JSONReportGenerator(BaseReportGenerator):
    """Multi-format report generator for audit results."""

    def generate_audit_report(self, summary: AuditSummary) -> str:
        """
        Generate a JSON audit report.

        Args:
            summary: Results from an audit run

        Returns:
            JSON formatted report as string
        """
        report_data = {
            "report_type": "audit",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            **summary.model_dump(mode="json"),
        }
        return json.dumps(report_data, indent=2)

    def export_report(self, report_content: str, format: str, filename: str) -> bool:
        """
        Export report to a file.

        Args:
            report_content: JSON report from generate_audit_report
            format: The format to export to (json, csv)
            filename: The filename to save to

        Returns:
            True if successful

        Raises:
            ReportGenerationError: On unsupported format or write failure
        """
        content = self.render(report_content, format)
        try:
            with open(filename, "w", newline="", encoding="utf-8") as f:
                f.write(content)
            return True
        except OSError as e:
            raise ReportGenerationError(f"Error exporting report: {str(e)}")

    def render(self, report_content: str, format: str) -> str:
        """
        Render a JSON audit report in the requested format.

        Args:
            report_content: JSON report from generate_audit_report
            format: json or csv, case-insensitive

        Returns:
            Report text in the requested format

        Raises:
            ReportGenerationError: On unsupported format or unreadable report content
        """
        export_format = format.lower()
        if export_format == "json":
            return report_content
        if export_format == "csv":
            try:
                return self.to_csv(report_content)
            except (KeyError, ValueError) as e:
                raise ReportGenerationError(f"Error rendering CSV report: {str(e)}")
        raise ReportGenerationError(f"Unsupported format: {format}")

    def to_csv(self, report_content: str) -> str:
        """Render a JSON audit report as CSV, one row per finding."""
        report_data = json.loads(report_content)
        buffer = io.StringIO()
        writer = csv.writer(buffer)

        writer.writerow(["Report Type", "Generated At", "Policies", "Gateway Flows", "Endpoint Flows"])
        writer.writerow([
            report_data.get("report_type", ""),
            report_data.get("generated_at", ""),
            report_data.get("policy_count", 0),
            report_data.get("total_gateway_flows", 0),
            report_data.get("total_endpoint_flows", 0),
        ])
        writer.writerow([])
        writer.writerow(CSV_HEADER)

        for blind_spot in report_data.get("blind_spots", []):
            writer.writerow(["Blind Spot", blind_spot["flow_id"]]
                            + self._flow_cells(blind_spot["endpoint_flow"])
                            + [blind_spot["description"]])
        for violation in report_data.get("violations", []):
            writer.writerow(["Policy Violation", violation["flow_id"]]
                            + self._flow_cells(violation["flow"])
                            + [violation["description"]])

        return buffer.getvalue()

    def _flow_cells(self, flow: dict) -> list:
        return [flow["source_ip"], flow["dest_ip"], flow["dest_port"], flow["protocol"], flow["action"]]
