"""
Unit tests for JSON/CSV audit report export.
"""
import csv
import io
import json
import os
import tempfile
import unittest
from app.reports.json_report import JSONReportGenerator, CSV_HEADER
from app.core.audit import perform_audit
from app.models.base import FlowOrigin, TrafficAction, TrafficFlow
from app.exceptions.custom_exceptions import ReportGenerationError


class TestJSONReportGenerator(unittest.TestCase):
    """Test cases for JSONReportGenerator class."""

    def setUp(self):
        """Set up test fixtures."""
        self.generator = JSONReportGenerator()
        gateway_flows = [
            TrafficFlow(timestamp="t", source_ip="203.0.113.5", dest_ip="192.168.1.20", dest_port=3389,
                        protocol="TCP", action=TrafficAction.ALLOW, origin=FlowOrigin.GATEWAY),
        ]
        endpoint_flows = [
            TrafficFlow(timestamp="t", source_ip="192.168.1.20", dest_ip="192.168.1.30", dest_port=445,
                        protocol="TCP", action=TrafficAction.ALLOW, origin=FlowOrigin.ENDPOINT),
        ]
        self.summary = perform_audit([], gateway_flows, endpoint_flows)

    def test_generate_audit_report(self):
        """Test the JSON report carries counts and findings."""
        # Act
        report = json.loads(self.generator.generate_audit_report(self.summary))

        # Assert
        self.assertEqual(report["report_type"], "audit")
        self.assertIn("generated_at", report)
        self.assertEqual(report["total_gateway_flows"], 1)
        self.assertEqual(report["total_endpoint_flows"], 1)
        self.assertEqual(report["policy_count"], 0)
        self.assertEqual(len(report["blind_spots"]), 1)
        self.assertEqual(report["violations"][0]["flow"]["action"], "Allow")
        self.assertEqual(report["violations"][0]["heuristic"], "exposed_management_port")

    def test_to_csv(self):
        """Test CSV has a summary block and one row per finding."""
        # Arrange
        report = self.generator.generate_audit_report(self.summary)

        # Act
        rows = list(csv.reader(io.StringIO(self.generator.to_csv(report))))

        # Assert
        self.assertEqual(rows[1][0], "audit")
        self.assertEqual(rows[3], CSV_HEADER)
        self.assertEqual(rows[4][0], "Blind Spot")
        self.assertEqual(rows[4][2:7], ["192.168.1.20", "192.168.1.30", "445", "TCP", "Allow"])
        self.assertEqual(rows[5][0], "Policy Violation")
        self.assertEqual(len(rows), 6)

    def test_export_json_and_csv(self):
        """Test exporting writes files in both formats."""
        # Arrange
        report = self.generator.generate_audit_report(self.summary)

        with tempfile.TemporaryDirectory() as tmp:
            json_path = os.path.join(tmp, "audit.json")
            csv_path = os.path.join(tmp, "audit.csv")

            # Act
            self.assertTrue(self.generator.export_report(report, "json", json_path))
            self.assertTrue(self.generator.export_report(report, "CSV", csv_path))

            # Assert
            with open(json_path, encoding="utf-8") as f:
                self.assertEqual(json.load(f)["report_type"], "audit")
            with open(csv_path, encoding="utf-8") as f:
                self.assertIn("Policy Violation", f.read())

    def test_render_formats(self):
        """Test render is the one format switch behind file export."""
        # Arrange
        report = self.generator.generate_audit_report(self.summary)

        # Act & Assert
        self.assertEqual(self.generator.render(report, "JSON"), report)
        self.assertEqual(self.generator.render(report, "csv"), self.generator.to_csv(report))
        with self.assertRaises(ReportGenerationError):
            self.generator.render(report, "xml")

    def test_export_writes_rendered_content(self):
        """Test the exported file holds exactly the rendered text."""
        # Arrange
        report = self.generator.generate_audit_report(self.summary)

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "audit.csv")

            # Act
            self.generator.export_report(report, "csv", path)

            # Assert
            with open(path, newline="", encoding="utf-8") as f:
                self.assertEqual(f.read(), self.generator.render(report, "csv"))

    def test_export_unsupported_format(self):
        """Test unsupported formats raise ReportGenerationError."""
        # Act & Assert
        with self.assertRaises(ReportGenerationError) as context:
            self.generator.export_report("{}", "pdf", "audit.pdf")

        self.assertEqual(context.exception.error_code, "REPORT_ERROR")


if __name__ == '__main__':
    unittest.main()
