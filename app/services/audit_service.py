"""
Audit service: raw uploads in, audit summary and derived artifacts out.
"""
import logging
from typing import Optional, Union

from config import Settings, settings as default_settings
from app.parsers.factory import ParserFactory
from app.core.audit import perform_audit
from app.analyzers.ai_report import AIReportGenerator
from app.reports.json_report import JSONReportGenerator
from app.utils.visualization import AuditVisualizer
from app.models.base import AuditSummary, FlowOrigin
from app.exceptions.custom_exceptions import ParserError

logger = logging.getLogger(__name__)


def decode_upload(contents: Union[bytes, str], input_kind: str) -> str:
    """
    Decode uploaded file contents as UTF-8 text.

    Raises:
        ParserError: If the bytes are not valid UTF-8
    """
    if isinstance(contents, str):
        return contents
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParserError(f"Could not decode {input_kind} as UTF-8: {str(e)}", input_kind)


class AuditService:
    """Service for running audits and producing reports from them."""

    def __init__(self, report_generator: Optional[AIReportGenerator] = None,
                 app_settings: Optional[Settings] = None):
        """
        Initialize exporters, visualizer and the AI report generator.

        Args:
            report_generator: Report generator to use instead of one built from settings
            app_settings: Settings for the report generator (default: module settings)
        """
        app_settings = app_settings or default_settings
        self.report_generator = report_generator or AIReportGenerator(
            api_key=app_settings.OPENAI_API_KEY,
            model=app_settings.OPENAI_MODEL,
            max_retries=app_settings.REPORT_MAX_RETRIES,
            retry_delay=app_settings.REPORT_RETRY_DELAY,
        )
        self.json_report_generator = JSONReportGenerator()
        self.visualizer = AuditVisualizer()

    def run_audit(self,
                  policy_file: Union[bytes, str],
                  gateway_log: Union[bytes, str],
                  endpoint_log: Union[bytes, str]) -> AuditSummary:
        """
        Parse all three inputs and run the audit.

        Args:
            policy_file: Policy XML contents
            gateway_log: Gateway traffic log contents
            endpoint_log: Endpoint traffic log contents

        Returns:
            AuditSummary for the inputs
        """
        policy_text = decode_upload(policy_file, "policy file")
        gateway_text = decode_upload(gateway_log, "gateway log")
        endpoint_text = decode_upload(endpoint_log, "endpoint log")

        policies = ParserFactory.create_parser("policy_xml").parse(policy_text)
        gateway_flows = ParserFactory.create_parser("traffic_csv", origin=FlowOrigin.GATEWAY).parse(gateway_text)
        endpoint_flows = ParserFactory.create_parser("traffic_csv", origin=FlowOrigin.ENDPOINT).parse(endpoint_text)

        return perform_audit(policies, gateway_flows, endpoint_flows)

    def generate_report(self, summary: AuditSummary) -> str:
        """Generate the AI-written report for a summary."""
        return self.report_generator.generate_report(summary)

    def generate_chart(self, summary: AuditSummary) -> str:
        """Render the overview chart as base64 PNG."""
        return self.visualizer.generate_overview_chart(summary)

    def export(self, summary: AuditSummary, format: str) -> str:
        """
        Serialize a summary as JSON or CSV text.

        Raises:
            ReportGenerationError: If the format is not json or csv
        """
        report = self.json_report_generator.generate_audit_report(summary)
        return self.json_report_generator.render(report, format)
