"""
AI-written executive report for an audit summary, using OpenAI chat completions.
"""
import logging
import os
import time
from typing import Any, Callable, Optional
from openai import OpenAI
from app.models.base import AuditSummary
from app.exceptions.custom_exceptions import AIReportError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Error: API Key is missing. Please ensure OPENAI_API_KEY is configured."
API_ERROR_MESSAGE = "Failed to generate AI report due to an API error."
EMPTY_REPORT_MESSAGE = "No report generated."

SYSTEM_PROMPT = "You are a Senior Security Auditor using the Traffic Correlation Auditor tool."

REPORT_INSTRUCTIONS = """INSTRUCTIONS:
1. Executive Summary of the security posture.
2. Detailed analysis of the "Blind Spots" (traffic seen on servers but not gateway). Explain why this is dangerous (lateral movement).
3. Detailed analysis of "Policy Violations".
4. Remediation Steps: Concrete configuration changes for the gateway firewall.
5. Tone: Professional, authoritative, urgent if high risks found.
6. Format: Markdown."""


class AIReportGenerator:
    """Generates a natural-language audit report from aggregate findings."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 max_retries: int = 3, retry_delay: int = 5):
        """
        Initialize the report generator.

        Args:
            api_key: OpenAI API key (if None, will try to get from OPENAI_API_KEY env var)
            model: OpenAI model (if None, will try OPENAI_MODEL env var, default: gpt-4o-mini)
            max_retries: Attempts per report request
            retry_delay: Seconds to wait between attempts
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL") or "gpt-4o-mini"
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        if not self.api_key:
            logger.warning("OpenAI API key not found. AI reports will be disabled.")
            self.client = None
        else:
            self.client = OpenAI(api_key=self.api_key)
            logger.info(f"OpenAI client initialized with model: {self.model}")

    def build_prompt(self, summary: AuditSummary) -> str:
        """
        Build the report prompt from aggregate counts and one example per finding type.

        Args:
            summary: Audit summary

        Returns:
            Prompt text
        """
        context = summary.to_report_context()
        return f"""Analyze the following audit summary and write a professional, executive-level security report.

DATA SUMMARY:
- Gateway Logs Analyzed: {context['total_gateway_flows']}
- Endpoint Logs Analyzed: {context['total_endpoint_flows']}
- Active Firewall Policies: {context['policy_count']}

KEY FINDINGS:
- Blind Spots (Lateral Movement/Bypass): {context['blind_spot_count']} identified.
  (Example: {context['blind_spot_example']})
- Policy Violations (Misconfigurations): {context['violation_count']} identified.
  (Example: {context['violation_example']})

{REPORT_INSTRUCTIONS}"""

    def _retry(self, func: Callable[[], Any], operation_name: str) -> Any:
        """
        Call func, retrying on any client error.

        Raises:
            AIReportError: If every attempt fails
        """
        last_exception = None
        for attempt in range(1, self.max_retries + 1):
            try:
                logger.info(f"Attempt {attempt}/{self.max_retries} for {operation_name}")
                start_time = time.time()
                result = func()
                logger.info(f"{operation_name} completed in {time.time() - start_time:.2f} seconds")
                return result
            except Exception as e:
                last_exception = e
                logger.warning(f"{operation_name} failed with error: {str(e)}")
                if attempt < self.max_retries:
                    logger.info(f"Waiting {self.retry_delay} seconds before retry {attempt + 1}/{self.max_retries}...")
                    time.sleep(self.retry_delay)

        raise AIReportError(f"{operation_name} failed after {self.max_retries} attempts: {last_exception}")

    def generate_report(self, summary: AuditSummary) -> str:
        """
        Generate a Markdown report for the summary.

        Failures are reported as text rather than raised so the caller can
        display the result either way.

        Args:
            summary: Audit summary

        Returns:
            Report text, or an error message
        """
        if not self.client:
            return MISSING_KEY_MESSAGE

        prompt = self.build_prompt(summary)

        def call_chat_completion():
            return self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
            )

        try:
            response = self._retry(call_chat_completion, "chat completions (generate_report)")
        except AIReportError as e:
            logger.error(f"AI report generation failed: {e.message}")
            return API_ERROR_MESSAGE

        report = response.choices[0].message.content if response.choices else None
        return report or EMPTY_REPORT_MESSAGE
