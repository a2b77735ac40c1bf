"""
API endpoints for traffic correlation audits.

Handlers are plain functions: FastAPI runs them in its threadpool, so the
blocking parse, chart and OpenAI calls stay off the event loop.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from config import settings
from app.services.audit_service import AuditService
from app.models.base import AuditSummary
from app.exceptions.custom_exceptions import ParserError, ReportGenerationError

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_V1_STR)

# Initialize components
audit_service = AuditService()

EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
}


def _run_audit(policy_file: UploadFile, gateway_log: UploadFile, endpoint_log: UploadFile) -> AuditSummary:
    """Read the three uploads and audit them, mapping input errors to HTTP 400."""
    logger.info(f"Auditing uploads: policy={policy_file.filename}, gateway={gateway_log.filename}, "
                f"endpoint={endpoint_log.filename}")
    try:
        return audit_service.run_audit(
            policy_file.file.read(),
            gateway_log.file.read(),
            endpoint_log.file.read(),
        )
    except ParserError as e:
        logger.error(f"Unreadable upload: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/audit")
def audit(policy_file: UploadFile = File(...),
          gateway_log: UploadFile = File(...),
          endpoint_log: UploadFile = File(...)) -> Dict[str, Any]:
    """
    Run an audit over a policy XML, a gateway log and an endpoint log.

    Returns:
        Audit summary and dashboard chart data
    """
    summary = _run_audit(policy_file, gateway_log, endpoint_log)
    return {
        "summary": summary.model_dump(mode="json"),
        "chart_data": summary.chart_data(),
    }


@router.post("/audit/report")
def audit_report(policy_file: UploadFile = File(...),
                 gateway_log: UploadFile = File(...),
                 endpoint_log: UploadFile = File(...)) -> Dict[str, Any]:
    """
    Run an audit and generate the AI-written executive report.

    Environment Variables:
        OPENAI_API_KEY: OpenAI API key (required for report text)
        OPENAI_MODEL: OpenAI model to use (default: gpt-4o-mini)
        REPORT_MAX_RETRIES: Attempts per report request (default: 3)
        REPORT_RETRY_DELAY: Seconds between attempts (default: 5)
    """
    summary = _run_audit(policy_file, gateway_log, endpoint_log)
    report = audit_service.generate_report(summary)
    return {
        "summary": summary.model_dump(mode="json"),
        "report": report,
    }


@router.post("/audit/chart")
def audit_chart(policy_file: UploadFile = File(...),
                gateway_log: UploadFile = File(...),
                endpoint_log: UploadFile = File(...)) -> Dict[str, Any]:
    """Run an audit and render the overview chart as base64 PNG."""
    summary = _run_audit(policy_file, gateway_log, endpoint_log)
    try:
        chart = audit_service.generate_chart(summary)
    except Exception as e:
        logger.error(f"Error generating chart: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error generating chart: {str(e)}")
    return {"chart": chart}


@router.post("/audit/export")
def audit_export(policy_file: UploadFile = File(...),
                 gateway_log: UploadFile = File(...),
                 endpoint_log: UploadFile = File(...),
                 format: str = Query("json")) -> Response:
    """Run an audit and download the findings as JSON or CSV."""
    summary = _run_audit(policy_file, gateway_log, endpoint_log)
    try:
        content = audit_service.export(summary, format)
    except ReportGenerationError as e:
        logger.error(f"Export failed: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    export_format = format.lower()
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[export_format],
        headers={"Content-Disposition": f'attachment; filename="audit_report.{export_format}"'},
    )
