"""
Audit entry point: correlates policies, gateway flows and endpoint flows.
"""
import logging
from typing import Optional, Sequence
from app.models.base import AuditSummary, PolicyRule, TrafficFlow
from app.core.blind_spot_detector import detect_blind_spots
from app.core.violation_classifier import ViolationClassifier

logger = logging.getLogger(__name__)


def perform_audit(policies: Sequence[PolicyRule],
                  gateway_flows: Sequence[TrafficFlow],
                  endpoint_flows: Sequence[TrafficFlow],
                  classifier: Optional[ViolationClassifier] = None) -> AuditSummary:
    """
    Run a complete audit over already-parsed inputs.

    Empty inputs are valid and produce a zero-valued summary. Policies are
    counted only; they are not matched against flows.

    Args:
        policies: Parsed firewall policy rules
        gateway_flows: Flows observed at the gateway
        endpoint_flows: Flows observed on endpoints
        classifier: Violation classifier, defaults to the built-in heuristics

    Returns:
        AuditSummary with counts, blind spots and violations
    """
    logger.info(f"Starting audit: {len(policies)} policies, {len(gateway_flows)} gateway flows, "
                f"{len(endpoint_flows)} endpoint flows")

    blind_spots = detect_blind_spots(endpoint_flows, gateway_flows)
    violations = (classifier or ViolationClassifier()).classify(gateway_flows)

    summary = AuditSummary(
        total_gateway_flows=len(gateway_flows),
        total_endpoint_flows=len(endpoint_flows),
        policy_count=len(policies),
        blind_spots=blind_spots,
        violations=violations,
    )
    logger.info(f"Audit complete: {len(blind_spots)} blind spots, {len(violations)} violations")
    return summary
