"""
Base models for gateway/endpoint traffic correlation audits.
"""
from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class TrafficAction(str, Enum):
    """Enforcement decision recorded for a flow or declared by a policy."""
    ALLOW = "Allow"
    DENY = "Deny"
    DROP = "Drop"
    UNKNOWN = "Unknown"


class FlowOrigin(str, Enum):
    """Where a flow was observed."""
    GATEWAY = "Gateway"
    ENDPOINT = "Endpoint"


class TrafficFlow(BaseModel):
    """A single observed network event."""
    model_config = ConfigDict(frozen=True)

    timestamp: str
    source_ip: str = "0.0.0.0"
    dest_ip: str = "0.0.0.0"
    dest_port: int = Field(default=0, ge=0)
    protocol: str = "TCP"
    action: TrafficAction = TrafficAction.UNKNOWN
    origin: FlowOrigin

    @property
    def signature(self) -> str:
        """Canonical flow identity: source, destination, port and protocol."""
        return f"{self.source_ip}|{self.dest_ip}|{self.dest_port}|{self.protocol}"


class PolicyRule(BaseModel):
    """A declared firewall policy entry."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    rule_type: str = "Unknown"
    action: TrafficAction = TrafficAction.UNKNOWN
    description: Optional[str] = None


class BlindSpot(BaseModel):
    """Endpoint flow with no gateway counterpart."""
    model_config = ConfigDict(frozen=True)

    flow_id: str
    endpoint_flow: TrafficFlow
    description: str


class PolicyViolation(BaseModel):
    """Gateway-allowed flow matching a high-risk heuristic."""
    model_config = ConfigDict(frozen=True)

    flow_id: str
    flow: TrafficFlow
    description: str
    heuristic: str
    # Policy-to-flow correlation is not performed, so this stays None.
    violated_policy: Optional[PolicyRule] = None


class AuditSummary(BaseModel):
    """Aggregate result of one audit run."""
    model_config = ConfigDict(frozen=True)

    total_gateway_flows: int = 0
    total_endpoint_flows: int = 0
    policy_count: int = 0
    blind_spots: List[BlindSpot] = []
    violations: List[PolicyViolation] = []

    def to_report_context(self) -> Dict[str, Any]:
        """
        Reduce the summary to what the report generator is allowed to see.

        Returns:
            Aggregate counts plus the first description of each finding category
        """
        return {
            "total_gateway_flows": self.total_gateway_flows,
            "total_endpoint_flows": self.total_endpoint_flows,
            "policy_count": self.policy_count,
            "blind_spot_count": len(self.blind_spots),
            "blind_spot_example": self.blind_spots[0].description if self.blind_spots else "None",
            "violation_count": len(self.violations),
            "violation_example": self.violations[0].description if self.violations else "None",
        }

    def chart_data(self) -> List[Dict[str, Any]]:
        """Dashboard bars in display order."""
        return [
            {"name": "Policies", "value": self.policy_count},
            {"name": "Gateway Logs", "value": self.total_gateway_flows},
            {"name": "Endpoint Logs", "value": self.total_endpoint_flows},
            {"name": "Blind Spots", "value": len(self.blind_spots)},
            {"name": "Violations", "value": len(self.violations)},
        ]
