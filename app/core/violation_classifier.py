"""
Heuristic classification of risky gateway-allowed flows.

Each heuristic is an independent predicate/description pair. Every heuristic
is evaluated against every allowed gateway flow, so a single flow can yield
several violations.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from app.models.base import PolicyViolation, TrafficAction, TrafficFlow
from app.core.signature import flow_signature

logger = logging.getLogger(__name__)

MANAGEMENT_PORTS = frozenset({3389, 22, 23})
TELNET_PORT = 23
PRIVATE_PREFIXES = ("192.168.", "10.")

AddressClassifier = Callable[[str], bool]


def is_public_address(ip: str) -> bool:
    """Prefix check only; 172.16.0.0/12 and other private ranges count as public."""
    return not ip.startswith(PRIVATE_PREFIXES)


@dataclass(frozen=True)
class ViolationHeuristic:
    """A named risk check over one allowed gateway flow."""
    name: str
    predicate: Callable[[TrafficFlow, AddressClassifier], bool]
    describe: Callable[[TrafficFlow], str]


def _exposed_management_port(flow: TrafficFlow, is_public: AddressClassifier) -> bool:
    return is_public(flow.source_ip) and flow.dest_port in MANAGEMENT_PORTS


def _cleartext_legacy_protocol(flow: TrafficFlow, is_public: AddressClassifier) -> bool:
    return flow.dest_port == TELNET_PORT


DEFAULT_HEURISTICS: List[ViolationHeuristic] = [
    ViolationHeuristic(
        name="exposed_management_port",
        predicate=_exposed_management_port,
        describe=lambda flow: (
            f"High Risk: Allowed inbound management traffic ({flow.dest_port}) "
            f"from public IP {flow.source_ip}."
        ),
    ),
    ViolationHeuristic(
        name="cleartext_legacy_protocol",
        predicate=_cleartext_legacy_protocol,
        describe=lambda flow: "Legacy Protocol: Cleartext Telnet traffic allowed.",
    ),
]


class ViolationClassifier:
    """Evaluates an ordered list of heuristics against allowed gateway flows."""

    def __init__(self,
                 heuristics: Optional[Sequence[ViolationHeuristic]] = None,
                 address_classifier: AddressClassifier = is_public_address):
        self.heuristics = list(DEFAULT_HEURISTICS if heuristics is None else heuristics)
        self.address_classifier = address_classifier

    def classify_flow(self, flow: TrafficFlow) -> List[PolicyViolation]:
        """
        Evaluate every heuristic against a single flow.

        Args:
            flow: Gateway flow

        Returns:
            Violations in heuristic order; empty unless the flow was allowed
        """
        if flow.action != TrafficAction.ALLOW:
            return []

        violations = []
        for heuristic in self.heuristics:
            if heuristic.predicate(flow, self.address_classifier):
                violations.append(PolicyViolation(
                    flow_id=flow_signature(flow),
                    flow=flow,
                    description=heuristic.describe(flow),
                    heuristic=heuristic.name,
                ))
        return violations

    def classify(self, gateway_flows: Sequence[TrafficFlow]) -> List[PolicyViolation]:
        """Classify gateway flows, preserving input order."""
        violations = []
        for flow in gateway_flows:
            violations.extend(self.classify_flow(flow))
        logger.info(f"Found {len(violations)} policy violations across {len(gateway_flows)} gateway flows")
        return violations


def detect_violations(gateway_flows: Sequence[TrafficFlow]) -> List[PolicyViolation]:
    """Classify gateway flows with the default heuristics."""
    return ViolationClassifier().classify(gateway_flows)
