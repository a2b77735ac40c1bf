"""
Blind spot detection: endpoint traffic the gateway never saw.
"""
import logging
from typing import AbstractSet, List, Sequence
from app.models.base import BlindSpot, TrafficFlow
from app.core.signature import build_signature_index, flow_signature

logger = logging.getLogger(__name__)


def describe_blind_spot(flow: TrafficFlow) -> str:
    return (
        f"Traffic from {flow.source_ip} to {flow.dest_ip}:{flow.dest_port} "
        f"seen on Endpoint but not Gateway."
    )


def find_blind_spots(endpoint_flows: Sequence[TrafficFlow], gateway_index: AbstractSet[str]) -> List[BlindSpot]:
    """
    Report every endpoint flow whose signature is absent from the gateway index.

    Args:
        endpoint_flows: Flows observed on endpoints
        gateway_index: Signatures of flows observed at the gateway

    Returns:
        One BlindSpot per unmatched endpoint flow, in input order. Repeated
        signatures each produce their own entry.
    """
    blind_spots = []
    for flow in endpoint_flows:
        signature = flow_signature(flow)
        if signature in gateway_index:
            continue
        blind_spots.append(BlindSpot(
            flow_id=signature,
            endpoint_flow=flow,
            description=describe_blind_spot(flow),
        ))
    return blind_spots


def detect_blind_spots(endpoint_flows: Sequence[TrafficFlow], gateway_flows: Sequence[TrafficFlow]) -> List[BlindSpot]:
    """Index the gateway flows and report endpoint flows missing from them."""
    gateway_index = build_signature_index(gateway_flows)
    logger.debug(f"Indexed {len(gateway_index)} distinct gateway signatures")
    blind_spots = find_blind_spots(endpoint_flows, gateway_index)
    logger.info(f"Found {len(blind_spots)} blind spots across {len(endpoint_flows)} endpoint flows")
    return blind_spots
