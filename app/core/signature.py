"""
Flow signatures and the membership index built over them.
"""
from typing import FrozenSet, Iterable
from app.models.base import TrafficFlow


def flow_signature(flow: TrafficFlow) -> str:
    """Return the (source, destination, port, protocol) identity of a flow."""
    return flow.signature


def build_signature_index(flows: Iterable[TrafficFlow]) -> FrozenSet[str]:
    """
    Build a membership set of flow signatures.

    Addresses are compared as plain strings; no CIDR folding or other
    normalization is applied.
    """
    return frozenset(flow_signature(flow) for flow in flows)
