"""
Firewall policy XML parser.

Expected shape, at any depth in the document::

    <Policy><Name>HTTP-Proxy</Name><Type>PacketFilter</Type><Action>Allow</Action></Policy>
"""
import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional
from app.parsers.base import BaseParser
from app.models.base import PolicyRule, TrafficAction

logger = logging.getLogger(__name__)

# Checked in order, first substring hit wins.
POLICY_ACTION_KEYWORDS = [
    ("allow", TrafficAction.ALLOW),
    ("deny", TrafficAction.DENY),
    ("drop", TrafficAction.DROP),
]


def map_policy_action(action_text: str) -> TrafficAction:
    """Map free-form policy action text to a TrafficAction."""
    lowered = (action_text or "").lower()
    for keyword, action in POLICY_ACTION_KEYWORDS:
        if keyword in lowered:
            return action
    return TrafficAction.UNKNOWN


def local_name(tag: str) -> str:
    """Strip a "{namespace}" prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _iter_local(node: ET.Element, tag: str) -> Iterator[ET.Element]:
    """Iterate elements named tag in document order, ignoring namespaces."""
    for element in node.iter():
        if isinstance(element.tag, str) and local_name(element.tag) == tag:
            yield element


class PolicyXMLParser(BaseParser):
    """Parser for firewall policy configuration exported as XML."""

    def parse(self, text: str) -> List[PolicyRule]:
        """
        Parse policy XML into PolicyRule objects in document order.

        Args:
            text: Raw XML text

        Returns:
            List of PolicyRule objects, empty when the markup is malformed
            or contains no Policy elements
        """
        policies: List[PolicyRule] = []
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            logger.warning(f"Malformed policy XML, no policies parsed: {str(e)}")
            return policies

        for index, node in enumerate(_iter_local(root, "Policy")):
            name = self._child_text(node, "Name") or f"Policy-{index}"
            rule_type = self._child_text(node, "Type") or "Unknown"
            action = map_policy_action(self._child_text(node, "Action") or "")
            policies.append(PolicyRule(
                name=name,
                rule_type=rule_type,
                action=action,
                description=self._child_text(node, "Description"),
            ))
            logger.debug(f"Parsed policy {name} ({rule_type}) -> {action.value}")

        if not policies:
            logger.warning("No policies found via standard parsing, returning empty list")
        else:
            logger.info(f"Parsed {len(policies)} policies")
        return policies

    def _child_text(self, node: ET.Element, tag: str) -> Optional[str]:
        """Return stripped text content of the first descendant with the given tag."""
        for child in _iter_local(node, tag):
            if child is node:
                continue
            return "".join(child.itertext()).strip() or None
        return None


def parse_policy_xml(text: str) -> List[PolicyRule]:
    """Parse policy XML text into PolicyRule objects."""
    return PolicyXMLParser().parse(text)
