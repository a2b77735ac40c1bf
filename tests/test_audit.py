"""
Unit tests for the audit entry point and summary model.
"""
import unittest
from app.core.audit import perform_audit
from app.parsers.policy_parser import parse_policy_xml
from app.parsers.traffic_parser import parse_traffic_csv
from app.models.base import AuditSummary, FlowOrigin, PolicyRule, TrafficAction, TrafficFlow

POLICY_XML = """<Policies>
  <Policy><Name>HTTP-Proxy</Name><Type>Proxy</Type><Action>Allow</Action></Policy>
  <Policy><Name>RDP-In</Name><Type>PacketFilter</Type><Action>Allow</Action></Policy>
</Policies>"""

GATEWAY_LOG = """Time,SourceIP,DestIP,DestPort,Protocol,Action
2024-01-01T10:00:00,192.168.1.10,8.8.8.8,53,UDP,Allow
2024-01-01T10:01:00,203.0.113.5,192.168.1.20,3389,TCP,Allow
2024-01-01T10:02:00,198.51.100.7,192.168.1.21,23,TCP,Allow
2024-01-01T10:03:00,198.51.100.8,192.168.1.21,22,TCP,Deny
"""

ENDPOINT_LOG = """Timestamp,Src,Dst,Port,Proto
2024-01-01T10:00:00,192.168.1.10,8.8.8.8,53,UDP
2024-01-01T10:05:00,192.168.1.20,192.168.1.30,445,TCP
"""


class TestPerformAudit(unittest.TestCase):
    """Test cases for perform_audit."""

    def test_end_to_end(self):
        """Test a full audit from raw text."""
        # Arrange
        policies = parse_policy_xml(POLICY_XML)
        gateway_flows = parse_traffic_csv(GATEWAY_LOG, FlowOrigin.GATEWAY)
        endpoint_flows = parse_traffic_csv(ENDPOINT_LOG, FlowOrigin.ENDPOINT)

        # Act
        summary = perform_audit(policies, gateway_flows, endpoint_flows)

        # Assert
        self.assertEqual(summary.policy_count, 2)
        self.assertEqual(summary.total_gateway_flows, 4)
        self.assertEqual(summary.total_endpoint_flows, 2)
        self.assertEqual(len(summary.blind_spots), 1)
        self.assertEqual(summary.blind_spots[0].flow_id, "192.168.1.20|192.168.1.30|445|TCP")
        self.assertEqual([v.heuristic for v in summary.violations],
                         ["exposed_management_port", "exposed_management_port", "cleartext_legacy_protocol"])

    def test_empty_inputs(self):
        """Test an all-empty audit is valid and zero-valued."""
        # Act
        summary = perform_audit([], [], [])

        # Assert
        self.assertEqual(summary, AuditSummary())
        self.assertEqual(summary.blind_spots, [])
        self.assertEqual(summary.violations, [])

    def test_endpoint_only_scenario(self):
        """Test a lone endpoint flow is a blind spot with no violations."""
        # Arrange
        endpoint_flows = [TrafficFlow(timestamp="2024-01-01", source_ip="172.16.0.9", dest_ip="172.16.0.20",
                                      dest_port=445, protocol="TCP", action=TrafficAction.ALLOW,
                                      origin=FlowOrigin.ENDPOINT)]

        # Act
        summary = perform_audit([], [], endpoint_flows)

        # Assert
        self.assertEqual(len(summary.blind_spots), 1)
        self.assertEqual(summary.blind_spots[0].endpoint_flow, endpoint_flows[0])
        self.assertEqual(summary.violations, [])

    def test_protocol_case_is_part_of_flow_identity(self):
        """Test "tcp" on the gateway does not cover "TCP" on the endpoint."""
        # Arrange
        gateway_flows = parse_traffic_csv(
            "Time,SourceIP,DestIP,DestPort,Protocol,Action\n"
            "2024-01-01,192.168.1.10,192.168.1.30,80,tcp,Allow\n",
            FlowOrigin.GATEWAY,
        )
        endpoint_flows = parse_traffic_csv(
            "Time,SourceIP,DestIP,DestPort,Protocol\n"
            "2024-01-01,192.168.1.10,192.168.1.30,80,TCP\n",
            FlowOrigin.ENDPOINT,
        )

        # Act
        summary = perform_audit([], gateway_flows, endpoint_flows)

        # Assert
        self.assertEqual(gateway_flows[0].protocol, "tcp")
        self.assertEqual(len(summary.blind_spots), 1)
        self.assertEqual(summary.blind_spots[0].flow_id, "192.168.1.10|192.168.1.30|80|TCP")

    def test_policies_only_counted(self):
        """Test policies contribute to the count but not to findings."""
        # Arrange
        policies = [PolicyRule(name="Deny-All", rule_type="PacketFilter", action=TrafficAction.DENY)]

        # Act
        summary = perform_audit(policies, [], [])

        # Assert
        self.assertEqual(summary.policy_count, 1)
        self.assertEqual(summary.violations, [])


class TestAuditSummary(unittest.TestCase):
    """Test cases for AuditSummary helpers."""

    def setUp(self):
        """Set up test fixtures."""
        self.summary = perform_audit(
            parse_policy_xml(POLICY_XML),
            parse_traffic_csv(GATEWAY_LOG, FlowOrigin.GATEWAY),
            parse_traffic_csv(ENDPOINT_LOG, FlowOrigin.ENDPOINT),
        )

    def test_report_context_carries_first_examples(self):
        """Test the report context holds counts and first descriptions only."""
        # Act
        context = self.summary.to_report_context()

        # Assert
        self.assertEqual(context["total_gateway_flows"], 4)
        self.assertEqual(context["blind_spot_count"], 1)
        self.assertEqual(context["violation_count"], 3)
        self.assertEqual(context["blind_spot_example"], self.summary.blind_spots[0].description)
        self.assertEqual(context["violation_example"], self.summary.violations[0].description)

    def test_report_context_for_empty_summary(self):
        """Test missing examples are reported as None text."""
        # Act
        context = AuditSummary().to_report_context()

        # Assert
        self.assertEqual(context["blind_spot_example"], "None")
        self.assertEqual(context["violation_example"], "None")

    def test_chart_data(self):
        """Test dashboard bars are in display order."""
        # Act
        bars = self.summary.chart_data()

        # Assert
        self.assertEqual([b["name"] for b in bars],
                         ["Policies", "Gateway Logs", "Endpoint Logs", "Blind Spots", "Violations"])
        self.assertEqual([b["value"] for b in bars], [2, 4, 2, 1, 3])


if __name__ == '__main__':
    unittest.main()
