"""
Unit tests for parser factory.
"""
import unittest
from app.parsers.factory import ParserFactory
from app.parsers.policy_parser import PolicyXMLParser
from app.parsers.traffic_parser import TrafficLogParser
from app.models.base import FlowOrigin


class TestParserFactory(unittest.TestCase):
    """Test cases for ParserFactory class."""

    def test_create_policy_parser(self):
        """Test creation of policy XML parser."""
        # Act
        parser = ParserFactory.create_parser("policy_xml")

        # Assert
        self.assertIsInstance(parser, PolicyXMLParser)

    def test_create_traffic_parser_with_origin(self):
        """Test creation of traffic parser passes the origin through."""
        # Act
        parser = ParserFactory.create_parser("traffic_csv", origin=FlowOrigin.ENDPOINT)

        # Assert
        self.assertIsInstance(parser, TrafficLogParser)
        self.assertEqual(parser.origin, FlowOrigin.ENDPOINT)

    def test_create_parser_case_insensitive(self):
        """Test creation of parser is case insensitive."""
        # Act
        parser = ParserFactory.create_parser("POLICY_XML")

        # Assert
        self.assertIsInstance(parser, PolicyXMLParser)

    def test_create_unknown_parser_raises_error(self):
        """Test creation of unknown parser raises ValueError."""
        # Act & Assert
        with self.assertRaises(ValueError) as context:
            ParserFactory.create_parser("pcap")

        self.assertIn("No parser registered for input kind", str(context.exception))

    def test_get_supported_kinds(self):
        """Test getting supported input kinds."""
        # Act
        kinds = ParserFactory.get_supported_kinds()

        # Assert
        self.assertIn("policy_xml", kinds)
        self.assertIn("traffic_csv", kinds)

    def test_register_new_parser(self):
        """Test registering a new parser."""
        # Setup
        class DummyParser:
            pass

        # Act
        ParserFactory.register_parser("dummy", DummyParser)
        try:
            parser = ParserFactory.create_parser("dummy")
        finally:
            ParserFactory._parsers.pop("dummy", None)

        # Assert
        self.assertIsInstance(parser, DummyParser)


if __name__ == '__main__':
    unittest.main()
