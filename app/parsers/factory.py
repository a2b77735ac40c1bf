"""
Factory for creating audit input parser instances.
"""
import logging
from typing import Dict, Type
from app.parsers.base import BaseParser
from app.parsers.policy_parser import PolicyXMLParser
from app.parsers.traffic_parser import TrafficLogParser

# Configure logging
logger = logging.getLogger(__name__)


class ParserFactory:
    """Factory class for creating parser instances."""

    # Registry of available parsers, keyed by input kind
    _parsers: Dict[str, Type[BaseParser]] = {
        "policy_xml": PolicyXMLParser,
        "traffic_csv": TrafficLogParser,
    }

    @classmethod
    def register_parser(cls, kind: str, parser_class: Type[BaseParser]):
        """
        Register a new parser for an input kind.

        Args:
            kind: The input kind name
            parser_class: The parser class
        """
        logger.info(f"Registering parser for input kind: {kind}")
        cls._parsers[kind.lower()] = parser_class
        logger.debug(f"Parser registered successfully for input kind: {kind}")

    @classmethod
    def create_parser(cls, kind: str, **kwargs) -> BaseParser:
        """
        Create a parser instance for a specific input kind.

        Args:
            kind: The input kind name (case insensitive)
            **kwargs: Constructor arguments, e.g. origin for traffic logs

        Returns:
            Parser instance

        Raises:
            ValueError: If the input kind is not supported
        """
        logger.debug(f"Creating parser for input kind: {kind}")
        key = kind.lower()
        if key not in cls._parsers:
            logger.error(f"Unsupported input kind: {kind}")
            raise ValueError(f"No parser registered for input kind: {kind}")

        return cls._parsers[key](**kwargs)

    @classmethod
    def get_supported_kinds(cls) -> list:
        """
        Get list of supported input kinds.

        Returns:
            List of supported input kind names
        """
        return list(cls._parsers.keys())
