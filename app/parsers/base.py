"""
Base parser for audit inputs.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Any

# Configure logging
logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for audit input parsers."""

    @abstractmethod
    def parse(self, text: str) -> List[Any]:
        """
        Parse raw input text into a list of normalized records.

        Implementations never raise for malformed text; they return an
        empty or partial list instead.

        Args:
            text: Raw file contents

        Returns:
            List of normalized records in input order
        """
        pass
