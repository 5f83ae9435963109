# vmware_inventory/processors/base_processor.py
"""
Base Processor
Base class for processors that turn collected sections into output records.
Mirrors the SubCollector pattern for consistency.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List
import logging


class BaseProcessor(ABC):
    """
    Abstract base class for section processors.
    """

    def __init__(self, system_name: str, config: Dict[str, Any] = None):
        """
        Initialize processor

        Args:
            system_name: Name of the vCenter being processed
            config: Processor configuration
        """
        self.system_name = system_name
        self.config = config or {}
        self.logger = logging.getLogger(f'processor.{self.get_section_name()}')

    @abstractmethod
    def get_section_name(self) -> str:
        """Return the name of the section this processor handles"""
        pass

    @abstractmethod
    def process(self, *sections) -> List[Any]:
        """Process collected sections into output records"""
        pass

    def log_start(self, item_count: int):
        """Log start of processing"""
        self.logger.info(f"Starting {self.get_section_name()} processing of {item_count} items for {self.system_name}")

    def log_end(self, record_count: int):
        """Log end of processing"""
        self.logger.info(f"Completed {self.get_section_name()} processing: {record_count} records")
