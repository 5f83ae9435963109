# vmware_inventory/exporters/registry.py
"""
Exporter registry.
Maps output format names to exporter classes.
"""

from typing import Dict, List, Optional, Type
import logging

from .base_exporter import TabularExporter
from .csv_exporter import CsvExporter
from .json_exporter import JsonExporter


class ExporterRegistry:
    """
    Registry of available exporters.
    """

    def __init__(self):
        self.logger = logging.getLogger('exporter.registry')
        self.exporters: Dict[str, Type[TabularExporter]] = {}
        for exporter_class in (CsvExporter, JsonExporter):
            self.register(exporter_class)

    def register(self, exporter_class: Type[TabularExporter]):
        self.exporters[exporter_class.format_name] = exporter_class

    def get_exporter(self, format_name: str, headers: List[str] = None) -> Optional[TabularExporter]:
        """
        Create an exporter for the given format.

        Args:
            format_name: Output format, e.g. 'csv'
            headers: Column headers, defaults to the inventory headers

        Returns:
            TabularExporter instance, or None if the format is unknown
        """
        exporter_class = self.exporters.get(format_name.lower())
        if exporter_class is None:
            self.logger.debug(f"No exporter found for format={format_name}")
            return None
        return exporter_class(headers)

    def list_formats(self) -> List[str]:
        return sorted(self.exporters)


# Global registry instance
registry = ExporterRegistry()
