# vmware_inventory/exporters/__init__.py
"""
Exporters for inventory rows
"""

from .base_exporter import TabularExporter, STDOUT_PATH
from .csv_exporter import CsvExporter
from .json_exporter import JsonExporter
from .registry import ExporterRegistry, registry

__all__ = [
    'TabularExporter',
    'STDOUT_PATH',
    'CsvExporter',
    'JsonExporter',
    'ExporterRegistry',
    'registry'
]
