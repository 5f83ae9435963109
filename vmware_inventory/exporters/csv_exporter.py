# vmware_inventory/exporters/csv_exporter.py
"""
CSV exporter: a header row followed by one row per host.
"""

import csv
from typing import List, TextIO

from .base_exporter import TabularExporter
from ..models import InventoryRow


class CsvExporter(TabularExporter):
    format_name = 'csv'

    def write_rows(self, stream: TextIO, rows: List[InventoryRow]):
        writer = csv.writer(stream)
        writer.writerow(self.headers)
        for row in rows:
            writer.writerow(row.as_record())
