# vmware_inventory/exporters/json_exporter.py
"""
JSON exporter: a list of objects keyed by the column headers.
Values are rendered exactly as in the CSV output.
"""

import json
from typing import List, TextIO

from .base_exporter import TabularExporter
from ..models import InventoryRow


class JsonExporter(TabularExporter):
    format_name = 'json'

    def write_rows(self, stream: TextIO, rows: List[InventoryRow]):
        records = [row.to_dict(self.headers) for row in rows]
        json.dump(records, stream, indent=2)
        stream.write('\n')
