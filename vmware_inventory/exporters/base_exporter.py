# vmware_inventory/exporters/base_exporter.py
"""
Base class for tabular exporters.
"""

import os
import sys
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, TextIO

from ..exceptions import ExportError
from ..models import InventoryRow, INVENTORY_HEADERS

STDOUT_PATH = '-'


class TabularExporter(ABC):
    """
    Writes ordered inventory rows with a fixed header to an output sink.

    Files are written to a temporary sibling and moved into place once
    complete, so a failed run never leaves a partial file behind.
    """

    format_name = ''

    def __init__(self, headers: List[str] = None):
        self.headers = list(headers or INVENTORY_HEADERS)
        self.logger = logging.getLogger(f'exporter.{self.format_name}')

    @abstractmethod
    def write_rows(self, stream: TextIO, rows: List[InventoryRow]):
        """Serialize rows to an open text stream"""
        pass

    def export(self, rows: List[InventoryRow], output_path: str) -> int:
        """
        Export rows to output_path ('-' for stdout).

        Returns:
            Number of rows written

        Raises:
            ExportError: If the sink cannot be created or written
        """
        if output_path == STDOUT_PATH:
            try:
                self.write_rows(sys.stdout, rows)
                sys.stdout.flush()
            except OSError as e:
                raise ExportError(f"Error writing {self.format_name} output to stdout", cause=e)
            return len(rows)

        target = Path(output_path)
        temp_path = target.with_name(f".{target.name}.tmp")

        try:
            with open(temp_path, 'w', newline='', encoding='utf-8') as f:
                self.write_rows(f, rows)
            os.replace(temp_path, target)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ExportError(f"Error writing {self.format_name} output to {target}", cause=e)

        self.logger.debug(f"Wrote {len(rows)} rows to {target}")
        return len(rows)
