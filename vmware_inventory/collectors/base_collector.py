# vmware_inventory/collectors/base_collector.py
"""
Base collector class for inventory collectors.
Provides common functionality for result handling, error handling and raw data output.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import logging
import json
from datetime import datetime
from pathlib import Path

from ..exceptions import InventoryError


class CollectionResult:
    """Container for collection results with metadata"""

    def __init__(self, success: bool, data: Any = None, error: str = None, metadata: Dict = None):
        self.success = success
        self.data = data
        self.error = error
        self.metadata = metadata or {}
        self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict:
        """Convert result to dictionary for serialization"""
        return {
            'success': self.success,
            'data': self.data,
            'error': self.error,
            'metadata': self.metadata,
            'timestamp': self.timestamp
        }


class BaseCollector(ABC):
    """
    Abstract base class for collectors.

    A collector owns one connection to a management server for the duration
    of a run and produces a CollectionResult.
    """

    def __init__(self, name: str, config: Dict):
        self.name = name
        self.config = config
        self.logger = logging.getLogger(f"collector.{name}")

        # Common configuration
        self.host = config.get('host')
        self.port = config.get('port', 443)
        self.username = config.get('username')
        self.timeout = config.get('timeout', 30)

    @abstractmethod
    def get_system_state(self) -> Any:
        """
        Gather the collector's data.

        Raises:
            InventoryError: On unrecoverable failures
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """
        Validate that the collector has all required configuration.

        Returns:
            bool: True if configuration is valid
        """
        pass

    def collect(self) -> CollectionResult:
        """Run the collection, converting fatal errors into a failed result"""
        try:
            self.log_collection_start()

            if not self.validate_config():
                return CollectionResult(
                    False,
                    error="Invalid configuration",
                    metadata=self.create_metadata()
                )

            data = self.get_system_state()

            result = CollectionResult(
                success=True,
                data=data,
                metadata=self.create_metadata(self.describe_data(data))
            )

            self.log_collection_end(result)
            return result

        except InventoryError as e:
            return self.handle_collection_error(e, "inventory collection")

    def describe_data(self, data: Any) -> Dict:
        """Metadata describing collected data, overridden by subclasses"""
        return {}

    def get_connection_info(self) -> Dict:
        """Get connection information for logging/debugging"""
        return {
            'host': self.host,
            'port': self.port,
            'username': self.username,
            'collector_type': self.__class__.__name__
        }

    def log_collection_start(self):
        """Log the start of collection process"""
        self.logger.info(f"Starting collection from {self.host}:{self.port}")

    def log_collection_end(self, result: CollectionResult):
        """Log the end of collection process"""
        if result.success:
            self.logger.info("Collection completed successfully")
        else:
            self.logger.error(f"Collection failed: {result.error}")

    def log_collection_progress(self, step: str, detail: str = None):
        """Log collection progress"""
        if detail:
            self.logger.debug(f"[{step}] {detail}")
        else:
            self.logger.debug(f"Starting: {step}")

    def handle_collection_error(self, error: Exception, context: str = "") -> CollectionResult:
        """Handle collection errors with consistent logging"""
        context_prefix = f"[{context}] " if context else ""
        error_msg = f"{context_prefix}Collection failed: {str(error)}"

        self.logger.error(error_msg)
        self.logger.debug("Collection failure details", exc_info=error)

        metadata = {
            'collector_type': self.__class__.__name__,
            'connection_info': self.get_connection_info(),
            'error_context': context
        }
        if isinstance(error, InventoryError):
            metadata['error'] = error.to_dict()

        return CollectionResult(success=False, error=error_msg, metadata=metadata)

    def save_raw_data(self, data: Any, filename: str, output_dir: Path):
        """
        Save raw collected data to file.

        Args:
            data: Data to save
            filename: Output filename
            output_dir: Output directory path
        """
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            output_file = output_dir / filename

            with open(output_file, 'w') as f:
                if isinstance(data, (dict, list)):
                    json.dump(data, f, indent=2, default=str)
                else:
                    f.write(str(data))

            self.logger.debug(f"Saved raw data to {output_file}")

        except OSError as e:
            self.logger.error(f"Failed to save raw data to {filename}: {e}")

    def create_metadata(self, additional_metadata: Dict = None) -> Dict:
        """Create standard metadata for collection results"""
        metadata = {
            'collector_type': self.__class__.__name__,
            'connection_info': self.get_connection_info(),
            'collection_timestamp': datetime.now().isoformat()
        }

        if additional_metadata:
            metadata.update(additional_metadata)

        return metadata
