# vmware_inventory/utils/logging_config.py
"""
Centralized logging configuration for the inventory tool.
Console output goes to stderr so that stdout stays free for exported data.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from datetime import datetime


class LoggingConfig:
    """Manages logging configuration for the entire application"""

    @staticmethod
    def setup_logging(log_level='INFO', enable_debug=False, log_to_file=False, log_dir='logs'):
        """
        Set up logging for the application

        Args:
            log_level: Default log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
            enable_debug: Enable debug logging (includes raw vSAN dumps)
            log_to_file: Whether to log to files
            log_dir: Directory for log files
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if enable_debug else getattr(logging, log_level.upper()))

        # Clear existing handlers
        root_logger.handlers.clear()

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        # Console handler (always present)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if enable_debug else getattr(logging, log_level.upper()))
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        if log_to_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            # Main application log file (rotating)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path / 'vmware_inventory.log', maxBytes=10 * 1024 * 1024, backupCount=5
            )
            file_handler.setLevel(logging.DEBUG if enable_debug else logging.INFO)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)

            # Error log file (errors only)
            error_handler = logging.handlers.RotatingFileHandler(
                log_path / 'errors.log', maxBytes=5 * 1024 * 1024, backupCount=3
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(error_handler)

            # Per-run debug log
            if enable_debug:
                debug_log_file = log_path / f'debug_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
                debug_handler = logging.FileHandler(debug_log_file)
                debug_handler.setLevel(logging.DEBUG)
                debug_handler.setFormatter(detailed_formatter)
                root_logger.addHandler(debug_handler)

        LoggingConfig._configure_component_loggers(enable_debug)

    @staticmethod
    def _configure_component_loggers(enable_debug):
        """Configure logging levels for specific components"""

        # SOAP client loggers (usually too verbose)
        logging.getLogger('pyVmomi').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)

        logging.getLogger('config_manager').setLevel(logging.INFO)

        for component in ('collector', 'subcollector', 'processor', 'vcenter_connector', 'exporter'):
            logging.getLogger(component).setLevel(logging.DEBUG if enable_debug else logging.INFO)

    @staticmethod
    def get_logger(name):
        """Get a logger for a specific component"""
        return logging.getLogger(name)


# Convenience functions
def setup_logging(log_level='INFO', enable_debug=False, log_to_file=False, log_dir='logs'):
    """Convenience function to set up logging"""
    LoggingConfig.setup_logging(log_level, enable_debug, log_to_file, log_dir)


def get_logger(name):
    """Convenience function to get a logger"""
    return LoggingConfig.get_logger(name)
