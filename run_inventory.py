#!/usr/bin/env python3
"""
vCenter Host Inventory
Writes hardware and vSAN capacity facts of every ESXi host to CSV or JSON.
"""

import sys
import argparse
import getpass

from vmware_inventory.utils.logging_config import setup_logging, get_logger
from vmware_inventory.config.settings import initialize_config, write_default_config, SUPPORTED_FORMATS
from vmware_inventory.collectors import InventoryCollector
from vmware_inventory.exporters import registry, STDOUT_PATH
from vmware_inventory.exceptions import ExportError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='vCenter host hardware and vSAN capacity inventory')
    parser.add_argument('command', nargs='?', default='collect',
                        choices=['collect', 'init-config'],
                        help='Action to perform')
    parser.add_argument('--config', help='Path to inventory.yml')
    parser.add_argument('--host', help='vCenter hostname or IP')
    parser.add_argument('--user', help='vCenter username')
    parser.add_argument('--password', help='vCenter password (prompted if not provided)')
    parser.add_argument('--port', type=int, help='vCenter HTTPS port')
    parser.add_argument('--output', help="Output file path, '-' for stdout")
    parser.add_argument('--format', choices=SUPPORTED_FORMATS, help='Output format')

    tls = parser.add_mutually_exclusive_group()
    tls.add_argument('--insecure', dest='insecure', action='store_true', default=None,
                     help='Allow self-signed TLS certificates (default)')
    tls.add_argument('--secure', dest='insecure', action='store_false',
                     help='Verify TLS certificates')

    parser.add_argument('--anonymize', action='store_true', default=None,
                        help='Replace host and cluster names with generic labels')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Enable debug logging, including raw vSAN data per host')
    parser.add_argument('--parallel', action='store_true', default=None,
                        help='Query vSAN systems of several hosts concurrently')
    parser.add_argument('--workers', type=int, help='Number of concurrent vSAN queries')
    return parser


def collect_overrides(args) -> dict:
    """Map command line flags onto configuration sections"""
    return {
        'vcenter': {
            'host': args.host,
            'username': args.user,
            'password': args.password,
            'port': args.port,
            'insecure': args.insecure
        },
        'output': {
            'path': args.output,
            'format': args.format,
            'anonymize': args.anonymize
        },
        'collection': {
            'parallel_storage': args.parallel,
            'max_workers': args.workers,
            'debug': args.debug
        }
    }


def prompt_password() -> str:
    """Prompt for the vCenter password on the terminal"""
    return getpass.getpass(prompt='Password: ', stream=sys.stderr)


def run_inventory(config, logger) -> int:
    """Collect the inventory and write it out; returns the process exit status"""
    collector_config = {
        'host': config.vcenter.host,
        'port': config.vcenter.port,
        'username': config.vcenter.username,
        'password': config.vcenter.password,
        'insecure': config.vcenter.insecure,
        'timeout': config.vcenter.timeout,
        'anonymize': config.output.anonymize,
        'parallel_storage': config.collection.parallel_storage,
        'max_workers': config.collection.max_workers,
        'debug': config.collection.debug,
        'raw_output_dir': config.collection.raw_output_dir
    }

    exporter = registry.get_exporter(config.output.format)
    if exporter is None:
        logger.error(f"Unsupported output format '{config.output.format}'")
        return 1

    collector = InventoryCollector(config.vcenter.host, collector_config)
    result = collector.collect()

    if not result.success:
        # the collector has already logged the failure
        return 1

    try:
        count = exporter.export(result.data, config.output.path)
    except ExportError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    target = 'stdout' if config.output.path == STDOUT_PATH else config.output.path
    logger.info(f"Inventory metadata: {result.metadata.get('host_count')} hosts, "
                f"{result.metadata.get('vsan_hosts')} with vSAN")
    print(f"Wrote {count} hosts to {target}", file=sys.stderr)
    return 0


def main(argv=None) -> int:
    """Main function with command line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(enable_debug=bool(args.debug))
    logger = get_logger('inventory_main')

    if args.command == 'init-config':
        path = write_default_config(args.config or 'inventory.yml')
        print(f"📝 Default configuration written to {path}", file=sys.stderr)
        return 0

    try:
        config = initialize_config(args.config)
        config.apply_overrides(collect_overrides(args))
    except Exception as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        log_level=config.logging.level,
        enable_debug=config.collection.debug,
        log_to_file=config.logging.log_to_file,
        log_dir=config.logging.log_dir
    )

    if not config.validate_configuration():
        parser.print_usage(sys.stderr)
        return 1

    if not config.vcenter.password:
        try:
            config.vcenter.password = prompt_password()
        except (EOFError, KeyboardInterrupt) as e:
            print(f"\n❌ Error reading password: {e!r}", file=sys.stderr)
            return 1

    return run_inventory(config, logger)


if __name__ == "__main__":
    sys.exit(main())
