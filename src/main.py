#!/usr/bin/env python3
"""
Main entry point for the verified contract source downloader.

This script orchestrates the download workflow:
1. Parse command-line arguments
2. Build the explorer client and pipeline
3. Fetch, decode and write every address
4. Save the run report
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from contract_sources import ContractSourcePipeline, ExplorerClient
from contract_sources.addresses import load_addresses_file
from contract_sources.clients.explorer import DEFAULT_API_URL, DEFAULT_CHAIN_ID
from contract_sources.reporter import log_run_summary, save_run_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser; defaults come from the environment."""
    parser = argparse.ArgumentParser(
        description='Download verified contract sources (and proxy implementations) from an Etherscan-compatible explorer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (can also be set in .env file):
  ETHERSCAN_API_KEY     Explorer API key
  ADDRESSES_FILE        File with one address per line, or a JSON array
  OUTPUT_DIR            Output root directory (default: contracts)
  CHAIN_ID              Chain ID sent to the explorer (default: 1)
  EXPLORER_API_URL      getsourcecode endpoint (default: Etherscan v2)
  REQUEST_DELAY_MS      Delay after every request, min 200 (default: 200)
  REQUEST_TIMEOUT       Per-request timeout in seconds (default: 30)

Priority: Command-line arguments > Environment variables > Defaults
        """
    )
    parser.add_argument(
        'addresses',
        nargs='*',
        help='Contract addresses to fetch, processed in order'
    )
    parser.add_argument(
        '--addresses-file',
        type=Path,
        default=os.getenv('ADDRESSES_FILE'),
        help='File with addresses to fetch (env: ADDRESSES_FILE)'
    )
    parser.add_argument(
        '--api-key',
        default=os.getenv('ETHERSCAN_API_KEY'),
        help='Explorer API key (env: ETHERSCAN_API_KEY)'
    )
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path(os.getenv('OUTPUT_DIR') or 'contracts'),
        help='Output root directory (env: OUTPUT_DIR, default: contracts)'
    )
    parser.add_argument(
        '--chain-id',
        type=int,
        default=int(os.getenv('CHAIN_ID') or DEFAULT_CHAIN_ID),
        help='Chain ID (env: CHAIN_ID, default: 1)'
    )
    parser.add_argument(
        '--api-url',
        default=os.getenv('EXPLORER_API_URL') or DEFAULT_API_URL,
        help='Explorer API endpoint (env: EXPLORER_API_URL)'
    )
    parser.add_argument(
        '--delay-ms',
        type=int,
        default=int(os.getenv('REQUEST_DELAY_MS') or '200'),
        help='Delay after every request in milliseconds, minimum 200 (env: REQUEST_DELAY_MS)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=float(os.getenv('REQUEST_TIMEOUT') or '30'),
        help='Per-request timeout in seconds (env: REQUEST_TIMEOUT, default: 30)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=False,
        help='Enable debug logging, also written to a log file in the output directory'
    )
    return parser


def configure_logging(debug: bool, output_dir: Path) -> None:
    """Log INFO to stderr; with --debug, DEBUG to stderr and a log file."""
    handlers = [logging.StreamHandler()]
    if debug:
        output_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(output_dir / 'fetch_contracts.log'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    # Keep urllib3 connection chatter out of debug logs
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv(override=True)

    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.debug, args.output_dir)

    if not args.api_key:
        parser.error("--api-key is required (or set ETHERSCAN_API_KEY environment variable)")

    addresses = list(args.addresses)
    if args.addresses_file:
        if not args.addresses_file.exists():
            parser.error(f"addresses file not found: {args.addresses_file}")
        addresses.extend(load_addresses_file(args.addresses_file))

    if not addresses:
        parser.error("no addresses given (pass them as arguments or via --addresses-file / ADDRESSES_FILE)")

    client = ExplorerClient(
        api_key=args.api_key,
        api_url=args.api_url,
        chain_id=args.chain_id,
        delay_s=args.delay_ms / 1000,
        timeout_s=args.timeout,
    )
    pipeline = ContractSourcePipeline(client, args.output_dir)

    report = pipeline.run(addresses)

    save_run_report(report, args.output_dir)
    log_run_summary(report)
    logger.info(f"Explorer requests issued: {client.request_count}")

    # Per-address failures are reported in logs and index.json, not the exit code
    return 0


if __name__ == '__main__':
    sys.exit(main())
