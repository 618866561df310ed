"""
Main commands for the Cerberus CLI.
"""
import argparse
import json
import logging
import os
import sys

from typing import Optional, List

from cerberus_client import __version__, init
from cerberus_client.cli.utils import print_colored
from cerberus_client.config.settings import REGION_ENV
from cerberus_client.core.common import CerberusError
from cerberus_client.utils.logging import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cerberus-auth", description="Cerberus authentication CLI")
    parser.add_argument("--version", action="store_true", help="Show client version")
    parser.add_argument("--url", help="Cerberus URL (CERBERUS_URL takes precedence)")
    parser.add_argument("--region", help=f"AWS region of the KMS key (defaults to {REGION_ENV})")
    parser.add_argument("--cerberus-token", help="Use an existing token instead of the instance role")
    parser.add_argument("--verbose", action="store_true", help="Log authentication steps to stderr")

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--token", action="store_true", help="Print a Cerberus token")
    actions.add_argument("--headers", action="store_true", help="Print session headers as JSON")
    actions.add_argument("--logout", action="store_true", help="Authenticate, then revoke the token")
    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Cerberus CLI.

    Args:
        argv: List of command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 on any Cerberus error)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Cerberus client version {__version__}")
        return 0

    if not (args.token or args.headers or args.logout):
        parser.print_help(sys.stderr)
        return 1

    if args.verbose:
        setup_logger(level=logging.DEBUG)

    region = args.region or os.environ.get(REGION_ENV)
    try:
        auth = init(url=args.url, region=region, token=args.cerberus_token)
        with auth:
            token = auth.get_token()
            if args.token:
                print(token)
            elif args.headers:
                print(json.dumps(auth.get_headers(), indent=2, sort_keys=True))
            else:
                auth.logout()
                print_colored("Token revoked", "green")
    except CerberusError as e:
        print_colored(f"Error: {e}", "red")
        return 1
    return 0
