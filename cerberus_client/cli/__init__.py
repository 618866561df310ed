"""
Command-line interface for the Cerberus client.
"""
import sys
from typing import Optional, List

from cerberus_client.cli.commands import main_cli, build_parser
from cerberus_client.cli.utils import print_colored

# Exportación explícita de componentes públicos
__all__ = [
    'main_cli',
    'run_cli',
    'build_parser',
    'print_colored',
]


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI with the provided arguments.

    Args:
        argv: List of arguments (use sys.argv if None)

    Returns:
        Exit code
    """
    if argv is None:
        argv = sys.argv[1:]
    return main_cli(argv)
