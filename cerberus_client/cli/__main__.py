"""
Entry point to run the CLI as a module.
"""
import sys
from cerberus_client.cli.commands import main_cli


def main():
    """Main function for the console script entry point."""
    return main_cli()


if __name__ == "__main__":
    sys.exit(main())
