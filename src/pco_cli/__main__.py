"""
Entry point for running pco-cli as a module.

This allows users to run the CLI using:
    python -m pco_cli [command] [options]
"""

from pco_cli.cli.app import main

if __name__ == "__main__":
    main()
