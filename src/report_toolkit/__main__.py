"""Run the command line interface: python -m report_toolkit."""

import sys

from report_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
