"""Entry point for ``python -m tz_payroll``."""

import sys

from tz_payroll.cli import main

if __name__ == "__main__":
    sys.exit(main())
