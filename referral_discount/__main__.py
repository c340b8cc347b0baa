"""
Entry point.

Run: python -m referral_discount < input.json
"""

import sys

from referral_discount.cli import main


if __name__ == "__main__":
    sys.exit(main())
