#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Demo printing utility.

Usage:
    python scripts/printhis.py -a 192.168.1.23:9100 text receipt.txt
    python scripts/printhis.py -d /dev/usb/lp0 image logo.png
"""

import sys

from hoinprint.cli import main

if __name__ == "__main__":
    sys.exit(main())
