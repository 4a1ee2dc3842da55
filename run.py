# -*- coding: utf-8 -*-

"""
Main entry point for launching the Seismic Toolkit converter.
"""

import sys

from seismic_toolkit.cli import console_main

if __name__ == '__main__':
    sys.exit(console_main())
