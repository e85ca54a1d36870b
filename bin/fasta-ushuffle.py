#!/usr/bin/env python

"""
Read single-line FASTA from stdin (or --fastaFile) and write shuffled
sequences to stdout. Each shuffle preserves the counts of all k-lets of the
original sequence. Run with --help for the options.
"""

import sys

from kshuffle.cli import main


if __name__ == "__main__":
    sys.exit(main())
