#!/usr/bin/env python3
"""Play today's timed trivia quiz in the terminal."""

import sys

from timed_trivia.cli import main

if __name__ == "__main__":
    sys.exit(main())
