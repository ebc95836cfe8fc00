#!/usr/bin/env python3
"""Entry point for the Connect-4 arena CLI."""

from c4arena.cli import main


if __name__ == "__main__":
    main()
