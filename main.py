#!/usr/bin/env python3
"""
Sheet Localizer - Main entry point

Fills the empty locale columns of an Excel workbook with LLM translations
while keeping cell formatting intact.
"""

from sheet_localizer.cli import main

if __name__ == "__main__":
    main()
