"""Spreadsheet / CSV decoding into raw positional rows."""
