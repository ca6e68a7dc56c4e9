"""Structured note analyzer: CUSIP -> filing -> document -> note terms."""

__version__ = "0.1.0"
