"""Command line utilities for the invoicing dashboard."""
