"""Diagnostic and session logging."""
