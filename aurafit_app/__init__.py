"""AURAFIT recommendation service package."""
