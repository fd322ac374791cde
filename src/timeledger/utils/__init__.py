"""Utility functions for timeledger."""
