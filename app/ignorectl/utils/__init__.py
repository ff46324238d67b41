"""Shared utilities for ignorectl."""
