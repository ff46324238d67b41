"""Core settings, paths and theming for ignorectl."""
