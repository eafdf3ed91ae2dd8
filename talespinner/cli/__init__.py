"""Command line interface for TaleSpinner."""
