"""Command-line interface for the Java API diff."""
