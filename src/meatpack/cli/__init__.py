"""Command-line interface for meatpack."""
