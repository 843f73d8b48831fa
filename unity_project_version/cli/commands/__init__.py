"""CLI sub-command modules."""
