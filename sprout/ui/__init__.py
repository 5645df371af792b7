"""Interactive terminal UI for sprout."""
