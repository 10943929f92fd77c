"""Book catalog application."""
