"""HTTP routes: JSON API and HTML views."""
