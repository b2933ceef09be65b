"""Database integration for dashsearch."""
