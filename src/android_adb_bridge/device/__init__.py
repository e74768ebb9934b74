"""Device selection, discovery and stream binding."""
