"""Book Sphere: mood-adaptive reading with real-time sync."""
