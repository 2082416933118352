"""Map projection helpers for tile rendering."""
