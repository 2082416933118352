"""Timestamped GPS positions and bounded traces of them."""
