"""speedgeo: area algebra and geohash codec on a locally planar Earth model."""
