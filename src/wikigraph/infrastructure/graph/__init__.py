"""Graph projection of the link index (NetworkX)."""
