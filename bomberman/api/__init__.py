"""HTTP surface over a background game loop."""
