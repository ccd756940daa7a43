"""Rich terminal frontend for the tile space engine."""
