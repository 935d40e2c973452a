"""CLI layer for bikeflip application."""
