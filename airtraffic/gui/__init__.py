"""PyQt5 host for the rendering core."""
