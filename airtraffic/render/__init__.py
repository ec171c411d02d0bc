"""Frame rendering core: decorations, frame clock, renderer and scene."""
