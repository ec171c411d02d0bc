"""Geographic data model and map projection."""
