"""HTTP surface: Flask blueprints and JSON error handling."""
