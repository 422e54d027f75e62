"""JSON schemas packaged with trafficsplit."""
