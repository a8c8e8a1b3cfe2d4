"""JSON descriptor loading."""
