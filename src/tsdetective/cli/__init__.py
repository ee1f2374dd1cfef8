"""tsdetective CLI."""
