"""Core - configuration, errors, iteration and the loader facade."""
