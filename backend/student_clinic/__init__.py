"""Student health clinic backend."""
