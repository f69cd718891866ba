"""Identity Link backend."""
