"""Small convenience helpers built on the provider surface."""
