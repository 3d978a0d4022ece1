"""Input handling and the pygame viewer."""
