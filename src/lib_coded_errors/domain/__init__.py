"""Domain layer: sentinels, casing rules, and the library error taxonomy."""
