"""schema-extract: recover a type graph from Kotlin schema sources and emit JSON Schema."""

__version__ = "0.1.0"
