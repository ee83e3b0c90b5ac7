"""Context-augmented chat core: prompt assembly and conversation titles."""

__version__ = "0.1.0"
