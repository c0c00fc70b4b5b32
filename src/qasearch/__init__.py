"""qasearch — Evidence retrieval from search backends for question answering."""

__version__ = "0.1.0"
