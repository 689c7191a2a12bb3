"""vyparse — syntactic analysis for an indentation-sensitive contract language."""

__version__ = "0.1.0"
