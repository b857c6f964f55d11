"""Hero draft counter assistant."""

__version__ = "0.1.0"
