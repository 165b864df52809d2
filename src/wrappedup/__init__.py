"""WrappedUp - identity and token service for the WrappedUp book catalog."""

__version__ = "0.1.0"
