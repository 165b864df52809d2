"""HTTP API for WrappedUp."""
