"""Infrastructure adapters talking to the remote API."""
