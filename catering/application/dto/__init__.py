"""Data transfer objects between the API and use cases."""
