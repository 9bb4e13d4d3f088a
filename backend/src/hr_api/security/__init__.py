"""Security package: access policy, authentication and password hashing."""
