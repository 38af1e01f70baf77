"""Authentication: JWT tokens and password hashing."""
