"""Application DTOs (read models returned by services)."""
