"""Core types and errors."""
