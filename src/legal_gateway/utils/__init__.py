"""Shared utilities: errors, logging, HTTP helpers and middleware."""
