"""Tests de mcp."""
