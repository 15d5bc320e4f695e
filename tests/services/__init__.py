"""Tests de services."""
