"""Tests de unit."""
