"""Tests de endpoints de la API."""
