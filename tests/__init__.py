"""Tests de Finanzas API."""
