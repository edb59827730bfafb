"""Utility helpers for familyGraph."""
