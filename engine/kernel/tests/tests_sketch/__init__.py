"""Sketch document, field and option tests."""
