"""Inkwell - a personal journal kept as local files."""
