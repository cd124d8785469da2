"""Utility modules for ulpm."""
