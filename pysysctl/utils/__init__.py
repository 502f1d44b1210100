"""Utility modules for the pysysctl application.

This package contains helpers for reading structured documents from disk and
for rendering configuration hierarchies as text.
"""
