"""Core components for the pysysctl application.

This package contains the fundamental building blocks: the line parser, the
ordered settings store, the schema model, the validation engine with its
base check class, and the application settings manager.
"""
