# src/graphfold/core/__init__.py
"""Core infrastructure: indexed graph adapter, configuration, logging."""
