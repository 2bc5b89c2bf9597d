#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/utils/__init__.py
"""Shared utilities for criticdiff."""
