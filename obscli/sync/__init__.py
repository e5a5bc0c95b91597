"""Reconciliation: bring remote OBS projects in line with a manifest.

This package provides:
- Equivalence checking between a desired project and its remote state
- The per-project fetch/compare/upsert loop and its outcomes
"""
