"""
Test package for the context kitchen.

This package contains tests for:
- Cookbook registration and ingredient parsing
- Token resolution, memoization and cycle detection
- Materialization, budget planning and cook provenance
- The human-in-the-loop example
"""
