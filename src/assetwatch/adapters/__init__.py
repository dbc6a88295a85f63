# src/assetwatch/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (rate APIs)
- Persistence (investment storage)
- Formatting (text output)
"""

__all__ = []
