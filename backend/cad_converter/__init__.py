"""
convert-to-cad backend package.

Bridges the Supabase job store, the external CAD generation service and the
`cad-files` storage bucket.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
