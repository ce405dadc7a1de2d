"""
merkle-drop Command Line Interface.

This package provides command-line tools for computing Merkle roots over
items or claims, generating inclusion proofs, and verifying them.
"""

# Import the main CLI entry point
from .main import cli

# Re-export for easier imports
__all__ = [
    'cli',
]
