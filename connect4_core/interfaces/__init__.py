"""
connect4_core.interfaces - User interfaces for the Connect Four core

Currently the text CLI in connect4_core.interfaces.cli.
"""

# Don't import anything here to avoid circular imports
__all__ = []
