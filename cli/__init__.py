"""
Statefold CLI - Statechart interpreter tooling

Commands:
- statefold run - Send a file of events through an interpreter
- statefold inspect - Show an interpreter's initial state
- statefold version - Show version information
"""

from statefold import __version__

__all__ = ["__version__"]
