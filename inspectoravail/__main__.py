"""
Convenience entry point for running inspectoravail directly.

Usage: python -m inspectoravail [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
