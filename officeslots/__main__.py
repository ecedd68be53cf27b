"""
Convenience entry point for running officeslots directly.

Usage: python -m officeslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
