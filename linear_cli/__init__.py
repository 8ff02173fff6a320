"""
linear-cli: command-line client for the Linear GraphQL API.

Usage:
    linear-cli <command> [args]       # installed entry point
    python -m linear_cli <command>    # from a checkout

Requires: LINEAR_API_KEY in the environment or in .env.
"""

__version__ = "0.1.0"
