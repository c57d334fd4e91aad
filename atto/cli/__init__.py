"""
Atto command-line interface.

Usage:
    atto routes <module:app>
    atto match <module:app> <path> [-m METHOD]
    atto assemble <module:app> <name> [-p key=value ...] [-q key=value ...]
    atto serve <module:app> [--host HOST] [--port PORT]
"""

__cli_name__ = "atto"


def main():
    """Wrapper to avoid eager import of __main__ which causes warnings with -m."""
    from .__main__ import main as _main
    return _main()
