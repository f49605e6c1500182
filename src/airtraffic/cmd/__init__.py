"""Command line interface modules.

This package provides the command-line tools for:
- Querying proxy information and statistics
- Enabling and disabling servers
- Reading and changing server weights
- Reporting connection errors

The command modules are thin wrappers over the core client.
"""
