"""Core control protocol implementation.

This package contains the command protocol layer of the client:
- Typed command parameters and their wire rendering
- The request/response exchange over the control socket
- Decoding of the statistics table into records
- Exception taxonomy
- Logging configuration

The core package has no knowledge of how the socket path is found or how
results are displayed; those concerns belong to the command-line layer.
"""
