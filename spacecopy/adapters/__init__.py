"""External adapters for spacecopy.

This package contains all external dependencies (Kibana HTTP API,
state files, command line) and provides implementations of the core
port interfaces.

Adapter Organization:

- kibana/: Adapters for the Kibana spaces API
- state/: Adapters for locally tracked resource state
- cli/: Command handlers and declaration file loading
"""
