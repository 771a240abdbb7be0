"""Server building blocks: buffers, i18n, sessions, profiling, logging, case mapping and mapped files."""

__version__ = "0.1.0"