"""Exceptions raised by the export package."""


class ExportError(Exception):
    """An encoder or file save could not produce the requested document."""
