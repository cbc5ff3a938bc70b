"""
Shared test doubles for incremental offset tests.
"""


class RecordingStatement:
    """Statement double that records every bind call."""

    def __init__(self):
        self.calls = []

    def bind_long(self, position, value):
        self.calls.append(("long", position, value))

    def bind_bytes(self, position, value):
        self.calls.append(("bytes", position, value))
