"""Line writer for generated records."""

import sys


class LineWriter:
    def __init__(self, stream=None):
        self._stream = stream if stream is not None else sys.stdout

    def write(self, line: str):
        self._stream.write(line + "\n")
        self._stream.flush()
