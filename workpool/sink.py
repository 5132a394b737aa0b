# workpool/sink.py
from __future__ import annotations

import threading
from pathlib import Path
from typing import Union


class OutputSink:
    """
    Single shared append-only destination for result records.

    All writers go through one lock that belongs to this sink alone, so each
    record lands as one complete line. Relative order between writers is
    whatever order they reach the lock in.
    """

    def __init__(self, target: Union[str, Path], *, encoding: str = "utf-8") -> None:
        self.target = Path(target)
        self.encoding = encoding
        self._lock = threading.Lock()
        self.records_written = 0
        self.write_errors = 0

    def append(self, line: str) -> bool:
        """
        Append one record. I/O and encoding failures are reported and counted,
        never raised. Returns True when the record was written.

        A record must be a single line: embedded "\\n" or "\\r" raise ValueError.
        """
        record = line[:-1] if line.endswith("\n") else line
        if "\n" in record or "\r" in record:
            raise ValueError("record must be a single line")

        with self._lock:
            try:
                # Encoded up front so a bad record never reaches the file half-written.
                data = (record + "\n").encode(self.encoding)
                with self.target.open("ab") as fh:
                    fh.write(data)
                    fh.flush()
            except (OSError, UnicodeError) as e:
                self.write_errors += 1
                print(f"[SINK] Error writing to {self.target} (record dropped): {e}")
                return False
            self.records_written += 1
            return True

    def reset(self) -> None:
        with self._lock:
            self.target.parent.mkdir(parents=True, exist_ok=True)
            self.target.write_bytes(b"")

    def read_lines(self) -> list[str]:
        # Split on "\n" only: that is the record separator append() writes.
        with self._lock:
            if not self.target.exists():
                return []
            text = self.target.read_bytes().decode(self.encoding)
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines
