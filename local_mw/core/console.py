"""Serialized console channel shared by concurrent resolutions.

Prompts, their answers and verbose diagnostics all pass through one lock, so
output from two repositories never interleaves with a pending prompt.
"""

import sys
import logging
import threading
from typing import Optional, TextIO

from .logger import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class ConsoleChannel:
    """Confirmation prompts and diagnostic logging under a single lock."""

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None
    ):
        """Initialize the channel.

        Args:
            input_stream: Where answers are read from (default: stdin)
            output_stream: Where prompts are written to (default: stdout)
        """
        self._input = input_stream
        self._output = output_stream
        self._lock = threading.Lock()

    @property
    def input_stream(self) -> TextIO:
        return self._input if self._input is not None else sys.stdin

    @property
    def output_stream(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question and wait for the answer.

        The prompt write and the answer read form one critical section.

        Args:
            message: Prompt text (without the [y/N] suffix)

        Returns:
            True if the answer starts with 'y' or 'Y'
        """
        with self._lock:
            out = self.output_stream
            out.write(message)
            out.write(" [y/N]: ")
            out.flush()
            response = self.input_stream.readline()
        return is_affirmative(response)

    def log(self, message: str, level: int = logging.DEBUG) -> None:
        """Emit one diagnostic record while holding the channel lock."""
        if not logger.isEnabledFor(level):
            return
        with self._lock:
            logger.log(level, message)

    def debug(self, message: str) -> None:
        self.log(message, logging.DEBUG)

    def warning(self, message: str) -> None:
        self.log(message, logging.WARNING)


def is_affirmative(response: str) -> bool:
    """Check if a typed answer means yes."""
    return bool(response) and response[0] in ('y', 'Y')
