"""Base classes for top-level operations."""

import os
import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from ..config import RunConfiguration
from ..core.console import ConsoleChannel
from ..core.resolver import StatusResolver
from ..utils.filesystem import is_mediawiki_directory
from ..utils.git import GitProvider, SyncProvider

logger = logging.getLogger('local_mw')


class Operation(ABC):
    """Abstract base class for operations on a MediaWiki installation."""

    # Class attributes to be overridden by subclasses
    name: str = "base"
    description: str = "Base operation"

    def __init__(
        self,
        config: RunConfiguration,
        provider: Optional[SyncProvider] = None,
        channel: Optional[ConsoleChannel] = None,
        stream: Optional[TextIO] = None
    ):
        """Initialize operation.

        Args:
            config: Run configuration
            provider: Version-control capability (default: GitProvider)
            channel: Shared console channel for prompts and diagnostics
            stream: Where user-facing output is written (default: stdout)
        """
        self.config = config
        self.channel = channel or ConsoleChannel()
        self.provider = provider or GitProvider(
            timeout=config.git_timeout,
            channel=self.channel
        )
        self.stream = stream if stream is not None else sys.stdout
        self.resolver = StatusResolver(self.provider, config, self.channel)

    @abstractmethod
    def run(self) -> int:
        """Execute the operation.

        Returns:
            Process exit code
        """
        pass

    def validate_installation(self) -> None:
        """Check that the configured path is a MediaWiki installation.

        Raises:
            ValueError: If the path is missing or has the wrong layout
        """
        base_path = self.config.install_path
        if not os.path.isdir(base_path):
            raise ValueError(f"Invalid MediaWiki installation path: {base_path}")
        if not is_mediawiki_directory(base_path):
            raise ValueError(
                "Directory does not appear to be a MediaWiki installation. "
                "Expected files/directories not found "
                "(index.php, api.php, includes/, extensions/, skins/)."
            )

    def echo(self, text: str = "") -> None:
        """Write a line of user-facing output."""
        self.stream.write(text + "\n")
        self.stream.flush()
