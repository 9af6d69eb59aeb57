"""Dialer: hands a tel: URI to the desktop's handler (xdg-open, open, a softphone CLI)."""

import logging
import subprocess
from collections.abc import Callable, Sequence

from callbook.infrastructure.phone import tel_uri

logger = logging.getLogger(__name__)

DEFAULT_DIAL_COMMAND = ("xdg-open",)


class CommandDialer:
    """Implements the Dialer port by running `<command> tel:<number>`."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_DIAL_COMMAND,
        *,
        default_region: str | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        if not command:
            raise ValueError("Dial command must be non-empty.")
        self._command = tuple(command)
        self._default_region = default_region
        self._run = runner

    def dial(self, phone_number: str) -> bool:
        uri = tel_uri(phone_number, self._default_region)
        if uri is None:
            logger.warning("Nothing to dial in %r", phone_number)
            return False
        try:
            self._run([*self._command, uri], check=True, capture_output=True)
        except (OSError, subprocess.SubprocessError):
            logger.error("Dialing %s with %s failed", uri, self._command[0], exc_info=True)
            return False
        logger.info("Dialing %s", uri)
        return True
