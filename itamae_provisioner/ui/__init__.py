"""Progress sinks for provisioning runs."""

import logging


class TranscriptUi:
    """Progress sink that logs every message and keeps a transcript.

    The transcript is returned to the host as the result of a provisioning
    run so that remote output reaches the user.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.lines: list[str] = []

    def announce(self, text: str) -> None:
        self.logger.info("==> %s", text)
        self.lines.append(f"==> {text}")

    def detail(self, text: str) -> None:
        self.logger.info("    %s", text)
        self.lines.append(f"    {text}")

    @property
    def transcript(self) -> str:
        """Return all recorded lines joined by newlines."""
        return "\n".join(self.lines)


__all__ = ["TranscriptUi"]
