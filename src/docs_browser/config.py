"""Runtime configuration read from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

CORPUS_ENV = "DOCS_BROWSER_CORPUS"
LOG_LEVEL_ENV = "DOCS_BROWSER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Settings for the documentation browser.

    Attributes:
        corpus_path: JSON corpus file or RST documentation directory; None
            selects the bundled corpus.
        log_level: Name of the logging level.
    """

    corpus_path: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables.

        Returns:
            Settings instance.
        """
        corpus = os.getenv(CORPUS_ENV, "").strip()
        return cls(
            corpus_path=Path(corpus).expanduser() if corpus else None,
            log_level=os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
        )

    def configure_logging(self) -> None:
        """Configure root logging at the configured level."""
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.WARNING),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
