"""
ResearchHub

Entry point for embedding ResearchHub in a UI shell:
- Logging setup
- AppSession factory (data dir from RESEARCHHUB_DATA_DIR)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from services.session import AppSession


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging; LOG_LEVEL overrides the default INFO."""
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.INFO)


def create_session(data_dir: Optional[str | Path] = None) -> AppSession:
    """Create an AppSession with the default Groq and Semantic Scholar backends."""
    return AppSession(data_dir)
