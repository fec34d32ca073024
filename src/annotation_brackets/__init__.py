"""annotation-brackets - mark translator insertions in rendered text.

Emphasised spans (``<i>``/``<em>``) that a translation uses for inserted
words are surrounded with ``[``...``]`` markers so the insertions remain
unambiguous once styling is lost or ignored.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from annotation_brackets.config import Settings

__version__ = "0.1.0"

# Handlers installed by setup_logging, replaced on each call
_installed_handlers: list[logging.Handler] = []


def setup_logging(settings: Settings) -> None:
    """Configure console logging, plus a rotating file if a log dir is set.

    Calling it again replaces the handlers from the previous call.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.app.log_level.upper())
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    log_dir = settings.app.log_dir
    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "annotation-brackets.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)
    _installed_handlers.append(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
