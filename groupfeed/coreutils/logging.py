import logging
import os
from datetime import datetime


def setup_logging(level=logging.INFO, log_dir: str | None = "logs"):
    """Setup basic logging configuration

    Logs go to stderr and, when log_dir is given, to a dated file in it.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                os.path.join(
                    log_dir, f"groupfeed_{datetime.now().strftime('%Y-%m-%d')}.log"
                )
            )
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("groupfeed")
