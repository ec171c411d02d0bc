from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

LOG_DIR = Path("logs")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: Path = LOG_DIR) -> None:
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / "airtraffic.log"
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=[
            logging.FileHandler(logfile),
            logging.StreamHandler(),
        ],
    )
