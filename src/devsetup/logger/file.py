from __future__ import annotations

import logging
from pathlib import Path

FILE_FORMAT = "%(asctime)s | %(run_id)s | [%(levelname)s] | %(name)s | %(message)s"


class RunContextFilter(logging.Filter):
    """
    Stamps run_id onto every record reaching the log file.
    Does not mutate message, args, or level.
    """

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        return True


def build_file_handler(logfile: Path, run_id: str) -> logging.FileHandler:
    logfile.parent.mkdir(parents=True, exist_ok=True)

    # delay: no empty file until the first record arrives
    handler = logging.FileHandler(logfile, encoding="utf-8", delay=True)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(RunContextFilter(run_id))
    return handler


def repoint_file_handler(
    handler: logging.FileHandler, new_logfile: Path, run_id: str
) -> None:
    new_logfile.parent.mkdir(parents=True, exist_ok=True)

    handler.acquire()
    try:
        handler.close()
        handler.baseFilename = str(new_logfile)
        handler.stream = None  # reopened lazily on next emit
        for f in handler.filters:
            if isinstance(f, RunContextFilter):
                f.run_id = run_id
    finally:
        handler.release()
