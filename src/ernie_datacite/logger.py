"""
Console logging is configured once from ``configs/log_conf.yml``; scripts add
a dated log file on top with ``script_log_init`` and release it again with
``script_log_end``.
"""

import logging
from datetime import datetime
from functools import lru_cache
from logging.config import dictConfig
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler

from . import LOG_NAME
from . import __version__ as ernie_datacite_version

LOG_CONF = Path(__file__).parent / "configs" / "log_conf.yml"


class FileRichHandler(RichHandler):
    """RichHandler writing to a log file it owns"""

    def __init__(self, log_file: Path, **kwargs) -> None:
        self.log_file = log_file
        self.stream = open(log_file, "a", encoding="utf-8")
        console = Console(
            force_terminal=False,
            file=self.stream,
            width=120,
            color_system="truecolor",
        )
        super().__init__(console=console, **kwargs)

    def close(self) -> None:
        try:
            if not self.stream.closed:
                self.stream.close()
        finally:
            super().close()


@lru_cache()
def log_configure() -> logging.Logger:
    """Configure stdout logging"""

    with open(LOG_CONF, "r") as f:
        config = yaml.load(f, Loader=yaml.FullLoader)
    dictConfig(config)
    stream_log = logging.getLogger(LOG_NAME)
    return stream_log


def _file_handlers(log: logging.Logger) -> list[FileRichHandler]:
    return [h for h in log.handlers if isinstance(h, FileRichHandler)]


def release_file_logging(log: logging.Logger) -> None:
    """Detach and close every log file attached to ``log``"""
    for handler in _file_handlers(log):
        log.removeHandler(handler)
        handler.close()


def file_logging(prefix: str, log_dir: Path = Path("logs")) -> tuple[logging.Logger, Path]:
    """Configure file logging; a logger writes to one file at a time"""

    now = datetime.now()
    log_file = log_dir / f"{prefix}.log-{now:%Y-%m-%d}"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    release_file_logging(datacite_log)
    fh = FileRichHandler(
        log_file,
        level=logging.DEBUG,
        log_time_format="[%X]",
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
        enable_link_path=False,
    )
    datacite_log.addHandler(fh)
    return datacite_log, log_file


def script_log_init(prefix: str, log_dir: Path = Path("logs")) -> logging.Logger:
    """Script log initialization"""
    log, log_file = file_logging(prefix, log_dir)
    log.info(f"[bold yellow]Starting {prefix}")
    log.info(f"File logging: {log_file}")
    log.info(f"Version: {ernie_datacite_version}")
    return log


def script_log_end(prefix: str, log: logging.Logger):
    """Script log completion"""
    log.info(f"[bold dark_green]✔ Completed {prefix}!")
    log.debug("")
    release_file_logging(log)


datacite_log = log_configure()
