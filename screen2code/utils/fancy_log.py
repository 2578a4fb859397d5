import json
import logging
from rich.console import Console
from rich.logging import RichHandler
from screen2code.configs.logging_config import LoggingConfig


# generation context passed through `extra=`
CONTEXT_FIELDS = ("image_id", "code_format")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any generation context attached."""
    def format(self, record):
        log_record = {
            "time": self.formatTime(record),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_record[key] = str(value)
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False)


class FancyLogger(logging.Logger):
    """
    Logger with Rich console output and optional file output.
    """
    FORMAT = "%(message)s"

    def __init__(self, name: str):
        """
        Args:
            name: The logger name
        """
        config = LoggingConfig()

        logging.Logger.__init__(self, name, config.level)

        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=config.show_path,
            markup=False,
            rich_tracebacks=config.rich_tracebacks,
            tracebacks_show_locals=config.tracebacks_show_locals
        )
        rich_handler.setLevel(logging.getLevelName(config.level))
        rich_handler.setFormatter(logging.Formatter(self.FORMAT))
        self.addHandler(rich_handler)

        if config.file_enabled:
            self._setup_file_logging(config)

    def _setup_file_logging(self, config: LoggingConfig):
        """Set up file logging, creating the log directory when missing."""
        log_dir = config.file_path.parent
        if not log_dir.exists():
            log_dir.mkdir(parents=True, exist_ok=True)

        file_formatter = JsonFormatter() if config.json_logging else logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        file_handler = logging.FileHandler(config.file_path)
        file_handler.setLevel(logging.getLevelName(config.level))
        file_handler.setFormatter(file_formatter)
        self.addHandler(file_handler)


def get_logger(name: str) -> FancyLogger:
    """
    Get a configured logger instance.

    Args:
        name: The logger name

    Returns:
        A configured FancyLogger instance
    """
    return logging.getLogger(name)


def setup_logger(level: str = None) -> None:
    """
    Configure the global logging settings for screen2code while keeping
    third-party library logs quiet.
    """
    config = LoggingConfig()
    level = level or config.level

    logging.setLoggerClass(FancyLogger)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    package_logger = get_logger("screen2code")
    package_logger.setLevel(logging.getLevelName(level))
    package_logger.propagate = False
