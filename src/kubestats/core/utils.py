"""Utility functions and decorators."""

import logging.config
import threading
import structlog
import yaml
from pathlib import Path
from typing import Callable, Optional, Union
from tenacity import retry, retry_if_exception, retry_if_exception_type, stop_after_attempt, wait_exponential


def retry_with_backoff(
    max_retries: int = 3,
    backoff_factor: float = 1.5,
    max_wait: float = 60.0,
    retry_on: Optional[Callable[[BaseException], bool]] = None
):
    """Decorator for retry with exponential backoff.
    
    Every exception is retried unless ``retry_on`` narrows it down.
    """
    return retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=backoff_factor, max=max_wait),
        retry=retry_if_exception(retry_on) if retry_on else retry_if_exception_type(),
        reraise=True
    )


def setup_logging(config_path: Optional[Union[str, Path]] = None,
                  log_level: str = "INFO",
                  log_format: str = "text") -> None:
    """Setup structured logging configuration."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if config_path or log_format == "json" else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class OneShotGate:
    """Lock-guarded flag that lets exactly one caller through per process.
    
    A single gate instance is shared by every thread that holds a reference
    to it, so concurrent collection cycles still fire it at most once.
    """
    
    def __init__(self):
        self._lock = threading.Lock()
        self._fired = False
    
    def fire(self) -> bool:
        """Return True for the first caller only."""
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True
    
    @property
    def fired(self) -> bool:
        return self._fired
    
    def reset(self) -> None:
        """Re-arm the gate. Intended for tests."""
        with self._lock:
            self._fired = False
