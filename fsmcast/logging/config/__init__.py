from .logging_config import LoggingConfig as LoggingConfig
