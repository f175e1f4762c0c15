from delay_js.infrastructure.observability.logging import JsonFormatter, TextFormatter, setup_logging

__all__ = ["JsonFormatter", "TextFormatter", "setup_logging"]
