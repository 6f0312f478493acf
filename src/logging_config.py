import logging


def configure_logging(level: str = "INFO", fmt: str = None) -> None:
    """Apply the configured level to the root logger"""
    kwargs = {"level": getattr(logging, str(level).upper(), logging.INFO)}
    if fmt:
        kwargs["format"] = fmt
    logging.basicConfig(**kwargs)
