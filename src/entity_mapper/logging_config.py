import logging
import sys


def configure_logging(debug: bool = False, verbose: bool = False) -> None:
    """Configure logging for applications embedding the mapper.

    Args:
        debug: Enable debug-level logging if True.
        verbose: Enable info-level logging from the mapper if True.
    """
    if debug:
        level = logging.DEBUG
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif verbose:
        level = logging.INFO
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    else:
        level = logging.WARNING
        format_str = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        stream=sys.stdout,
        force=True,  # Override existing configuration
    )

    # Registry chatter (converter registration) only in verbose/debug mode
    package_logger = logging.getLogger("entity_mapper")
    package_logger.setLevel(level)
