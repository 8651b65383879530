"""
Logging setup for the API process
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls are no-ops"""
    root = logging.getLogger()
    if root.handlers:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )
