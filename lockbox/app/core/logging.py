# lockbox/app/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once at app creation.

    Never log plaintext secrets, ciphertext or bearer tokens. Owner ids and
    item ids are fine.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("lockbox").setLevel(level.upper())
