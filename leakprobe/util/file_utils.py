from pathlib import Path

from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def create_mock_file(file_path: Path, size: int, chunk_size: int = CHUNK_SIZE) -> bool:
    """
    Create a file of `size` zero bytes for the read workload to consume.

    Args:
        file_path: Where to create the file (overwritten if present)
        size: Total size in bytes
        chunk_size: Bytes written per write call

    Returns:
        True if the file was written in full, False if it could not be created.
    """
    file_path = Path(file_path)
    logger.info(f"Generating temporary file of size {size / (1024.0 * 1024.0):.2f} MB...")

    zero_chunk = bytes(chunk_size)
    try:
        with open(file_path, "wb") as outfile:
            written = 0
            while written < size:
                write_size = min(chunk_size, size - written)
                outfile.write(zero_chunk[:write_size])
                written += write_size
    except OSError as e:
        logger.error(f"Could not create mock file at {file_path}: {e.strerror}")
        return False

    logger.info(f"Mock file created at: {file_path}")
    return True


def remove_file(file_path: Path, missing_ok: bool = False) -> bool:
    """
    Delete a single file.

    Args:
        file_path: File to delete
        missing_ok: Treat an already-absent file as success

    Returns:
        True if the file is gone afterwards, False if the delete failed.
    """
    try:
        Path(file_path).unlink()
    except FileNotFoundError:
        return missing_ok
    except OSError as e:
        logger.debug(f"Failed to delete {file_path}: {e}")
        return False
    return True
