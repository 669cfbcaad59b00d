"""File handler module: encoding-aware text I/O and verbatim byte copies.

Provides the low-level file I/O used by the sync engine.  Every write
helper creates parent directories as needed; none of them catch
``OSError`` -- filesystem failures propagate to the caller.  Codec
failures are raised as ``EncodingError``.

Bytes that no encoding accounts for are carried through decode and
encode as lone surrogates (``surrogateescape``), so text read with
``read_file_with_encoding`` and written back with ``encode_text``
reproduces every byte it did not change.
"""

from pathlib import Path

from charset_normalizer import from_bytes

from .errors import EncodingError

# =============================================================================
# Read
# =============================================================================


_ASCII_SAMPLE = "".join(map(chr, range(32, 127))) + "\t\r\n"


def _is_faithful(content: str, encoding: str, raw: bytes) -> bool:
    # Must reproduce the original bytes and write ASCII markers as ASCII
    try:
        return (
            content.encode(encoding) == raw
            and _ASCII_SAMPLE.encode(encoding) == _ASCII_SAMPLE.encode("ascii")
        )
    except (UnicodeError, LookupError):
        return False


def read_file_with_encoding(path: Path) -> tuple[str, str]:
    """Read a file with automatic encoding detection.

    Reads raw bytes first, then uses charset-normalizer to detect encoding.
    A detected encoding is only used when it is ASCII-compatible and
    re-encoding the decoded text gives back the original bytes.  Otherwise
    the bytes are decoded as UTF-8 with ``surrogateescape``.

    Args:
        path: Path to the file to read.

    Returns:
        Tuple of (content_string, detected_encoding).
    """
    raw = path.read_bytes()
    if not raw:
        return ("", "utf-8")

    try:
        # Fast path: templates and most user files are UTF-8
        return (raw.decode("utf-8"), "utf-8")
    except UnicodeDecodeError:
        pass

    result = from_bytes(raw).best()
    if result is not None:
        content = str(result)
        if _is_faithful(content, result.encoding, raw):
            return (content, result.encoding)

    # Detection failed or was lossy, keep undecodable bytes as surrogates
    return (raw.decode("utf-8", errors="surrogateescape"), "utf-8")


def read_text(path: Path) -> str:
    """Read a UTF-8 template file without newline translation.

    Raises:
        EncodingError: If the file is not valid UTF-8.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"{path} is not valid UTF-8: {e}") from e


# =============================================================================
# Write
# =============================================================================


def encode_text(content: str, encoding: str = "utf-8") -> bytes:
    """Encode *content*, restoring bytes carried as lone surrogates.

    Raises:
        EncodingError: If *content* has characters *encoding* cannot hold.
    """
    try:
        return content.encode(encoding, errors="surrogateescape")
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Cannot encode {e.object[e.start:e.end]!r} as {encoding}"
        ) from e


def write_bytes(path: Path, data: bytes) -> int:
    """Write *data* to *path*, creating parent directories as needed.

    Returns:
        Number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)


def write_file(
    path: Path, content: str, encoding: str = "utf-8"
) -> int:
    """Write content to a file, creating parent directories as needed.

    Args:
        path: Path to the output file.
        content: String content to write.
        encoding: Encoding to use (default: utf-8).

    Returns:
        Number of bytes written.

    Raises:
        EncodingError: If *content* cannot be encoded.
    """
    return write_bytes(path, encode_text(content, encoding))


def copy_file_bytes(source: Path, target: Path) -> int:
    """Copy *source* to *target* byte for byte, creating parents.

    Args:
        source: Existing file to copy.
        target: Destination path (overwritten if present).

    Returns:
        Number of bytes written.
    """
    return write_bytes(target, source.read_bytes())
