"""
Reading and writing N-Triples files.

The whole document is materialized in memory; there is no streaming.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging

from ntriples_collection.config import CodecConfig, DEFAULT_CONFIG
from ntriples_collection.formats.ntriples import parse_ntriples, serialize_ntriples
from ntriples_collection.models import Triple, TripleLike

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileError(Exception):
    """
    An I/O or text-encoding failure while reading or writing an N-Triples file.

    ``error`` is the underlying OSError or UnicodeError.
    """

    def __init__(self, filename: PathLike, error: Union[OSError, UnicodeError]):
        super().__init__(f"{filename}: {error}")
        self.filename = str(filename)
        self.error = error


@dataclass(frozen=True)
class WriteResult:
    """Outcome of write_ntriples_file."""
    count: int


def read_ntriples_file(path: PathLike, config: Optional[CodecConfig] = None) -> List[Triple]:
    """
    Read an N-Triples file into triples.

    Args:
        path: File to read
        config: Codec options (encoding, language tag handling)

    Returns:
        Triples in file order

    Raises:
        FileError: If the file cannot be read or decoded with config.encoding
        ParseError: If a statement line is malformed

    Example:
        >>> read_ntriples_file("flowers.nt")[0]
        Triple(subject='http://www.site.org/version/123/', predicate='http://purl.org/dc/elements/1.1/publisher', object='"Flower corp"@en')
    """
    config = config or DEFAULT_CONFIG
    try:
        text = Path(path).read_text(encoding=config.encoding)
    except (OSError, UnicodeError) as e:
        raise FileError(path, e) from e

    triples = parse_ntriples(text, config)
    logger.info(f"Read {len(triples)} triples from {path}")
    return triples


def write_ntriples_file(
    path: PathLike,
    triples: Iterable[TripleLike],
    config: Optional[CodecConfig] = None,
) -> WriteResult:
    """
    Write triples to an N-Triples file, replacing its content.

    Any graph component of the input is dropped. The reported count is the
    number of triples given, whatever the encoder skipped.

    Raises:
        FileError: If the text cannot be encoded or the file cannot be written
        InvalidLiteralError: If an object cannot be encoded (ABORT policy)
    """
    config = config or DEFAULT_CONFIG
    triples = list(triples)

    text = serialize_ntriples(triples, config)
    if text and config.trailing_newline:
        text += "\n"

    # Encode before opening: a failed encode must leave an existing file intact.
    try:
        data = text.encode(config.encoding)
    except UnicodeError as e:
        raise FileError(path, e) from e

    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FileError(path, e) from e

    logger.info(f"Wrote {len(triples)} triples to {path}")
    return WriteResult(count=len(triples))

