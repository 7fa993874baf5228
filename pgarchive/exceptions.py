"""
pgarchive specific exceptions

Decoding errors are split by kind so callers can tell a truncated or
corrupt archive (:py:exc:`Truncated`, :py:exc:`InvalidData`) from a
programming error (:py:exc:`ConfigUnset`) or an unsupported feature.

The header and table of contents decoders attach the name of the field
being read (``field``) and, for entries, the ``dump_id`` of the entry once
it is known.

"""
import typing


class PgArchiveError(Exception):
    """Common Base Exception"""

    def __init__(self, message: typing.Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field: typing.Optional[str] = None
        self.dump_id: typing.Optional[int] = None

    def __str__(self) -> str:
        value = self.message or self.__class__.__name__
        if self.field is not None:
            value = f'{value} (field={self.field}'
            if self.dump_id is not None:
                value = f'{value}, dump_id={self.dump_id}'
            value = f'{value})'
        return value


class NotAnArchive(PgArchiveError):
    """Raised when the file does not start with the pg_dump signature"""


class UnsupportedVersion(PgArchiveError):
    """Raised when the archive version is outside of the supported range"""

    def __init__(self, version: typing.Tuple[int, int, int]):
        super().__init__(
            'Unsupported backup version: {}.{}.{}'.format(*version))
        self.version = version


class WrongFormat(PgArchiveError):
    """Raised when the archive is not in the custom format"""

    def __init__(self, value: int):
        super().__init__(f'Unsupported archive format: {value}')
        self.format = value


class Truncated(PgArchiveError, EOFError):
    """Raised when the stream ends before a value is fully read"""


class ConfigUnset(PgArchiveError, RuntimeError):
    """Raised when an integer or offset is read before its width is known"""


class InvalidData(PgArchiveError):
    """Raised when a value read from the archive is corrupt"""


class InvalidLength(InvalidData):
    """Raised when a string or list length is negative"""


class InvalidEncoding(InvalidData):
    """Raised when string data is not valid UTF-8"""


class InvalidId(InvalidData):
    """Raised when a numeric id is not a non-negative decimal integer"""


class InvalidTag(InvalidData):
    """Raised when an offset has an unknown data state tag"""


class InvalidSection(InvalidData):
    """Raised when an entry has an unknown section code"""


class InvalidCompressionMethod(InvalidData):
    """Raised when the header has an unknown compression method"""


class InvalidBlockType(InvalidData):
    """Raised when a data block has an unknown block type"""


class InvalidTimestamp(InvalidData):
    """Raised when the archive creation timestamp is not a valid date"""


class NoDataPresent(PgArchiveError):
    """Raised when attempting to read data for an entry whose data position
    was not recorded in the table of contents.

    """


class BlobNotSupported(PgArchiveError):
    """Raised when attempting to read a blob data block"""


class CompressionMethodNotSupported(PgArchiveError):
    """Raised when data is compressed with a method that can not be read"""

    def __init__(self, method):
        super().__init__(f'Compression method not supported: {method}')
        self.method = method


class EntityNotFoundError(PgArchiveError):
    """Raised when an attempt is made to read data from a relation in a
    dump file but it is not found in the table of contents.

    This can happen if a schema-only dump was created OR if the ``namespace``
    and ``table`` specified were not found.

    """

    def __init__(self, namespace: typing.Optional[str], table: str):
        super().__init__()
        self.namespace = namespace
        self.table = table

    def __repr__(self) -> str:  # pragma: nocover
        return (
            f'<EntityNotFound namespace={self.namespace!r} '
            f'table={self.table!r}>'
        )

    def __str__(self) -> str:
        name = self.table
        if self.namespace:
            name = f'{self.namespace}.{self.table}'
        return f'Did not find {name} in the table of contents'
