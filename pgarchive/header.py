"""
Archive Header
==============

Reads the header at the start of a custom format archive: the signature,
the format version, the integer and offset widths, the compression method,
the creation timestamp and the database and version strings.

Fields whose layout changed between format versions are read by a
dedicated function that is selected by comparing the archive version
against the ``K_VERS_*`` constants.

"""
import dataclasses
import datetime
import logging
import typing

import arrow
from dateutil import tz

from pgarchive import constants, exceptions, models, reader

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Header:
    """The decoded archive header"""
    version: models.Version
    compression: models.CompressionMethod
    timestamp: datetime.datetime
    dbname: str
    server_version: str
    dump_version: str


def read(handle: typing.BinaryIO) -> typing.Tuple[Header, reader.ReadConfig]:
    """Read the header from the handle, returning the header and the
    :py:class:`~pgarchive.reader.ReadConfig` to use for the rest of the
    archive.

    :param handle: The file handle positioned at the start of the archive
    :raises: :py:exc:`~pgarchive.exceptions.NotAnArchive`
    :raises: :py:exc:`~pgarchive.exceptions.UnsupportedVersion`
    :raises: :py:exc:`~pgarchive.exceptions.WrongFormat`

    """
    field = 'magic'
    try:
        if handle.read(len(constants.MAGIC)) != constants.MAGIC:
            raise exceptions.NotAnArchive('Invalid archive header')

        field = 'version'
        version = models.Version(
            reader.read_byte(handle),
            reader.read_byte(handle),
            reader.read_byte(handle))
        if not constants.MIN_VER <= version <= constants.MAX_VER:
            raise exceptions.UnsupportedVersion(version)

        field = 'int_size'
        int_size = reader.read_byte(handle)
        field = 'offset_size'
        config = reader.ReadConfig(int_size, reader.read_byte(handle))

        field = 'format'
        archive_format = reader.read_byte(handle)
        if archive_format != constants.FORMAT_CUSTOM:
            raise exceptions.WrongFormat(archive_format)

        field = 'compression'
        compression = read_compression(handle, config, version)
        field = 'timestamp'
        timestamp = read_timestamp(handle, config)
        field = 'dbname'
        dbname = config.read_string(handle)
        field = 'server_version'
        server_version = config.read_string(handle)
        field = 'dump_version'
        dump_version = config.read_string(handle)
    except exceptions.PgArchiveError as error:
        error.field = field
        raise

    LOGGER.debug('Read header for version %s archive with %s compression',
                 version, compression)
    return Header(version, compression, timestamp, dbname,
                  server_version, dump_version), config


def read_compression(handle: typing.BinaryIO, config: reader.ReadConfig,
                     version: typing.Tuple[int, int, int]) \
        -> models.CompressionMethod:
    """Read the compression method using the layout for ``version``"""
    if version >= constants.K_VERS_1_15:
        return _read_compression_method(handle)
    return _read_compression_level(handle, config)


def _read_compression_method(
        handle: typing.BinaryIO) -> models.CompressionMethod:
    """Read the single byte compression method used since 1.15

    :raises: :py:exc:`~pgarchive.exceptions.InvalidCompressionMethod`

    """
    value = reader.read_byte(handle)
    if value >= len(constants.COMPRESSION_METHODS):
        raise exceptions.InvalidCompressionMethod(
            'Invalid compression method: {}'.format(value))
    return models.CompressionMethod(constants.COMPRESSION_METHODS[value])


def _read_compression_level(handle: typing.BinaryIO,
                            config: reader.ReadConfig) \
        -> models.CompressionMethod:
    """Infer the compression method from the zlib compression level used
    before 1.15. Any non-zero level, including the ``-1`` default level,
    is gzip.

    """
    level = config.read_int(handle)
    if level == 0:
        return models.CompressionMethod.none()
    return models.CompressionMethod.gzip(level)


def read_timestamp(handle: typing.BinaryIO,
                   config: reader.ReadConfig) -> datetime.datetime:
    """Read in the archive creation timestamp.

    The values are stored as a C ``struct tm``, so the month is 0-indexed
    (``0`` is January) and the year is relative to 1900. The timestamp is
    in the local time of the machine that created the archive.

    :raises: :py:exc:`~pgarchive.exceptions.InvalidTimestamp`

    """
    second, minute, hour, day, month, year = (
        config.read_int(handle), config.read_int(handle),
        config.read_int(handle), config.read_int(handle),
        config.read_int(handle) + 1,
        config.read_int(handle) + constants.TIMESTAMP_YEAR_OFFSET)
    config.read_int(handle)  # DST flag
    try:
        return arrow.Arrow(
            year, month, day, hour, minute, second, 0, tz.tzlocal()).datetime
    except (OverflowError, ValueError) as error:
        raise exceptions.InvalidTimestamp(
            'Invalid timestamp: {}'.format(error)) from error
