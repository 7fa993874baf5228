"""
Table of Contents
=================

Reads the table of contents entries that follow the archive header. Each
entry is decoded field by field in the order they are stored; a failure in
any field aborts the entry and the raised error names the field and the
``dump_id`` of the entry being read.

"""
import logging
import typing

from pgarchive import constants, exceptions, models, reader

LOGGER = logging.getLogger(__name__)

Version = typing.Tuple[int, int, int]


def read_entries(handle: typing.BinaryIO, config: reader.ReadConfig,
                 version: Version = constants.MAX_VER) \
        -> typing.List[models.Entry]:
    """Read the entry count and then each entry from the handle

    :param handle: The file handle to read from
    :param config: The integer and offset widths for the archive
    :param version: The archive version, used to select field layouts
    :raises: :py:exc:`~pgarchive.exceptions.InvalidLength`

    """
    try:
        count = config.read_int(handle)
    except exceptions.PgArchiveError as error:
        error.field = 'toc_count'
        raise
    if count < 0:
        error = exceptions.InvalidLength(f'Invalid entry count: {count}')
        error.field = 'toc_count'
        raise error
    LOGGER.debug('Reading %i entries', count)
    return [read_entry(handle, config, version) for _i in range(count)]


def read_entry(handle: typing.BinaryIO, config: reader.ReadConfig,
               version: Version = constants.MAX_VER) -> models.Entry:
    """Read in an individual entry.

    :param handle: The file handle to read from
    :param config: The integer and offset widths for the archive
    :param version: The archive version, used to select field layouts
    :raises: :py:exc:`~pgarchive.exceptions.PgArchiveError`

    """
    values = {}
    field = None
    try:
        for field, decode in _FIELDS:
            values[field] = decode(handle, config, version)
    except exceptions.PgArchiveError as error:
        error.field = field
        error.dump_id = values.get('dump_id')
        raise
    del values['with_oids']
    return models.Entry(**values)


def _read_dump_id(handle, config, _version) -> int:
    value = config.read_int(handle)
    if value < 0:
        raise exceptions.InvalidId(f'Invalid dump id: {value}')
    return value


def _read_had_dumper(handle, config, _version) -> bool:
    return config.read_int_bool(handle)


def _read_oid(handle, config, _version) -> int:
    return config.read_oid(handle)


def _read_string(handle, config, _version) -> str:
    return config.read_string(handle)


def _read_section(handle, config, _version) -> models.Section:
    value = config.read_int(handle)
    try:
        return models.Section(value)
    except ValueError:
        raise exceptions.InvalidSection(
            f'Invalid section: {value}') from None


def _read_tableam(handle, config, version) -> str:
    """The table access method was added in 1.14"""
    if version < constants.K_VERS_1_14:
        return ''
    return config.read_string(handle)


def _read_with_oids(handle, config, _version) -> None:
    """Tables with OIDs are no longer written by pg_dump, so this flag is
    always ``false`` in a valid archive.

    """
    if config.read_string_bool(handle):
        raise exceptions.InvalidData('Reserved flag is set')


def _read_dependencies(handle, config, _version) -> typing.Tuple[int, ...]:
    """Read in the dependencies for an entry, terminated by an empty
    string.

    """
    values = []
    while True:
        value = config.read_string(handle)
        if not value:
            break
        values.append(reader.parse_oid(value))
    return tuple(values)


def _read_offset(handle, config, _version) -> models.Offset:
    return config.read_offset(handle)


_FIELDS = [
    ('dump_id', _read_dump_id),
    ('had_dumper', _read_had_dumper),
    ('table_oid', _read_oid),
    ('oid', _read_oid),
    ('tag', _read_string),
    ('desc', _read_string),
    ('section', _read_section),
    ('defn', _read_string),
    ('drop_stmt', _read_string),
    ('copy_stmt', _read_string),
    ('namespace', _read_string),
    ('tablespace', _read_string),
    ('tableam', _read_tableam),
    ('owner', _read_string),
    ('with_oids', _read_with_oids),
    ('dependencies', _read_dependencies),
    ('offset', _read_offset),
]
