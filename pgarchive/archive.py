"""
The :py:class:`~pgarchive.archive.Archive` class is the decoded form of a
:command:`pg_dump` custom format file: the header values and the table of
contents. Use :py:meth:`Archive.parse <pgarchive.archive.Archive.parse>` or
:py:func:`pgarchive.load` to create one.

An :py:class:`~pgarchive.archive.Archive` holds no open file handles. To
read table data, pass a seekable handle for the same file to
:py:meth:`~pgarchive.archive.Archive.read_data` or
:py:meth:`~pgarchive.archive.Archive.table_data`.

There are :doc:`converters` that are available to format the rows that are
returned by :py:meth:`~pgarchive.archive.Archive.table_data`. The default
converter, :py:class:`~pgarchive.converters.DataConverter` will return all
fields as strings, only replacing ``NULL`` with :py:const:`None`.

"""
from __future__ import annotations

import dataclasses
import datetime
import io
import logging
import re
import typing

from pgarchive import (constants, converters, data, exceptions, header,
                       models, reader, toc)

LOGGER = logging.getLogger(__name__)

ENCODING_PATTERN = re.compile(r"^.*=\s+'(.*)'")

ColumnParser = typing.Callable[[str], typing.List[str]]


@dataclasses.dataclass(frozen=True)
class Archive:
    """A fully decoded archive

    :var version: The archive format version
    :var compression: The compression method used for data blocks
    :var timestamp: When the archive was created
    :var dbname: The name of the database that was dumped
    :var server_version: The version of the server that was dumped
    :var dump_version: The version of :command:`pg_dump` that was used
    :var entries: The table of contents entries, in archive order
    :var config: The integer and offset widths used by the archive

    """
    version: models.Version
    compression: models.CompressionMethod
    timestamp: datetime.datetime
    dbname: str
    server_version: str
    dump_version: str
    entries: typing.Tuple[models.Entry, ...]
    config: reader.ReadConfig
    converter: typing.Type[converters.DataConverter] = dataclasses.field(
        default=converters.DataConverter, compare=False, repr=False)

    def __repr__(self) -> str:
        return ('<Archive version={!r} compression={!r} timestamp={!r} '
                'entry_count={!r}>').format(
            str(self.version), str(self.compression),
            self.timestamp.isoformat(), len(self.entries))

    @classmethod
    def parse(cls, handle: typing.BinaryIO,
              converter: typing.Optional[
                  typing.Type[converters.DataConverter]] = None) -> Archive:
        """Parse the header and table of contents from the handle

        The handle is read forward-only from its current position.

        :param handle: The file handle to read from
        :param converter: The data converter class to use for
            :py:meth:`table_data`
            (Default: :py:class:`pgarchive.converters.DataConverter`)
        :raises: :py:exc:`~pgarchive.exceptions.PgArchiveError`

        """
        hdr, config = header.read(handle)
        entries = toc.read_entries(handle, config, hdr.version)
        LOGGER.debug('Parsed archive of %r with %i entries',
                     hdr.dbname, len(entries))
        return cls(hdr.version, hdr.compression, hdr.timestamp, hdr.dbname,
                   hdr.server_version, hdr.dump_version, tuple(entries),
                   config, converter or converters.DataConverter)

    @property
    def data_entries(self) -> typing.List[models.Entry]:
        """Return the list of entries that are in the data section"""
        return [e for e in self.entries if e.section == models.Section.DATA]

    @property
    def encoding(self) -> str:
        """Return the client encoding set by the ``ENCODING`` entry, or
        ``UTF8`` if it is not present.

        """
        for entry in self.entries:
            if entry.desc == constants.ENCODING:
                match = ENCODING_PATTERN.match(entry.defn)
                if match:
                    return match.group(1)
        return constants.DEFAULT_ENCODING

    @property
    def codec(self) -> str:
        """Return the Python codec name for :py:attr:`encoding`

        :raises: :py:exc:`~pgarchive.exceptions.InvalidEncoding`

        """
        try:
            return constants.POSTGRES_ENCODINGS[self.encoding.upper()]
        except KeyError:
            raise exceptions.InvalidEncoding(
                'Unsupported client encoding: {}'.format(self.encoding))

    def find_entry(self, section: models.Section, desc: str,
                   tag: str) -> typing.Optional[models.Entry]:
        """Return the first entry with the given section, description and
        tag.

        :param section: The section of the entry
        :param desc: The entry description, for example ``TABLE DATA``
        :param tag: The tag/relation/table name

        """
        for entry in self.entries:
            if (entry.section == section and entry.desc == desc
                    and entry.tag == tag):
                return entry

    def get_entry(self, dump_id: int) -> typing.Optional[models.Entry]:
        """Return the entry for the given ``dump_id``"""
        for entry in self.entries:
            if entry.dump_id == dump_id:
                return entry

    def read_data(self, handle: typing.BinaryIO,
                  entry: models.Entry) -> io.BufferedReader:
        """Return a decompressed binary stream of the data for the entry

        :param handle: A seekable handle for the archive file that is not
            used by any other reader
        :param entry: The entry to read the data for
        :raises: :py:exc:`~pgarchive.exceptions.NoDataPresent`
        :raises: :py:exc:`~pgarchive.exceptions.BlobNotSupported`
        :raises: :py:exc:`~pgarchive.exceptions.CompressionMethodNotSupported`

        """
        return data.open_block(
            handle, self.config, entry.offset, self.compression)

    def table_columns(self, table: str, column_parser: ColumnParser,
                      namespace: typing.Optional[str] = None) \
            -> typing.List[str]:
        """Return the column names for a table by handing the
        ``CREATE TABLE`` statement to ``column_parser``.

        :param table: The table name
        :param column_parser: Returns the ordered column names for a
            ``CREATE TABLE`` statement, raising if it is not one
        :param namespace: The namespace/schema for the table
        :raises: :py:exc:`~pgarchive.exceptions.EntityNotFoundError`
        :raises: :py:exc:`~pgarchive.exceptions.InvalidData`

        """
        entry = self._find_table_entry(
            models.Section.PRE_DATA, constants.TABLE, table, namespace)
        try:
            return list(column_parser(entry.defn))
        except Exception as error:
            raise exceptions.InvalidData(
                'Invalid CREATE TABLE statement for {}: {}'.format(
                    table, error)) from error

    def table_data(self, handle: typing.BinaryIO, table: str,
                   namespace: typing.Optional[str] = None) \
            -> typing.Iterator[typing.Any]:
        """Iterator that returns the converted rows for a table

        :param handle: A seekable handle for the archive file
        :param table: The table name
        :param namespace: The namespace/schema for the table
        :raises: :py:exc:`~pgarchive.exceptions.EntityNotFoundError`
        :raises: :py:exc:`~pgarchive.exceptions.InvalidEncoding`

        """
        entry = self._find_table_entry(
            models.Section.DATA, constants.TABLE_DATA, table, namespace)
        codec = self.codec
        converter = self.converter()
        with self.read_data(handle, entry) as stream:
            for line in stream:
                try:
                    line = line.decode(codec).rstrip('\n')
                except UnicodeDecodeError as error:
                    raise exceptions.InvalidEncoding(
                        'Invalid {} data for {}: {}'.format(
                            self.encoding, table, error)) from error
                if line.startswith('\\.'):
                    break
                yield converter.convert(line)

    def _find_table_entry(self, section: models.Section, desc: str,
                          table: str, namespace: typing.Optional[str]) \
            -> models.Entry:
        for entry in self.entries:
            if (entry.section == section and entry.desc == desc
                    and entry.tag == table
                    and namespace in (None, entry.namespace)):
                return entry
        raise exceptions.EntityNotFoundError(namespace=namespace, table=table)

