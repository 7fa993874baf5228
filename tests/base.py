"""Build pg_dump custom format archives in memory for tests"""
import io
import struct
import typing

from pgarchive import constants

V1_14 = (1, 14, 0)
V1_15 = (1, 15, 0)

TIMESTAMP = (20, 53, 7, 24, 9, 122, 0)
"""2022-10-24 07:53:20, stored as a ``struct tm``"""


def entry_values(dump_id: int, **kwargs) -> dict:
    """Return the values for an entry, using defaults for anything not
    specified.

    """
    values = {
        'dump_id': dump_id,
        'had_dumper': False,
        'table_oid': '0',
        'oid': '0',
        'tag': None,
        'desc': None,
        'section': constants.SECTION_PRE_DATA,
        'defn': None,
        'drop_stmt': None,
        'copy_stmt': None,
        'namespace': None,
        'tablespace': None,
        'tableam': None,
        'owner': None,
        'with_oids': 'false',
        'dependencies': [],
        'data_state': constants.K_OFFSET_NO_DATA,
        'offset': 0
    }
    values.update(kwargs)
    return values


class ArchiveWriter:
    """Write the parts of a custom format archive to a buffer"""

    def __init__(self, intsize: int = 4, offsize: int = 8,
                 version: typing.Tuple[int, int, int] = V1_15):
        self.handle = io.BytesIO()
        self.intsize = intsize
        self.offsize = offsize
        self.version = version

    def getvalue(self) -> bytes:
        return self.handle.getvalue()

    def write_archive(self, entries: typing.List[dict],
                      data: typing.Optional[typing.Dict[int, list]] = None,
                      compression: int = 0,
                      dbname: str = 'pizza') -> io.BytesIO:
        """Write a complete archive, returning the handle rewound to the
        start. ``data`` maps a dump_id to the chunks of its data block.

        The table of contents is written twice: once to find where the data
        blocks start and again with their offsets.

        """
        data = data or {}
        self.write_toc(entries, compression, dbname)
        for entry in entries:
            if entry['dump_id'] in data:
                entry['data_state'] = constants.K_OFFSET_POS_SET
                entry['offset'] = self.handle.tell()
                self.write_block(entry['dump_id'], data[entry['dump_id']])
        self.handle.seek(0)
        self.write_toc(entries, compression, dbname)
        self.handle.seek(0)
        return self.handle

    def write_block(self, dump_id: int, chunks: typing.List[bytes],
                    block_type: int = constants.BLK_DATA) -> None:
        self.write_byte(block_type)
        self.write_int(dump_id)
        for chunk in chunks:
            self.write_int(len(chunk))
            self.handle.write(chunk)
        self.write_int(0)

    def write_byte(self, value: int) -> None:
        self.handle.write(struct.pack('B', value))

    def write_entry(self, values: dict) -> None:
        self.write_int(values['dump_id'])
        self.write_int(int(values['had_dumper']))
        self.write_str(values['table_oid'])
        self.write_str(values['oid'])
        self.write_str(values['tag'])
        self.write_str(values['desc'])
        self.write_int(values['section'])
        self.write_str(values['defn'])
        self.write_str(values['drop_stmt'])
        self.write_str(values['copy_stmt'])
        self.write_str(values['namespace'])
        self.write_str(values['tablespace'])
        if self.version >= constants.K_VERS_1_14:
            self.write_str(values['tableam'])
        self.write_str(values['owner'])
        self.write_str(values['with_oids'])
        for dependency in values['dependencies']:
            self.write_str(str(dependency))
        self.write_int(-1)
        self.write_offset(values['offset'], values['data_state'])

    def write_header(self, compression: int = 0,
                     timestamp: typing.Sequence[int] = TIMESTAMP,
                     dbname: str = 'pizza',
                     server_version: str = '14.6',
                     dump_version: str = '14.6',
                     archive_format: int = constants.FORMAT_CUSTOM) -> None:
        """Write the header. ``compression`` is the method tag for 1.15
        archives and the compression level for older ones.

        """
        self.handle.write(constants.MAGIC)
        for value in self.version:
            self.write_byte(value)
        self.write_byte(self.intsize)
        self.write_byte(self.offsize)
        self.write_byte(archive_format)
        if self.version >= constants.K_VERS_1_15:
            self.write_byte(compression)
        else:
            self.write_int(compression)
        for value in timestamp:
            self.write_int(value)
        self.write_str(dbname)
        self.write_str(server_version)
        self.write_str(dump_version)

    def write_int(self, value: int) -> None:
        self.write_byte(1 if value < 0 else 0)
        if value < 0:
            value = -value
        for _offset in range(0, self.intsize):
            self.write_byte(value & 0xFF)
            value >>= 8

    def write_offset(self, value: int, data_state: int) -> None:
        self.write_byte(data_state)
        for _offset in range(0, self.offsize):
            self.write_byte(value & 0xFF)
            value >>= 8

    def write_str(self, value: typing.Optional[str]) -> None:
        """Write a string, using the ``-1`` length for :py:const:`None`"""
        if value is None:
            self.write_int(-1)
            return
        value = value.encode('utf-8')
        self.write_int(len(value))
        self.handle.write(value)

    def write_toc(self, entries: typing.List[dict], compression: int = 0,
                  dbname: str = 'pizza') -> None:
        self.write_header(compression, dbname=dbname)
        self.write_int(len(entries))
        for entry in entries:
            self.write_entry(entry)
