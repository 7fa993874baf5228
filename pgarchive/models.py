"""
Value types produced when decoding an archive

"""
import dataclasses
import enum
import typing

from pgarchive import constants


class Version(typing.NamedTuple):
    """The archive format version, ordered lexicographically"""
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f'{self.major}.{self.minor}.{self.patch}'


class Section(enum.IntEnum):
    """The section of the dump an entry belongs to, determining the order
    entries are processed during a restore. Values are the on-disk codes.

    """
    NONE = constants.SECTION_NONE
    PRE_DATA = constants.SECTION_PRE_DATA
    DATA = constants.SECTION_DATA
    POST_DATA = constants.SECTION_POST_DATA

    def __str__(self) -> str:
        return self.name


@dataclasses.dataclass(frozen=True)
class CompressionMethod:
    """The compression method used for all data blocks in an archive

    :var kind: One of the ``constants.COMPRESSION_*`` values
    :var level: The gzip compression level, informational only

    """
    kind: str = constants.COMPRESSION_NONE
    level: int = 0

    @classmethod
    def none(cls) -> 'CompressionMethod':
        return cls(constants.COMPRESSION_NONE)

    @classmethod
    def gzip(cls, level: int = 0) -> 'CompressionMethod':
        return cls(constants.COMPRESSION_GZIP, level)

    @classmethod
    def lz4(cls) -> 'CompressionMethod':
        return cls(constants.COMPRESSION_LZ4)

    @classmethod
    def zstd(cls) -> 'CompressionMethod':
        return cls(constants.COMPRESSION_ZSTD)

    def __str__(self) -> str:
        if self.kind == constants.COMPRESSION_GZIP:
            return f'{self.kind}({self.level})'
        return self.kind


@dataclasses.dataclass(frozen=True)
class Offset:
    """Where the data for an entry lives in the archive

    :var state: One of the ``constants.K_OFFSET_*`` values
    :var position: The absolute file position, only set for
        :py:const:`~pgarchive.constants.K_OFFSET_POS_SET`

    """
    state: int = constants.K_OFFSET_NO_DATA
    position: int = 0

    @property
    def has_position(self) -> bool:
        return self.state == constants.K_OFFSET_POS_SET


@dataclasses.dataclass(frozen=True)
class Entry:
    """The entry model represents a single entry in the table of contents

    Custom formatted dump files are primarily comprised of entries, which
    contain all of the metadata and DDL required to construct the database.

    For table data and blobs, there are entries that contain offset locations
    in the dump file that instruct the reader as to where the data lives
    in the file.

    :var dump_id: The dump id, unique within the archive
    :var had_dumper: Indicates the entry had a data dumper
    :var table_oid: The OID of the catalog table the object lives in
    :var oid: The OID of the object the entry represents
    :var tag: The name/table/relation/etc of the entry
    :var desc: The entry description
    :var section: The section of the dump file the entry belongs to
    :var defn: The DDL definition for the entry
    :var drop_stmt: A drop statement used to drop the entry before
    :var copy_stmt: A copy statement used when there is a corresponding
        data section.
    :var namespace: The namespace of the entry
    :var tablespace: The tablespace to use
    :var tableam: The table access method
    :var owner: The owner of the object in Postgres
    :var dependencies: The dump_ids of entries that must be processed
        before this one.
    :var offset: Where the data for the entry is stored, if anywhere

    """
    dump_id: int
    had_dumper: bool = False
    table_oid: int = 0
    oid: int = 0
    tag: str = ''
    desc: str = ''
    section: Section = Section.NONE
    defn: str = ''
    drop_stmt: str = ''
    copy_stmt: str = ''
    namespace: str = ''
    tablespace: str = ''
    tableam: str = ''
    owner: str = ''
    dependencies: typing.Tuple[int, ...] = ()
    offset: Offset = dataclasses.field(default_factory=Offset)
