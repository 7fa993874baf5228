"""
Constants used when reading a :command:`pg_dump` file created in the
``custom`` format. There are additional undocumented constants, but they
should not be of concern unless you are hacking on the library itself.

"""
import typing

BLK_DATA: int = 1
BLK_BLOBS: int = 3

COMPRESSION_NONE: str = 'None'
COMPRESSION_GZIP: str = 'Gzip'
COMPRESSION_LZ4: str = 'LZ4'
COMPRESSION_ZSTD: str = 'ZSTD'

COMPRESSION_METHODS: typing.List[str] = [
    COMPRESSION_NONE,
    COMPRESSION_GZIP,
    COMPRESSION_LZ4,
    COMPRESSION_ZSTD
]
"""Compression methods, indexed by their on-disk tag byte"""

ENCODING: str = 'ENCODING'
DEFAULT_ENCODING: str = 'UTF8'

POSTGRES_ENCODINGS: typing.Dict[str, str] = {
    'BIG5': 'big5',
    'EUC_CN': 'gb2312',
    'EUC_JIS_2004': 'euc_jis_2004',
    'EUC_JP': 'euc_jp',
    'EUC_KR': 'euc_kr',
    'GB18030': 'gb18030',
    'GBK': 'gbk',
    'ISO_8859_5': 'iso8859_5',
    'ISO_8859_6': 'iso8859_6',
    'ISO_8859_7': 'iso8859_7',
    'ISO_8859_8': 'iso8859_8',
    'JOHAB': 'johab',
    'KOI8R': 'koi8_r',
    'KOI8U': 'koi8_u',
    'LATIN1': 'iso8859_1',
    'LATIN2': 'iso8859_2',
    'LATIN3': 'iso8859_3',
    'LATIN4': 'iso8859_4',
    'LATIN5': 'iso8859_9',
    'LATIN6': 'iso8859_10',
    'LATIN7': 'iso8859_13',
    'LATIN8': 'iso8859_14',
    'LATIN9': 'iso8859_15',
    'LATIN10': 'iso8859_16',
    'SHIFT_JIS_2004': 'shift_jis_2004',
    'SJIS': 'cp932',
    'SQL_ASCII': 'iso8859_1',
    'UHC': 'cp949',
    'UNICODE': 'utf-8',
    'UTF8': 'utf-8',
    'WIN866': 'cp866',
    'WIN874': 'cp874',
    'WIN1250': 'cp1250',
    'WIN1251': 'cp1251',
    'WIN1252': 'cp1252',
    'WIN1253': 'cp1253',
    'WIN1254': 'cp1254',
    'WIN1255': 'cp1255',
    'WIN1256': 'cp1256',
    'WIN1257': 'cp1257',
    'WIN1258': 'cp1258'
}
"""Python codecs for PostgreSQL client encodings. ``SQL_ASCII`` does not
describe the bytes, so they are mapped one to one."""

FORMAT_CUSTOM: int = 1
FORMAT_TAR: int = 3

K_OFFSET_UNKNOWN: int = 0
"""Specifies the offset was never recorded"""
K_OFFSET_POS_NOT_SET: int = 1
"""Specifies the entry has data but no offset"""
K_OFFSET_POS_SET: int = 2
"""Specifies the entry has data and an offset"""
K_OFFSET_NO_DATA: int = 3
"""Specifies the entry has no data"""

K_VERS_1_10: typing.Tuple[int, int, int] = (1, 10, 0)
"""Added the tablespace and server/dump version strings"""
K_VERS_1_14: typing.Tuple[int, int, int] = (1, 14, 0)
"""Added the table access method to entries"""
K_VERS_1_15: typing.Tuple[int, int, int] = (1, 15, 0)
"""Replaced the compression level with a compression method byte"""

MAGIC: bytes = b'PGDMP'

MIN_VER: typing.Tuple[int, int, int] = K_VERS_1_10
"""The minimum supported version of pg_dump files"""

MAX_VER: typing.Tuple[int, int, int] = K_VERS_1_15
"""The maximum supported version of pg_dump files"""

SECTION_NONE: int = 1
"""Non-specific section for an entry in a dump's table of contents"""

SECTION_PRE_DATA: int = 2
"""Pre-data section for an entry in a dump's table of contents"""

SECTION_DATA: int = 3
"""Data section for an entry in a dump's table of contents"""

SECTION_POST_DATA: int = 4
"""Post-data section for an entry in a dump's table of contents"""

TABLE: str = 'TABLE'
TABLE_DATA: str = 'TABLE DATA'

TIMESTAMP_YEAR_OFFSET: int = 1900

ZLIB_IN_SIZE: int = 4096
