"""
Data Blocks
===========

Table data is stored in blocks that are located by the offset recorded in
the entry. A block starts with a block type byte and the dump id of the
entry, followed by a sequence of length-prefixed chunks that ends with a
chunk length of ``0``.

:py:class:`DataReader` exposes the concatenated chunk payload as a raw,
forward-only stream that reads one chunk header at a time, so blocks of any
size can be read without loading them into memory.
:py:func:`open_block` wraps it with the decompressor for the archive's
compression method.

"""
import enum
import io
import logging
import typing
import zlib

import zstandard

from pgarchive import constants, exceptions, models, reader

LOGGER = logging.getLogger(__name__)


class State(enum.Enum):
    """The states a :py:class:`DataReader` moves through"""
    LOCATED = 'located'
    VALIDATED = 'validated'
    STREAMING = 'streaming'
    EXHAUSTED = 'exhausted'
    UNAVAILABLE = 'unavailable'


class DataReader(io.RawIOBase):
    """Read the raw chunk payload of a single data block

    The handle is owned by the caller and is not closed with the reader.
    Moving the handle's position while the reader is in use invalidates
    the reader.

    :param handle: The seekable file handle for the archive
    :param config: The integer and offset widths for the archive
    :param offset: The offset of the entry to read data for

    """
    def __init__(self, handle: typing.BinaryIO, config: reader.ReadConfig,
                 offset: models.Offset):
        super().__init__()
        self.offset = offset
        self.state = State.LOCATED
        self._config = config
        self._handle = handle
        self._remaining = 0

    def __repr__(self) -> str:
        return '<DataReader state={} offset={!r}>'.format(
            self.state.value, self.offset)

    def start(self) -> None:
        """Position the handle at the start of the block and validate the
        block header.

        Entries without data are exhausted immediately, without touching
        the handle.

        :raises: :py:exc:`~pgarchive.exceptions.NoDataPresent`
        :raises: :py:exc:`~pgarchive.exceptions.BlobNotSupported`
        :raises: :py:exc:`~pgarchive.exceptions.InvalidBlockType`

        """
        if self.offset.state == constants.K_OFFSET_NO_DATA:
            self.state = State.EXHAUSTED
            return
        elif not self.offset.has_position:
            self.state = State.UNAVAILABLE
            raise exceptions.NoDataPresent(
                'Data position is not recorded in the table of contents')

        LOGGER.debug('Reading data block at %i', self.offset.position)
        self._handle.seek(self.offset.position, io.SEEK_SET)
        block_type = reader.read_byte(self._handle)
        if block_type not in (constants.BLK_DATA, constants.BLK_BLOBS):
            raise exceptions.InvalidBlockType(
                'Unknown block type: {}'.format(block_type))
        self._config.read_int(self._handle)  # Dump ID
        if block_type == constants.BLK_BLOBS:
            raise exceptions.BlobNotSupported('Blob data is not supported')
        self.state = State.VALIDATED
        self.state = State.STREAMING

    def next_span(self, size: int = constants.ZLIB_IN_SIZE) -> bytes:
        """Return up to ``size`` bytes from the current chunk, reading the
        next chunk header when the current chunk is used up. Returns an
        empty value once the end of the block is reached.

        :raises: :py:exc:`~pgarchive.exceptions.InvalidLength`
        :raises: :py:exc:`~pgarchive.exceptions.Truncated`

        """
        if self.state == State.EXHAUSTED or size <= 0:
            return b''
        elif self.state != State.STREAMING:
            raise ValueError(
                'Can not read data in the {} state'.format(self.state.value))
        if not self._remaining:
            length = self._config.read_int(self._handle)
            if length == 0:
                self.state = State.EXHAUSTED
                return b''
            elif length < 0:
                raise exceptions.InvalidLength(
                    'Invalid chunk length: {}'.format(length))
            self._remaining = length
        value = reader.read_exact(self._handle, min(size, self._remaining))
        self._remaining -= len(value)
        return value

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        value = self.next_span(len(buffer))
        buffer[:len(value)] = value
        return len(value)


class DecompressingReader(io.RawIOBase):
    """Decompress the payload of a :py:class:`DataReader`

    :param raw: The reader for the compressed chunk payload
    :param decompressor: A ``zlib`` or ``zstandard`` decompression object

    """
    def __init__(self, raw: DataReader, decompressor):
        super().__init__()
        self.raw = raw
        self._buffer = bytearray()
        self._decompressor = decompressor
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._buffer and not self._eof:
            self._fill()
        length = min(len(buffer), len(self._buffer))
        buffer[:length] = self._buffer[:length]
        del self._buffer[:length]
        return length

    def _fill(self) -> None:
        """Decompress the next span of the block into the buffer"""
        chunk = self.raw.next_span(constants.ZLIB_IN_SIZE)
        try:
            if chunk:
                self._buffer += self._decompressor.decompress(chunk)
            else:
                self._buffer += self._decompressor.flush()
        except (zlib.error, zstandard.ZstdError) as error:
            raise exceptions.InvalidData(
                'Failed to decompress data: {}'.format(error)) from error
        if not chunk:
            if not self._decompressor.eof:
                raise exceptions.InvalidData(
                    'Compressed data ended before the end of the stream')
            self._eof = True


def decompressor(method: models.CompressionMethod):
    """Return a new decompression object for the compression method, or
    :py:const:`None` if the data is not compressed.

    Gzip compressed archives contain zlib streams; the gzip header is
    accepted as well.

    :raises: :py:exc:`~pgarchive.exceptions.CompressionMethodNotSupported`

    """
    if method.kind == constants.COMPRESSION_NONE:
        return None
    elif method.kind == constants.COMPRESSION_GZIP:
        return zlib.decompressobj(zlib.MAX_WBITS | 32)
    elif method.kind == constants.COMPRESSION_ZSTD:
        return zstandard.ZstdDecompressor().decompressobj()
    raise exceptions.CompressionMethodNotSupported(method)


def open_block(handle: typing.BinaryIO, config: reader.ReadConfig,
               offset: models.Offset,
               compression: typing.Optional[models.CompressionMethod] = None) \
        -> io.BufferedReader:
    """Open the data block at ``offset``, returning a buffered binary
    stream of the decompressed data.

    :param handle: The seekable file handle for the archive
    :param config: The integer and offset widths for the archive
    :param offset: The offset of the entry to read data for
    :param compression: The compression method used by the archive
    :raises: :py:exc:`~pgarchive.exceptions.NoDataPresent`
    :raises: :py:exc:`~pgarchive.exceptions.BlobNotSupported`
    :raises: :py:exc:`~pgarchive.exceptions.CompressionMethodNotSupported`

    """
    raw = DataReader(handle, config, offset)
    raw.start()
    if raw.state == State.EXHAUSTED:
        return io.BufferedReader(raw)
    decompress = decompressor(compression or models.CompressionMethod())
    if decompress is None:
        return io.BufferedReader(raw)
    return io.BufferedReader(DecompressingReader(raw, decompress))
