"""
Primitive Reader

Decodes the primitive values that make up a :command:`pg_dump` archive.
Integers and offsets are self-describing: their widths are stored in the
archive header and carried in a :py:class:`ReadConfig` that is passed to
every read.

"""
import dataclasses
import struct
import typing

from pgarchive import constants, exceptions, models


def read_exact(handle: typing.BinaryIO, length: int) -> bytes:
    """Read exactly ``length`` bytes from the handle

    The value is read in pieces of at most
    :py:const:`~pgarchive.constants.ZLIB_IN_SIZE` bytes, so a corrupt
    length fails once the stream runs out instead of allocating a buffer
    for the whole length up front.

    :param handle: The file handle to read from
    :param length: The number of bytes to read
    :raises: :py:exc:`~pgarchive.exceptions.Truncated`

    """
    values = []
    remaining = length
    while remaining > 0:
        value = handle.read(min(remaining, constants.ZLIB_IN_SIZE))
        if not value:
            raise exceptions.Truncated('Expected {} bytes, read {}'.format(
                length, length - remaining))
        values.append(value)
        remaining -= len(value)
    return b''.join(values)


def read_byte(handle: typing.BinaryIO) -> int:
    """Read in an individual byte.

    :param handle: The file handle to read the byte from
    :raises: :py:exc:`~pgarchive.exceptions.Truncated`

    """
    return struct.unpack('B', read_exact(handle, 1))[0]


def read_int(handle: typing.BinaryIO, intsize: int) -> int:
    """Read in a signed integer: a sign byte followed by ``intsize``
    little-endian magnitude bytes.

    :param handle: The file handle to read the integer from
    :param intsize: The size of the integer to read
    :raises: :py:exc:`~pgarchive.exceptions.ConfigUnset`
    :raises: :py:exc:`~pgarchive.exceptions.Truncated`

    """
    if not intsize:
        raise exceptions.ConfigUnset('Integer size is not known')
    data = read_exact(handle, intsize + 1)
    value = int.from_bytes(data[1:], 'little', signed=False)
    return -value if data[0] else value


@dataclasses.dataclass(frozen=True)
class ReadConfig:
    """The integer and offset widths for an archive

    Both widths are discovered in the archive header and fixed for the
    rest of the archive, including later data block reads. A width of ``0``
    means it is not known yet and any read depending on it will raise
    :py:exc:`~pgarchive.exceptions.ConfigUnset`.

    """
    int_size: int = 0
    offset_size: int = 0

    @staticmethod
    def read_byte(handle: typing.BinaryIO) -> int:
        """Read in an individual byte"""
        return read_byte(handle)

    def read_int(self, handle: typing.BinaryIO) -> int:
        """Read in a signed integer using the configured integer size"""
        return read_int(handle, self.int_size)

    def read_string(self, handle: typing.BinaryIO) -> str:
        """Read in a length-prefixed UTF-8 string

        A length of ``-1`` is the archive's marker for "no value" and is
        returned as an empty string.

        :raises: :py:exc:`~pgarchive.exceptions.InvalidLength`
        :raises: :py:exc:`~pgarchive.exceptions.InvalidEncoding`

        """
        length = self.read_int(handle)
        if length == -1:
            return ''
        elif length < 0:
            raise exceptions.InvalidLength(
                'Invalid string length: {}'.format(length))
        try:
            return read_exact(handle, length).decode('utf-8')
        except UnicodeDecodeError as error:
            raise exceptions.InvalidEncoding(str(error)) from error

    def read_int_bool(self, handle: typing.BinaryIO) -> bool:
        """Read in an integer, returning ``True`` if it is non-zero"""
        return self.read_int(handle) != 0

    def read_string_bool(self, handle: typing.BinaryIO) -> bool:
        """Read in a string, returning ``True`` only if it is ``true``"""
        return self.read_string(handle) == 'true'

    def read_oid(self, handle: typing.BinaryIO) -> int:
        """Read in a numeric id stored as a decimal string

        :raises: :py:exc:`~pgarchive.exceptions.InvalidId`

        """
        return parse_oid(self.read_string(handle))

    def read_offset(self, handle: typing.BinaryIO) -> models.Offset:
        """Read in the data state flag and offset for an entry.

        The full ``offset_size`` is always consumed, regardless of the flag.

        :raises: :py:exc:`~pgarchive.exceptions.ConfigUnset`
        :raises: :py:exc:`~pgarchive.exceptions.InvalidTag`

        """
        if not self.offset_size:
            raise exceptions.ConfigUnset('Offset size is not known')
        data = read_exact(handle, self.offset_size + 1)
        data_state = data[0]
        if data_state == constants.K_OFFSET_POS_SET:
            return models.Offset(
                data_state, int.from_bytes(data[1:], 'little', signed=False))
        elif data_state in (constants.K_OFFSET_UNKNOWN,
                            constants.K_OFFSET_POS_NOT_SET,
                            constants.K_OFFSET_NO_DATA):
            return models.Offset(data_state)
        raise exceptions.InvalidTag(
            'Invalid offset data state: {}'.format(data_state))


def parse_oid(value: str) -> int:
    """Parse a decimal string as a non-negative integer

    :raises: :py:exc:`~pgarchive.exceptions.InvalidId`

    """
    if not value.isascii() or not value.isdigit():
        raise exceptions.InvalidId('Invalid numeric id: {!r}'.format(value))
    return int(value)
