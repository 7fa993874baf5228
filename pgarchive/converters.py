"""
When creating an :class:`pgarchive.archive.Archive` instance, either directly
or by using :py:func:`pgarchive.load`, you can specify a converter class to
use when reading rows using the :meth:`pgarchive.archive.Archive.table_data`
iterator.

The default converter (:py:class:`DataConverter`) handles PostgreSQL COPY
text format escape sequences and replaces columns that have a ``NULL``
indicator (``\\N``) with :py:const:`None`.

The :py:class:`SmartDataConverter` extends the base converter and will
attempt to convert individual columns to native Python data types after
unescaping.

Creating your own data converter is easy and should simply extend the
:py:class:`DataConverter` class.

"""
import datetime
import decimal
import ipaddress
import re
import typing
import uuid

import pendulum

NULL = '\\N'

ESCAPE_PATTERN = re.compile(
    r'\\(?:([0-7]{1,3})|x([0-9a-fA-F]{1,2})|(.))', re.DOTALL)

SIMPLE_ESCAPES = {
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v'
}

TIMESTAMP_FORMATS = [
    f'YYYY-MM-DD HH:mm:ss{micro} {zone}'
    for zone in ('Z', 'ZZ', 'z', 'zz') for micro in ('.SSSSSS', '')]


def _unescape(match: typing.Match) -> str:
    octal, hexadecimal, other = match.groups()
    if octal:
        return chr(int(octal, 8) & 0o377)
    elif hexadecimal:
        return chr(int(hexadecimal, 16))
    return SIMPLE_ESCAPES.get(other, other)


def unescape_copy_text(field: str) -> str:
    """Unescape PostgreSQL COPY text format escape sequences.

    Supported escape sequences:
        \\b - backspace (ASCII 8)
        \\f - form feed (ASCII 12)
        \\n - newline (ASCII 10)
        \\r - carriage return (ASCII 13)
        \\t - tab (ASCII 9)
        \\v - vertical tab (ASCII 11)
        \\NNN - octal byte value (1-3 digits)
        \\xNN - hex byte value (1-2 digits)
        \\X - any other character X literally

    A trailing backslash is kept as-is.

    :param field: The escaped field string
    :return: The unescaped string

    """
    if '\\' not in field:
        return field
    return ESCAPE_PATTERN.sub(_unescape, field)


class DataConverter:
    """Base Row/Column Converter

    This class splits the row into individual columns, unescapes
    PostgreSQL COPY text format escape sequences, and converts ``\\N``
    to :py:const:`None`.

    """

    @staticmethod
    def convert(row: str) -> typing.Tuple[typing.Any, ...]:
        """Convert the string based row into a tuple of columns.

        :param str row: The row to convert
        :rtype: tuple

        """
        return tuple(
            None if column == NULL else unescape_copy_text(column)
            for column in row.split('\t'))


class NoOpConverter:
    """Performs no conversion on the row passed in"""

    @staticmethod
    def convert(row: str) -> str:
        return row


SmartColumn = typing.Union[
    None, str, int, datetime.datetime, decimal.Decimal,
    ipaddress.IPv4Address, ipaddress.IPv4Network,
    ipaddress.IPv6Address, ipaddress.IPv6Network, uuid.UUID]


class SmartDataConverter(DataConverter):
    """Attempts to convert columns to native Python data types

    Possible conversion types:

        - :py:class:`int`
        - :py:class:`datetime.datetime`
        - :py:class:`decimal.Decimal`
        - :py:class:`ipaddress.IPv4Address`
        - :py:class:`ipaddress.IPv4Network`
        - :py:class:`ipaddress.IPv6Address`
        - :py:class:`ipaddress.IPv6Network`
        - :py:const:`None`
        - :py:class:`str`
        - :py:class:`uuid.UUID`

    """

    @staticmethod
    def convert(row: str) -> typing.Tuple[SmartColumn, ...]:
        """Convert the string based row into a tuple of columns"""
        return tuple(
            SmartDataConverter._convert_column(c) for c in row.split('\t'))

    @staticmethod
    def _convert_column(column: str) -> SmartColumn:
        """Attempt to convert the column from a string if appropriate"""
        if column == NULL:
            return None
        column = unescape_copy_text(column)
        if column.strip('-').isnumeric():
            return int(column)
        elif column.strip('-').replace('.', '').isnumeric():
            try:
                return decimal.Decimal(column)
            except (ValueError, decimal.InvalidOperation):
                pass
        for parse in (ipaddress.ip_address, ipaddress.ip_network, uuid.UUID):
            try:
                return parse(column)
            except ValueError:
                pass
        for fmt in TIMESTAMP_FORMATS:
            try:
                value = pendulum.from_format(column, fmt)
            except ValueError:
                continue
            return datetime.datetime.fromisoformat(value.isoformat())
        return column
