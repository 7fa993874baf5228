"""
pgarchive exposes a load method to create a
:py:class:`~pgarchive.archive.Archive` instance from a :command:`pg_dump`
file created in the `custom` format.

"""
version = '1.0.0'


def load(filepath, converter=None):
    """Load a pg_dump file created with -Fc from disk

    The file is closed once the header and table of contents are read. Open
    it again to read table data with
    :py:meth:`~pgarchive.archive.Archive.read_data`.

    :param os.PathLike filepath: The path to the dump to load
    :param class converter: The data converter class to use
        (Default: :py:class:`pgarchive.converters.DataConverter`)
    :type converter: pgarchive.converters.DataConverter or None
    :raises: :py:exc:`ValueError`
    :raises: :py:exc:`pgarchive.exceptions.PgArchiveError`
    :rtype: pgarchive.archive.Archive

    """
    import pathlib

    path = pathlib.Path(filepath)
    if not path.exists():
        raise ValueError('Path {!r} does not exist'.format(str(path)))
    with open(path, 'rb') as handle:
        return parse(handle, converter)


def parse(handle, converter=None):
    """Parse a pg_dump custom format archive from a binary file handle

    :param handle: The binary file handle, read forward-only
    :param class converter: The data converter class to use
        (Default: :py:class:`pgarchive.converters.DataConverter`)
    :raises: :py:exc:`pgarchive.exceptions.PgArchiveError`
    :rtype: pgarchive.archive.Archive

    """
    from pgarchive import archive

    return archive.Archive.parse(handle, converter)
