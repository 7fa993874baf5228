import datetime
import decimal
import ipaddress
import unittest
import uuid

import faker

from pgarchive import converters


class DataConverterTestCase(unittest.TestCase):

    def setUp(self):
        self.fake = faker.Faker()

    def test_data_converter(self):
        converter = converters.DataConverter()
        for row in range(0, 10):
            expectation = [str(row), str(uuid.uuid4()), self.fake.name(),
                           self.fake.iso8601(), None]
            line = '\t'.join(['\\N' if e is None else e for e in expectation])
            with self.subTest(line=line):
                self.assertListEqual(
                    list(converter.convert(line)), expectation)

    def test_returns_tuple(self):
        self.assertEqual(
            converters.DataConverter.convert('1\tfoo'), ('1', 'foo'))

    def test_empty_column(self):
        self.assertEqual(
            converters.DataConverter.convert('1\t\t\\N'), ('1', '', None))

    def test_preserves_null(self):
        result = converters.DataConverter.convert('value1\tvalue2\t\\N')
        self.assertIsNone(result[2])

    def test_escaped_null_is_not_null(self):
        self.assertEqual(
            converters.DataConverter.convert('\\\\N'), ('\\N',))

    def test_unescapes_data(self):
        converter = converters.DataConverter()
        self.assertEqual(
            converter.convert('C:\\\\Windows\\\\System')[0],
            'C:\\Windows\\System')
        self.assertEqual(
            converter.convert('line1\\nline2')[0], 'line1\nline2')
        self.assertEqual(
            converter.convert('col1\\tdata\tcol2'), ('col1\tdata', 'col2'))

    def test_noop_converter(self):
        converter = converters.NoOpConverter()
        value = '1\t\\N\tfoo\t     \t'
        self.assertEqual(converter.convert(value), value)


class SmartDataConverterTestCase(unittest.TestCase):

    def setUp(self):
        self.converter = converters.SmartDataConverter()
        self.fake = faker.Faker()

    def test_native_types(self):
        for row in range(0, 10):
            expectation = [
                row,
                None,
                self.fake.pydecimal(
                    positive=True, left_digits=5, right_digits=3),
                uuid.uuid4(),
                ipaddress.IPv4Network(self.fake.ipv4(True)),
                ipaddress.IPv4Address(self.fake.ipv4()),
                ipaddress.IPv6Address(self.fake.ipv6())]
            line = '\t'.join(
                '\\N' if e is None else str(e) for e in expectation)
            with self.subTest(line=line):
                self.assertListEqual(
                    list(self.converter.convert(line)), expectation)

    def test_negative_numbers(self):
        self.assertEqual(self.converter.convert('-42\t-1.5'),
                         (-42, decimal.Decimal('-1.5')))

    def test_timestamps(self):
        expectation = datetime.datetime(
            2022, 11, 24, 7, 53, 20, tzinfo=datetime.timezone.utc)
        for value in ['2022-11-24 07:53:20 +00:00',
                      '2022-11-24 07:53:20 +0000',
                      '2022-11-24 09:53:20 +02:00']:
            with self.subTest(value=value):
                result = self.converter.convert(value)[0]
                self.assertIsInstance(result, datetime.datetime)
                self.assertEqual(result, expectation)

    def test_timestamp_with_microseconds(self):
        result = self.converter.convert('2022-11-24 07:53:20.123456 +00:00')
        self.assertEqual(result[0].microsecond, 123456)

    def test_bad_date(self):
        row = '2019-13-45 25:34:99 00:00\t1\tfoo\t\\N'
        self.assertEqual(
            self.converter.convert(row),
            ('2019-13-45 25:34:99 00:00', 1, 'foo', None))

    def test_text_is_unchanged(self):
        value = self.fake.sentence()
        self.assertEqual(self.converter.convert(value), (value,))

    def test_unescapes_before_type_conversion(self):
        self.assertEqual(
            self.converter.convert('42\t\\N\thello\\nworld'),
            (42, None, 'hello\nworld'))
        self.assertEqual(self.converter.convert('\\061\\062'), (12,))


class UnescapeCopyTextTestCase(unittest.TestCase):
    """COPY text format escapes, as PostgreSQL reads them"""

    def test_no_escapes(self):
        for value in ['hello', 'test data', '']:
            self.assertEqual(converters.unescape_copy_text(value), value)

    def test_simple_escapes(self):
        for value, expectation in [('\\\\', '\\'),
                                   ('a\\\\b', 'a\\b'),
                                   ('\\b', '\b'),
                                   ('\\f', '\f'),
                                   ('line1\\nline2', 'line1\nline2'),
                                   ('test\\r', 'test\r'),
                                   ('a\\tb', 'a\tb'),
                                   ('\\v', '\v')]:
            with self.subTest(value=value):
                self.assertEqual(
                    converters.unescape_copy_text(value), expectation)

    def test_octal_escapes(self):
        for value, expectation in [('\\0', '\x00'),
                                   ('\\10', '\x08'),
                                   ('\\101', 'A'),
                                   ('\\377', '\xff'),
                                   ('\\1010', 'A0'),
                                   ('test\\101data', 'testAdata')]:
            with self.subTest(value=value):
                self.assertEqual(
                    converters.unescape_copy_text(value), expectation)

    def test_hex_escapes(self):
        for value, expectation in [('\\x0', '\x00'),
                                   ('\\xa', '\n'),
                                   ('\\x41', 'A'),
                                   ('\\xFF', '\xff'),
                                   ('\\x414', 'A4'),
                                   ('test\\x41data', 'testAdata')]:
            with self.subTest(value=value):
                self.assertEqual(
                    converters.unescape_copy_text(value), expectation)

    def test_literal_escapes(self):
        for value, expectation in [('\\z', 'z'),
                                   ('\\@', '@'),
                                   ('\\x', 'x'),
                                   ('\\xG', 'xG'),
                                   ('\\N', 'N')]:
            with self.subTest(value=value):
                self.assertEqual(
                    converters.unescape_copy_text(value), expectation)

    def test_trailing_backslash(self):
        self.assertEqual(converters.unescape_copy_text('foo\\'), 'foo\\')
        self.assertEqual(converters.unescape_copy_text('\\'), '\\')

    def test_combined_escapes(self):
        self.assertEqual(
            converters.unescape_copy_text('a\\tb\\nc\\\\d'), 'a\tb\nc\\d')
        self.assertEqual(
            converters.unescape_copy_text('\\x41\\102\\x43'), 'ABC')
