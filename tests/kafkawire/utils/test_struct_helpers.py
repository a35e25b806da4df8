import unittest

from kafkawire.exceptions import BufferUnderflowError, MalformedProtocolData
from kafkawire.utils import struct_helpers
from kafkawire.utils.struct_helpers import BytesBuilder, BytesReader


class StructHelpersTests(unittest.TestCase):
    def test_basic_unpack(self):
        output = struct_helpers.unpack_from(
            'iiqhi',
            b'\x00\x00\x00\x01\x00\x00\x00\n\x00\x00\x00\x00\x00\x00\x00\n\x00<\x00\x00\x00\x04'
        )
        self.assertEqual(output, (1, 10, 10, 60, 4))

    def test_signed_unpack(self):
        output = struct_helpers.unpack_from('bhiq', b'\xff' + b'\xff' * 2 + b'\xff' * 4 + b'\xff' * 8)
        self.assertEqual(output, (-1, -1, -1, -1))

    def test_string_decoding(self):
        output = struct_helpers.unpack_from('S', b'\x00\x04test')
        self.assertEqual(output, ('test',))

    def test_utf8_string_decoding(self):
        output = struct_helpers.unpack_from('S', b'\x00\x05caf\xc3\xa9')
        self.assertEqual(output, (u'caf\xe9',))

    def test_bytearray_unpacking(self):
        output = struct_helpers.unpack_from('Y', b'\x00\x00\x00\x04test')
        self.assertEqual(output, (b'test',))

    def test_null_and_empty(self):
        output = struct_helpers.unpack_from(
            'SSYY',
            b'\xff\xff'  # null string
            b'\x00\x00'  # empty string
            b'\xff\xff\xff\xff'  # null bytes
            b'\x00\x00\x00\x00'  # empty bytes
        )
        self.assertEqual(output, (None, '', None, b''))

    def test_array_unpacking(self):
        output = struct_helpers.unpack_from(
            '[i]',
            b'\x00\x00\x00\x04\x00\x00\x00\x01\x00\x00\x00\x02\x00\x00\x00\x03\x00\x00\x00\x04'
        )
        self.assertEqual(output, [1, 2, 3, 4])

    def test_nested_array_unpacking(self):
        output = struct_helpers.unpack_from(
            '[S [ih ] ]',
            b'\x00\x00\x00\x01'  # len(topics)
                b'\x00\x04test'  # topic name  # noqa
                b'\x00\x00\x00\x02'  # len(partitions)
                    b'\x00\x00\x00\x00\x00\x00'  # partition 0, error 0
                    b'\x00\x00\x00\x01\x00\x03'  # partition 1, error 3
        )
        self.assertEqual(output, [('test', [(0, 0), (1, 3)])])

    def test_null_array(self):
        output = struct_helpers.unpack_from('[i]', b'\xff\xff\xff\xff')
        self.assertIsNone(output)

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            struct_helpers.unpack_from('I', b'\x00\x00\x00\x01')


class BytesReaderTests(unittest.TestCase):
    def test_sequential_reads(self):
        reader = BytesReader(b'\x01\x00\x02\x00\x00\x00\x03\x00\x00\x00\x00\x00\x00\x00\x04')
        self.assertEqual(reader.read_int8(), 1)
        self.assertEqual(reader.read_int16(), 2)
        self.assertEqual(reader.read_int32(), 3)
        self.assertEqual(reader.read_int64(), 4)
        self.assertTrue(reader.eof)
        self.assertEqual(reader.remaining, 0)

    def test_underflow(self):
        reader = BytesReader(b'\x00\x00\x00')
        with self.assertRaises(BufferUnderflowError) as ctx:
            reader.read_int32()
        self.assertEqual(ctx.exception.requested, 4)
        self.assertEqual(ctx.exception.available, 3)
        # a failed read doesn't move the cursor
        self.assertEqual(reader.offset, 0)

    def test_underflow_in_prefixed_value(self):
        reader = BytesReader(b'\x00\x00\x00\x05abc')
        with self.assertRaises(BufferUnderflowError):
            reader.read_bytes()
        self.assertEqual(reader.offset, 0)

    def test_underflow_is_not_malformed(self):
        self.assertFalse(issubclass(BufferUnderflowError, MalformedProtocolData))
        self.assertFalse(issubclass(MalformedProtocolData, BufferUnderflowError))

    def test_negative_length(self):
        reader = BytesReader(b'\xff\xff\xff\xfeabc')
        with self.assertRaises(MalformedProtocolData):
            reader.read_bytes()

    def test_negative_array_length(self):
        reader = BytesReader(b'\xff\xff\xff\xfe')
        with self.assertRaises(MalformedProtocolData):
            reader.read_array(BytesReader.read_int32)

    def test_invalid_utf8(self):
        reader = BytesReader(b'\x00\x01\xff')
        with self.assertRaises(MalformedProtocolData):
            reader.read_string()

    def test_offset(self):
        reader = BytesReader(b'\x00\x00\x00\x01\x00\x00\x00\x02', 4)
        self.assertEqual(reader.read_int32(), 2)


class BytesBuilderTests(unittest.TestCase):
    def test_integers(self):
        builder = BytesBuilder()
        builder.add_int8(-1).add_int16(2).add_int32(3).add_int64(-2)
        self.assertEqual(
            builder.to_bytes(),
            b'\xff'
            b'\x00\x02'
            b'\x00\x00\x00\x03'
            b'\xff\xff\xff\xff\xff\xff\xff\xfe'
        )

    def test_null_vs_empty(self):
        builder = BytesBuilder()
        builder.add_bytes(None)
        builder.add_bytes(b'')
        builder.add_string(None)
        builder.add_string('')
        self.assertEqual(
            builder.to_bytes(),
            b'\xff\xff\xff\xff'  # null bytes
            b'\x00\x00\x00\x00'  # empty bytes
            b'\xff\xff'  # null string
            b'\x00\x00'  # empty string
        )

    def test_utf8_string(self):
        builder = BytesBuilder()
        builder.add_string(u'caf\xe9')
        self.assertEqual(builder.to_bytes(), b'\x00\x05caf\xc3\xa9')

    def test_int32_array(self):
        builder = BytesBuilder()
        builder.add_int32_array([0, 1])
        self.assertEqual(builder.to_bytes(),
                         b'\x00\x00\x00\x02\x00\x00\x00\x00\x00\x00\x00\x01')

    def test_out_of_range(self):
        builder = BytesBuilder()
        with self.assertRaises(MalformedProtocolData):
            builder.add_int8(128)

    def test_take_bytes_resets(self):
        builder = BytesBuilder()
        builder.add_int16(1)
        self.assertEqual(builder.take_bytes(), b'\x00\x01')
        self.assertEqual(len(builder), 0)
        builder.add_int16(2)
        self.assertEqual(builder.take_bytes(), b'\x00\x02')

    def test_to_bytes_keeps_contents(self):
        builder = BytesBuilder()
        builder.add_int16(1)
        self.assertEqual(builder.to_bytes(), b'\x00\x01')
        builder.add_int16(2)
        self.assertEqual(builder.to_bytes(), b'\x00\x01\x00\x02')
        self.assertEqual(len(builder), 4)

    def test_read_back(self):
        builder = BytesBuilder()
        builder.add_string('topic').add_bytes(None).add_int64(42)
        reader = BytesReader(builder.to_bytes())
        self.assertEqual(reader.unpack('SYq'), ('topic', None, 42))


if __name__ == '__main__':
    unittest.main()
