"""
Author: Keith Bourgoin, Emmett Butler
"""
__license__ = """
Copyright 2015 Parse.ly, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
__all__ = ["BytesReader", "BytesBuilder", "unpack_from"]
import struct

from ..exceptions import BufferUnderflowError, MalformedProtocolData

_INT8 = struct.Struct('!b')
_INT16 = struct.Struct('!h')
_INT32 = struct.Struct('!i')
_INT64 = struct.Struct('!q')
_FORMATS = {'b': _INT8, 'h': _INT16, 'i': _INT32, 'q': _INT64}


class BytesReader(object):
    """Sequential big-endian reader over a buffer

    Strings are an int16 length followed by utf-8 bytes, byte arrays an int32
    length followed by the raw bytes. In both cases a length of -1 means the
    value is absent and is read as `None`, while a length of 0 is an empty value.

    Reading past the end of the buffer raises
    :class:`kafkawire.exceptions.BufferUnderflowError` and leaves the read
    position where it was.
    """
    __slots__ = ['_buff', '_offset']

    def __init__(self, buff, offset=0):
        self._buff = memoryview(buff)
        self._offset = offset

    @property
    def offset(self):
        return self._offset

    @property
    def remaining(self):
        return len(self._buff) - self._offset

    @property
    def eof(self):
        return self._offset >= len(self._buff)

    def _check(self, size):
        if size > self.remaining:
            raise BufferUnderflowError(size, self.remaining)

    def _read_struct(self, st):
        self._check(st.size)
        (value,) = st.unpack_from(self._buff, self._offset)
        self._offset += st.size
        return value

    def read_int8(self):
        return self._read_struct(_INT8)

    def read_int16(self):
        return self._read_struct(_INT16)

    def read_int32(self):
        return self._read_struct(_INT32)

    def read_int64(self):
        return self._read_struct(_INT64)

    def read_raw(self, size):
        """Read exactly `size` bytes, without any length prefix"""
        if size < 0:
            raise MalformedProtocolData("Negative length {}".format(size))
        self._check(size)
        output = self._buff[self._offset:self._offset + size].tobytes()
        self._offset += size
        return output

    def _read_prefixed(self, len_struct):
        start = self._offset
        len_ = self._read_struct(len_struct)
        if len_ == -1:
            return None
        try:
            return self.read_raw(len_)
        except BufferUnderflowError:
            self._offset = start
            raise

    def read_bytes(self):
        return self._read_prefixed(_INT32)

    def read_string(self):
        value = self._read_prefixed(_INT16)
        if value is None:
            return None
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedProtocolData("Invalid utf-8 string: {}".format(e))

    def read_array(self, read_item):
        """Read an int32 count followed by that many items

        :param read_item: callable reading a single item from this reader
        :returns: list of items, or `None` for a null array
        """
        count = self.read_int32()
        if count == -1:
            return None
        if count < 0:
            raise MalformedProtocolData("Negative array length {}".format(count))
        return [read_item(self) for _ in range(count)]

    def unpack(self, fmt):
        """Read a sequence of values described by a format string

        Mirrors `struct.unpack` with a few additions:

        * Wrap a section in `[]` to indicate an array. e.g.: `[ii]`
        * `S` for strings (int16 followed by utf-8 bytes)
        * `Y` for byte arrays (int32 followed by byte array)

        Only the signed integer formats `b`, `h`, `i` and `q` are supported.
        Spaces are ignored in the format string, allowing more readable formats.
        """
        fmt = fmt.replace(' ', '')
        if fmt and fmt[0] in '!><':
            fmt = fmt[1:]  # It's always network ordering
        return tuple(self._unpack(fmt))

    def _unpack(self, fmt):
        items = []
        array_fmt = None
        for ch in fmt:
            if array_fmt is not None:
                if ch == ']' and array_fmt.count('[') == array_fmt.count(']'):
                    items.append(self._unpack_array(array_fmt))
                    array_fmt = None
                else:
                    array_fmt += ch
            elif ch == '[':
                array_fmt = ''  # starts building string for array unpack
            elif ch == 'S':
                items.append(self.read_string())
            elif ch == 'Y':
                items.append(self.read_bytes())
            elif ch in _FORMATS:
                items.append(self._read_struct(_FORMATS[ch]))
            else:
                raise ValueError("Unsupported format character {!r}".format(ch))
        if array_fmt is not None:
            raise ValueError("Unterminated array in format {!r}".format(fmt))
        return items

    def _unpack_array(self, fmt):
        def read_item(reader):
            item = reader._unpack(fmt)
            # single-value arrays come back as flat lists
            return item[0] if len(item) == 1 else tuple(item)
        return self.read_array(read_item)


def unpack_from(fmt, buff, offset=0):
    """A customized version of `struct.unpack_from`

    This is a convenience function that makes decoding the arrays,
    strings, and byte arrays that we get from Kafka significantly
    easier. See :meth:`BytesReader.unpack` for the format.
    """
    output = BytesReader(buff, offset).unpack(fmt)

    # whole-message arrays come back weird
    if fmt.strip()[0] == '[' and len(output) == 1:
        output = output[0]

    return output


class BytesBuilder(object):
    """Big-endian writer accumulating an outgoing buffer

    Two ways of getting the bytes out:

    * :meth:`take_bytes` returns everything written so far and resets the
      builder, so it can be reused for the next value
    * :meth:`to_bytes` returns a copy and leaves the builder untouched
    """
    __slots__ = ['_buff']

    def __init__(self):
        self._buff = bytearray()

    def __len__(self):
        return len(self._buff)

    def _add_struct(self, st, value):
        try:
            self._buff += st.pack(value)
        except struct.error as e:
            raise MalformedProtocolData("Cannot encode {!r}: {}".format(value, e))
        return self

    def add_int8(self, value):
        return self._add_struct(_INT8, value)

    def add_int16(self, value):
        return self._add_struct(_INT16, value)

    def add_int32(self, value):
        return self._add_struct(_INT32, value)

    def add_int64(self, value):
        return self._add_struct(_INT64, value)

    def add_raw(self, value):
        """Append `value` verbatim, without a length prefix"""
        self._buff += value
        return self

    def add_bytes(self, value):
        # NB a length of 0 means an empty value, whereas -1 means null
        if value is None:
            return self.add_int32(-1)
        self.add_int32(len(value))
        return self.add_raw(value)

    def add_string(self, value):
        if value is None:
            return self.add_int16(-1)
        if not isinstance(value, (bytes, bytearray)):
            value = value.encode('utf-8')
        self.add_int16(len(value))
        return self.add_raw(value)

    def add_array(self, items, add_item):
        """Append an int32 count and then each item via `add_item(builder, item)`

        `None` is written as a null array.
        """
        if items is None:
            return self.add_int32(-1)
        self.add_int32(len(items))
        for item in items:
            add_item(self, item)
        return self

    def add_int32_array(self, values):
        return self.add_array(values, BytesBuilder.add_int32)

    def take_bytes(self):
        output = bytes(self._buff)
        self._buff = bytearray()
        return output

    def to_bytes(self):
        return bytes(self._buff)
