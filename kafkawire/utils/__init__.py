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
from zlib import crc32

from .struct_helpers import BytesBuilder


class Serializable(object):
    __slots__ = []

    def __len__(self):
        """Length of the bytes that will be sent to the Kafka server."""
        raise NotImplementedError()

    def write_to(self, builder):
        """Write serialized bytes to the :class:`BytesBuilder` ``builder``"""
        raise NotImplementedError()

    def get_bytes(self):
        """Serialize the object

        :returns: Serialized object
        :rtype: bytes
        """
        builder = BytesBuilder()
        self.write_to(builder)
        return builder.take_bytes()


def crc32_signed(data):
    """CRC32 of `data` as the signed int32 Kafka puts on the wire"""
    crc = crc32(data) & 0xffffffff
    if crc & 0x80000000:
        crc -= 0x100000000
    return crc

