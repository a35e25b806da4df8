# - coding: utf-8 -
import logging
from types import MappingProxyType

from ..common import ChecksumPolicy, CompressionType
from ..exceptions import (BufferUnderflowError, ChecksumMismatch,
                          MalformedProtocolData, UnsupportedCompressionCodec)
from ..utils import Serializable, crc32_signed
from ..utils.struct_helpers import BytesBuilder, BytesReader

log = logging.getLogger(__name__)


class MessageAttributes(object):
    """Attributes byte of a Kafka Message

    Only the compression codec is defined, in the lowest two bits. The other
    bits are written as zero and ignored when read.
    """
    __slots__ = ["compression"]
    COMPRESSION_MASK = 0b11
    _CODECS = (CompressionType.NONE, CompressionType.GZIP, CompressionType.SNAPPY)

    def __init__(self, compression=CompressionType.NONE):
        if compression not in self._CODECS:
            raise UnsupportedCompressionCodec(compression)
        self.compression = compression

    def __eq__(self, other):
        return (isinstance(other, MessageAttributes)
                and self.compression == other.compression)

    def __hash__(self):
        return hash(self.compression)

    def __repr__(self):
        return "MessageAttributes(compression={})".format(self.compression)

    def to_byte(self):
        return self.compression & self.COMPRESSION_MASK

    @classmethod
    def from_byte(cls, byte):
        codec = byte & cls.COMPRESSION_MASK
        if codec not in cls._CODECS:
            raise UnsupportedCompressionCodec(codec)
        return cls(codec)


class Message(Serializable):
    """Representation of a Kafka Message

    Specification::

        Message => Crc MagicByte Attributes Key Value
          Crc => int32
          MagicByte => int8
          Attributes => int8
          Key => bytes
          Value => bytes

    :ivar magic_byte: Version of the message format. Always 0 for messages
        created here; decoded messages keep whatever the broker sent.
    :ivar attributes: :class:`MessageAttributes` of the message
    :ivar key: Optional key used for partition assignment. `None` and `b''`
        are different keys.
    :ivar value: The payload associated with this message
    """
    __slots__ = ["magic_byte", "attributes", "key", "value"]

    def __init__(self, value, attributes=None, key=None, magic_byte=0):
        if value is None:
            raise ValueError("Message value must not be None")
        self.magic_byte = magic_byte
        self.attributes = attributes if attributes is not None else MessageAttributes()
        self.key = key
        self.value = value

    def __eq__(self, other):
        return (isinstance(other, Message)
                and self.magic_byte == other.magic_byte
                and self.attributes == other.attributes
                and self.key == other.key
                and self.value == other.value)

    __hash__ = None

    def __repr__(self):
        return "Message(value={!r}, key={!r}, attributes={!r}, magic_byte={})".format(
            self.value, self.key, self.attributes, self.magic_byte)

    def __len__(self):
        # crc + magic byte + attributes + len(key) + len(value)
        size = 4 + 1 + 1 + 4 + 4
        if self.key is not None:
            size += len(self.key)
        size += len(self.value)
        return size

    @classmethod
    def decode(cls, buff):
        """Decode a message body

        ``buff`` holds exactly one message without its leading crc, which the
        enclosing MessageSet has already checked.
        """
        reader = BytesReader(buff)
        try:
            magic_byte = reader.read_int8()
            attributes = MessageAttributes.from_byte(reader.read_int8())
            key = reader.read_bytes()
            value = reader.read_bytes()
        except BufferUnderflowError as e:
            # the frame size is authoritative, so this is not a truncated message
            raise MalformedProtocolData("Message body too short: {}".format(e))
        if reader.remaining:
            raise MalformedProtocolData(
                "{} unexpected bytes after message value".format(reader.remaining))
        if value is None:
            raise MalformedProtocolData("Message value is null")
        return cls(value, attributes=attributes, key=key, magic_byte=magic_byte)

    def write_to(self, builder):
        """Write ``[crc][magic byte][attributes][key][value]`` to ``builder``"""
        scratch = BytesBuilder()
        scratch.add_int8(self.magic_byte)
        scratch.add_int8(self.attributes.to_byte())
        scratch.add_bytes(self.key)
        scratch.add_bytes(self.value)
        data = scratch.take_bytes()
        builder.add_int32(crc32_signed(data))
        builder.add_raw(data)


class MessageSet(Serializable):
    """Representation of a set of messages in Kafka

    Messages are kept in a mapping of offset to :class:`Message`. A MessageSet
    built locally assigns placeholder offsets 0, 1, 2... as messages are added;
    the broker assigns the real log offsets on produce.

    N.B.: MessageSets are not preceded by an int32 like other array elements in the
    protocol.

    Specification::

        MessageSet => [Offset MessageSize Message]
          Offset => int64
          MessageSize => int32
    """
    __slots__ = ["_messages"]

    def __init__(self, messages=None):
        """Create a new MessageSet

        :param messages: An initial mapping of offset to :class:`Message`
        """
        self._messages = dict(messages or {})

    def __len__(self):
        """Length of the serialized message set, in bytes

        We don't put the MessageSetSize in front of the serialization
        because that's *technically* not part of the MessageSet. Most
        requests/responses using MessageSets need that size, though, so
        be careful when using this.
        """
        return sum(8 + 4 + len(m) for m in self._messages.values())

    def __eq__(self, other):
        return isinstance(other, MessageSet) and self._messages == other._messages

    __hash__ = None

    def __repr__(self):
        return "MessageSet({!r})".format(self._messages)

    @property
    def messages(self):
        """Read-only mapping of offset to :class:`Message`"""
        return MappingProxyType(self._messages)

    def add_message(self, message):
        """Add a message with the next placeholder offset

        :returns: The offset assigned to the message
        """
        offset = len(self._messages)
        self._messages[offset] = message
        return offset

    @classmethod
    def decode(cls, buff, checksum_policy=ChecksumPolicy.RAISE):
        """Decode a serialized MessageSet.

        The broker may cut off the last message of a size-limited response, so
        running out of bytes in the middle of a message ends decoding quietly
        with the messages read so far. A message failing its crc check is
        handled according to ``checksum_policy``.

        :param buff: The serialized message set
        :param checksum_policy: One of :class:`kafkawire.common.ChecksumPolicy`
        """
        reader = BytesReader(buff)
        messages = {}
        size = 0
        while not reader.eof:
            try:
                msg_offset = reader.read_int64()
                size = reader.read_int32()
                crc = reader.read_int32()
                data = reader.read_raw(size - 4)
            except BufferUnderflowError:
                log.info("Encountered partial message. Expected message size: %d, "
                         "bytes left in buffer: %d", size, reader.remaining)
                break
            actual = crc32_signed(data)
            if actual != crc:
                log.warning("Message CRC mismatch at offset %d. Expected crc: %d, "
                            "actual: %d", msg_offset, crc, actual)
                if checksum_policy == ChecksumPolicy.SKIP:
                    continue
                if checksum_policy != ChecksumPolicy.IGNORE:
                    raise ChecksumMismatch(crc, actual, offset=msg_offset)
            messages[msg_offset] = Message.decode(data)
        log.debug("Decoded %d messages", len(messages))
        return cls(messages)

    def write_to(self, builder):
        """Write each ``[offset][message size][message]`` frame to ``builder``"""
        scratch = BytesBuilder()
        for offset in sorted(self._messages):
            self._messages[offset].write_to(scratch)
            message_data = scratch.take_bytes()
            builder.add_int64(offset)
            builder.add_int32(len(message_data))
            builder.add_raw(message_data)
