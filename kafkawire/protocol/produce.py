# - coding: utf-8 -
import itertools
from collections import defaultdict

from .base import Request, Response
from .message import MessageSet
from ..common import TopicPartition
from ..utils import struct_helpers
from ..utils.struct_helpers import BytesBuilder


class ProduceRequest(Request):
    """Produce Request

    Specification::

        ProduceRequest => RequiredAcks Timeout [TopicName [Partition MessageSetSize MessageSet]]
          RequiredAcks => int16
          Timeout => int32
          Partition => int32
          MessageSetSize => int32
    """
    API_KEY = 0
    API_VERSION = 0

    def __init__(self, required_acks=1, timeout=10000):
        """Create a new ProduceRequest

        ``required_acks`` determines how many acknowledgement the server waits
        for before returning. This is useful for ensuring the replication factor
        of published messages. The behavior is::

            -1: Block until all servers acknowledge
            0: No waiting -- server doesn't even respond to the Produce request
            1: Wait for this server to write to the local log and then return
            2+: Wait for N servers to acknowledge

        :param required_acks: see docstring
        :param timeout: timeout (in ms) to wait for the required acks
        """
        # {topic_name: {partition_id: MessageSet}}
        self.msets = defaultdict(lambda: defaultdict(MessageSet))
        self.required_acks = required_acks
        self.timeout = timeout
        self._message_count = 0  # this optimization is not premature

    @property
    def messages(self):
        """Iterable of all messages in the Request"""
        return itertools.chain.from_iterable(
            mset.messages.values()
            for partitions in self.msets.values()
            for mset in partitions.values()
        )

    def add_message(self, message, topic_name, partition_id):
        """Add a :class:`kafkawire.protocol.Message` to the waiting request

        :param message: the message to add
        :param topic_name: the name of the topic to publish to
        :param partition_id: the partition to publish to
        :returns: the placeholder offset of the message within its MessageSet
        """
        offset = self.msets[topic_name][partition_id].add_message(message)
        self._message_count += 1
        return offset

    def message_count(self):
        """Get the number of messages across all MessageSets in the request."""
        return self._message_count

    def write_to(self, builder):
        builder.add_int16(self.required_acks)
        builder.add_int32(self.timeout)
        builder.add_int32(len(self.msets))
        mset_builder = BytesBuilder()
        for topic_name, partitions in self.msets.items():
            builder.add_string(topic_name)
            builder.add_int32(len(partitions))
            for partition_id, message_set in partitions.items():
                message_set.write_to(mset_builder)
                builder.add_int32(partition_id)
                builder.add_bytes(mset_builder.take_bytes())


class ProduceResponse(Response):
    """Produce Response. Checks to make sure everything went okay.

    Brokers don't send this response to requests with ``required_acks=0``.

    Specification::

        ProduceResponse => [TopicName [Partition ErrorCode Offset]]
          TopicName => string
          Partition => int32
          ErrorCode => int16
          Offset => int64

    :ivar offsets: `{TopicPartition: offset}` of the first message appended
        to each partition
    """
    API_KEY = 0

    def __init__(self, partition_responses):
        """
        :param partition_responses: list of
            (:class:`kafkawire.common.TopicPartition`, error code, offset)
        """
        self.check_errors([err for _, err, _ in partition_responses],
                          partition_responses)
        self.offsets = dict((tp, offset) for tp, _, offset in partition_responses)

    @classmethod
    def decode(cls, buff):
        """Deserialize into a new Response

        :param buff: Serialized message
        :type buff: :class:`bytearray`
        """
        fmt = '[S [ihq] ]'
        response = struct_helpers.unpack_from(fmt, buff, 0)
        partition_responses = []
        for (topic, partitions) in response or []:
            for partition_id, err, offset in partitions or []:
                partition_responses.append(
                    (TopicPartition(topic, partition_id), err, offset))
        return cls(partition_responses)


ProduceRequest.RESPONSE_CLASS = ProduceResponse
