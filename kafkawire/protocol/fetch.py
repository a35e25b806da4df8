# - coding: utf-8 -
import logging
from collections import defaultdict, namedtuple

from .base import Request, Response
from .message import MessageSet
from ..common import ChecksumPolicy
from ..utils.struct_helpers import BytesReader

log = logging.getLogger(__name__)

_PartitionFetchRequest = namedtuple(
    'PartitionFetchRequest',
    ['topic_name', 'partition_id', 'offset', 'max_bytes']
)


class PartitionFetchRequest(_PartitionFetchRequest):
    """Fetch request for a specific topic/partition

    :ivar topic_name: Name of the topic to fetch from
    :ivar partition_id: Id of the partition to fetch from
    :ivar offset: Offset at which to start reading
    :ivar max_bytes: Max bytes to read from this partition (default: 1mb)
    """
    def __new__(cls, topic, partition, offset, max_bytes=1024 * 1024):
        return super(PartitionFetchRequest, cls).__new__(
            cls, topic, partition, offset, max_bytes)


class FetchRequest(Request):
    """A Fetch request sent to Kafka

    Specification::

        FetchRequest => ReplicaId MaxWaitTime MinBytes [TopicName [Partition FetchOffset MaxBytes]]
          ReplicaId => int32
          MaxWaitTime => int32
          MinBytes => int32
          TopicName => string
          Partition => int32
          FetchOffset => int64
          MaxBytes => int32
    """
    API_KEY = 1
    API_VERSION = 0

    def __init__(self, partition_requests=(), timeout=1000, min_bytes=1024,
                 checksum_policy=ChecksumPolicy.RAISE):
        """Create a new fetch request

        Kafka 0.8 uses long polling for fetch requests. Instead of polling and
        waiting, we can set a timeout to wait and a minimum number of bytes to
        be collected before it returns.

        :param partition_requests: Iterable of
            :class:`kafkawire.protocol.PartitionFetchRequest` for this request
        :param timeout: Max time to wait (in ms) for a response from the server
        :param min_bytes: Minimum bytes to collect before returning
        :param checksum_policy: How the response's message sets treat messages
            failing their crc check, see :class:`kafkawire.common.ChecksumPolicy`
        """
        self.timeout = timeout
        self.min_bytes = min_bytes
        self.checksum_policy = checksum_policy
        self._reqs = defaultdict(dict)
        for req in partition_requests:
            self.add_request(req)

    def add_request(self, partition_request):
        """Add a topic/partition/offset to the requests

        :param partition_request: The
            :class:`kafkawire.protocol.PartitionFetchRequest` to add
        """
        pr = partition_request
        self._reqs[pr.topic_name][pr.partition_id] = (pr.offset, pr.max_bytes)

    def write_to(self, builder):
        builder.add_int32(-1)  # replica id
        builder.add_int32(self.timeout)
        builder.add_int32(self.min_bytes)
        builder.add_int32(len(self._reqs))
        for topic_name, partitions in self._reqs.items():
            builder.add_string(topic_name)
            builder.add_int32(len(partitions))
            for partition_id, (fetch_offset, max_bytes) in partitions.items():
                builder.add_int32(partition_id)
                builder.add_int64(fetch_offset)
                builder.add_int32(max_bytes)

    def decode_response(self, buff):
        return self.RESPONSE_CLASS.decode(buff, checksum_policy=self.checksum_policy)


FetchPartitionResponse = namedtuple(
    'FetchPartitionResponse',
    ['max_offset', 'messages', 'err']
)


class FetchResponse(Response):
    """Unpack a fetch response from the server

    Specification::

        FetchResponse => [TopicName [Partition ErrorCode HighwaterMarkOffset MessageSetSize MessageSet]]
          TopicName => string
          Partition => int32
          ErrorCode => int16
          HighwaterMarkOffset => int64
          MessageSetSize => int32

    :ivar topics: `{topic: {partition: FetchPartitionResponse}}`
    """
    API_KEY = 1

    def __init__(self, topics):
        """
        :param topics: `{topic: {partition: FetchPartitionResponse}}`, in the
            order the broker sent them
        """
        self.check_errors(
            [pres.err for partitions in topics.values() for pres in partitions.values()],
            topics)
        self.topics = topics

    @classmethod
    def decode(cls, buff, checksum_policy=ChecksumPolicy.RAISE):
        """Deserialize into a new Response

        :param buff: Serialized message
        :type buff: :class:`bytearray`
        :param checksum_policy: see :meth:`kafkawire.protocol.MessageSet.decode`
        """
        reader = BytesReader(buff)
        topics = {}

        def read_partition(reader):
            partition_id, err, max_offset = reader.unpack('ihq')
            mset_buff = reader.read_bytes() or b''
            if err != 0:
                # the error is raised on construction, ahead of any checksum failure
                messages = MessageSet()
            else:
                messages = MessageSet.decode(mset_buff, checksum_policy=checksum_policy)
            return partition_id, FetchPartitionResponse(max_offset, messages, err)

        for _ in range(reader.read_int32()):
            topic_name = reader.read_string()
            topics[topic_name] = dict(reader.read_array(read_partition) or [])
        log.debug("Decoded fetch response for %d topics", len(topics))
        return cls(topics)


FetchRequest.RESPONSE_CLASS = FetchResponse
