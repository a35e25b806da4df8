# - coding: utf-8 -
from collections import defaultdict

from .base import Request, Response
from ..common import ConsumerOffset, TopicPartition
from ..utils import struct_helpers


class GroupCoordinatorRequest(Request):
    """A group coordinator request

    Specification::

        GroupCoordinatorRequest => ConsumerGroup
            ConsumerGroup => string
    """
    API_KEY = 10
    API_VERSION = 0

    def __init__(self, consumer_group):
        """Create a new group coordinator request"""
        self.consumer_group = consumer_group

    def write_to(self, builder):
        builder.add_string(self.consumer_group)


class GroupCoordinatorResponse(Response):
    """A group coordinator response

    Specification::

        GroupCoordinatorResponse => ErrorCode CoordinatorId CoordinatorHost CoordinatorPort
            ErrorCode => int16
            CoordinatorId => int32
            CoordinatorHost => string
            CoordinatorPort => int32
    """
    API_KEY = 10

    def __init__(self, error_code, coordinator_id, coordinator_host, coordinator_port):
        self.check_errors([error_code],
                          (error_code, coordinator_id, coordinator_host, coordinator_port))
        self.coordinator_id = coordinator_id
        self.coordinator_host = coordinator_host
        self.coordinator_port = coordinator_port

    @classmethod
    def decode(cls, buff):
        """Deserialize into a new Response

        :param buff: Serialized message
        :type buff: :class:`bytearray`
        """
        return cls(*struct_helpers.unpack_from('hiSi', buff, 0))


GroupCoordinatorRequest.RESPONSE_CLASS = GroupCoordinatorResponse


class OffsetCommitRequest(Request):
    """An offset commit request

    Specification::

        OffsetCommitRequest => ConsumerGroupId ConsumerGroupGenerationId ConsumerId [TopicName [Partition Offset TimeStamp Metadata]]
            ConsumerGroupId => string
            ConsumerGroupGenerationId => int32
            ConsumerId => string
            TopicName => string
            Partition => int32
            Offset => int64
            TimeStamp => int64
            Metadata => string
    """
    API_KEY = 8
    API_VERSION = 1

    def __init__(self,
                 consumer_group,
                 consumer_group_generation_id,
                 consumer_id,
                 offsets=(),
                 timestamp=-1):
        """Create a new offset commit request

        :param offsets: Iterable of :class:`kafkawire.common.ConsumerOffset` to commit
        :param timestamp: Commit time in milliseconds applied to every offset.
            -1 lets the broker use its own time.
        """
        self.consumer_group = consumer_group
        self.consumer_group_generation_id = consumer_group_generation_id
        self.consumer_id = consumer_id
        self.timestamp = timestamp
        self._reqs = defaultdict(list)
        for consumer_offset in offsets:
            self._reqs[consumer_offset.topic].append(consumer_offset)

    def write_to(self, builder):
        builder.add_string(self.consumer_group)
        builder.add_int32(self.consumer_group_generation_id)
        builder.add_string(self.consumer_id)
        builder.add_array(list(self._reqs.items()), self._write_topic)

    def _write_topic(self, builder, item):
        topic_name, offsets = item
        builder.add_string(topic_name)
        builder.add_array(offsets, self._write_partition)

    def _write_partition(self, builder, consumer_offset):
        builder.add_int32(consumer_offset.partition)
        builder.add_int64(consumer_offset.offset)
        builder.add_int64(self.timestamp)
        builder.add_string(consumer_offset.metadata)


class OffsetCommitResponse(Response):
    """An offset commit response

    Specification::

        OffsetCommitResponse => [TopicName [Partition ErrorCode]]]
            TopicName => string
            Partition => int32
            ErrorCode => int16

    :ivar partitions: The :class:`kafkawire.common.TopicPartition` s committed
    """
    API_KEY = 8

    def __init__(self, partition_errors):
        """
        :param partition_errors: list of (:class:`kafkawire.common.TopicPartition`,
            error code) in the order the broker sent them
        """
        self.check_errors([err for _, err in partition_errors], partition_errors)
        self.partitions = [tp for tp, _ in partition_errors]

    @classmethod
    def decode(cls, buff):
        """Deserialize into a new Response

        :param buff: Serialized message
        :type buff: :class:`bytearray`
        """
        fmt = '[S [ih ] ]'
        response = struct_helpers.unpack_from(fmt, buff, 0)

        partition_errors = []
        for topic_name, partitions in response or []:
            for partition_id, err in partitions or []:
                partition_errors.append((TopicPartition(topic_name, partition_id), err))
        return cls(partition_errors)


OffsetCommitRequest.RESPONSE_CLASS = OffsetCommitResponse


class OffsetFetchRequest(Request):
    """An offset fetch request

    Partitions are sent grouped by topic. Topics keep the order in which they
    first appear in ``partitions``, and each topic's partitions keep their
    relative order.

    Specification::

        OffsetFetchRequest => ConsumerGroup [TopicName [Partition]]
            ConsumerGroup => string
            TopicName => string
            Partition => int32
    """
    API_KEY = 9
    API_VERSION = 1

    def __init__(self, consumer_group, partitions=()):
        """Create a new offset fetch request

        :param partitions: Iterable of :class:`kafkawire.common.TopicPartition`
            to fetch the committed offsets of
        """
        self.consumer_group = consumer_group
        self.partitions = tuple(TopicPartition(*tp) for tp in partitions)
        self._reqs = defaultdict(list)
        for tp in self.partitions:
            self._reqs[tp.topic].append(tp.partition)

    def write_to(self, builder):
        builder.add_string(self.consumer_group)
        builder.add_int32(len(self._reqs))
        for topic_name, partition_ids in self._reqs.items():
            builder.add_string(topic_name)
            builder.add_int32_array(partition_ids)


class OffsetFetchResponse(Response):
    """An offset fetch response v1

    Specification::

    OffsetFetch Response (Version: 1) => [responses]
        responses => topic [partition_responses]
            topic => STRING
            partition_responses => partition offset metadata error_code
                partition => INT32
                offset => INT64
                metadata => NULLABLE_STRING
                error_code => INT16

    :ivar offsets: list of :class:`kafkawire.common.ConsumerOffset` in the
        order the broker sent them
    :ivar topics: The same offsets as `{topic: {partition: ConsumerOffset}}`
    """
    API_KEY = 9

    def __init__(self, offsets):
        offsets = list(offsets)
        self.check_errors([o.error_code for o in offsets], offsets)
        self.offsets = offsets
        self.topics = {}
        for consumer_offset in offsets:
            partitions = self.topics.setdefault(consumer_offset.topic, {})
            partitions[consumer_offset.partition] = consumer_offset

    @classmethod
    def decode(cls, buff):
        """Deserialize into a new Response

        :param buff: Serialized message
        :type buff: :class:`bytearray`
        """
        fmt = '[S [iqSh ] ]'
        response = struct_helpers.unpack_from(fmt, buff, 0)

        offsets = []
        for topic_name, partitions in response or []:
            for partition_id, offset, metadata, err in partitions or []:
                offsets.append(
                    ConsumerOffset(topic_name, partition_id, offset, metadata, err))
        return cls(offsets)


OffsetFetchRequest.RESPONSE_CLASS = OffsetFetchResponse
