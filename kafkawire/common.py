# - coding: utf-8 -
"""
Author: Keith Bourgoin
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
__all__ = ["CompressionType", "ChecksumPolicy", "TopicPartition", "ConsumerOffset"]
from collections import namedtuple


class CompressionType(object):
    """Enum for the various compressions supported.

    :cvar NONE: Indicates no compression in use
    :cvar GZIP: Indicates gzip compression in use
    :cvar SNAPPY: Indicates snappy compression in use
    """
    NONE = 0
    GZIP = 1
    SNAPPY = 2


class ChecksumPolicy(object):
    """Enum for what MessageSet decoding does with a message failing its CRC check

    :cvar RAISE: Abort decoding with :class:`kafkawire.exceptions.ChecksumMismatch`
    :cvar SKIP: Log a warning, drop the message and continue with the next one
    :cvar IGNORE: Log a warning and decode the message anyway
    """
    RAISE = 0
    SKIP = 1
    IGNORE = 2


_TopicPartition = namedtuple('TopicPartition', ['topic', 'partition'])


class TopicPartition(_TopicPartition):
    """Identity of a single partition within a named topic

    :ivar topic: Name of the topic
    :ivar partition: Id of the partition
    """
    __slots__ = ()

    def __str__(self):
        return '{}:{}'.format(self.topic, self.partition)


_ConsumerOffset = namedtuple(
    'ConsumerOffset',
    ['topic', 'partition', 'offset', 'metadata', 'error_code']
)


class ConsumerOffset(_ConsumerOffset):
    """A consumer group's position in a particular topic partition

    :ivar topic: Name of the topic
    :ivar partition: Id of the partition
    :ivar offset: Offset of the last message handled by the consumer
    :ivar metadata: User-defined metadata stored along with the offset
    :ivar error_code: The error code returned by the broker for this partition
    """
    __slots__ = ()

    def __new__(cls, topic, partition, offset, metadata=None, error_code=0):
        return super(ConsumerOffset, cls).__new__(
            cls, topic, partition, offset, metadata, error_code)

    @property
    def topic_partition(self):
        return TopicPartition(self.topic, self.partition)

    def copy(self, offset, metadata=None):
        """Copy this offset with a new `offset` and `metadata`

        The copy carries no error code: it describes a position the consumer
        intends to commit, not one reported by the broker.
        """
        return ConsumerOffset(self.topic, self.partition, offset, metadata)
