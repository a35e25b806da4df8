import logging

from .common import ChecksumPolicy, CompressionType, ConsumerOffset, TopicPartition
from .protocol import Message, MessageAttributes, MessageSet

__version__ = '0.1.0'


__all__ = ["ChecksumPolicy", "CompressionType", "ConsumerOffset", "TopicPartition",
           "Message", "MessageAttributes", "MessageSet"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
