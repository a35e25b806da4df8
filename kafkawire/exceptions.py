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


class KafkaException(Exception):
    """Generic exception type. The base of all kafkawire exception types."""
    pass


class MalformedProtocolData(KafkaException):
    """Indicates bytes that cannot be a valid encoding of the expected structure,
        such as a negative length prefix other than -1
    """
    pass


class UnsupportedCompressionCodec(MalformedProtocolData):
    """Indicates a message attributes byte naming a codec we don't know about"""

    def __init__(self, codec, *args, **kwargs):
        if not args:
            args = ("Unsupported compression codec: {}".format(codec), )
        super(UnsupportedCompressionCodec, self).__init__(*args, **kwargs)
        self.codec = codec


class BufferUnderflowError(KafkaException):
    """Indicates an attempt to read past the end of a buffer

    MessageSet decoding treats this as the end of a partially transmitted
    trailing message. Everywhere else it propagates like any other failure.
    """

    def __init__(self, requested, available, *args, **kwargs):
        if not args:
            args = ("Needed {} bytes, {} available".format(requested, available), )
        super(BufferUnderflowError, self).__init__(*args, **kwargs)
        self.requested = requested
        self.available = available


class ChecksumMismatch(KafkaException):
    """Indicates that a message's CRC32 does not match the CRC sent with it"""

    def __init__(self, expected, actual, offset=None, *args, **kwargs):
        if not args:
            args = ("Message at offset {}: expected crc {}, actual {}".format(
                offset, expected, actual), )
        super(ChecksumMismatch, self).__init__(*args, **kwargs)
        self.expected = expected
        self.actual = actual
        self.offset = offset


"""
Protocol Client Exceptions
https://cwiki.apache.org/confluence/display/KAFKA/A+Guide+To+The+Kafka+Protocol#AGuideToTheKafkaProtocol-ErrorCodes

NOTE: Don't raise these from client code unless it's in direct response to an error
code from the broker. When that's not the case, the exception raised should instead be
a subclass of KafkaException.
"""


class ProtocolClientError(KafkaException):
    """Base class for protocol errors

    :ivar error_code: The code reported by the broker. Usually equal to
        `ERROR_CODE`, but an :class:`UnknownError` raised for a code missing from
        `ERROR_CODES` keeps the code the broker actually sent.
    :ivar response: The decoded entities of the response that reported the error
    """
    ERROR_CODE = None
    RETRIABLE = False

    def __init__(self, *args, **kwargs):
        error_code = kwargs.pop('error_code', None)
        response = kwargs.pop('response', None)
        super(ProtocolClientError, self).__init__(*args, **kwargs)
        self.error_code = self.ERROR_CODE if error_code is None else error_code
        self.response = response


ProtocolError = ProtocolClientError


class UnknownError(ProtocolClientError):
    """An unexpected server error"""
    ERROR_CODE = -1


class OffsetOutOfRangeError(ProtocolClientError):
    """The requested offset is outside the range of offsets maintained by the
        server for the given topic/partition.
    """
    ERROR_CODE = 1


class InvalidMessageError(ProtocolClientError):
    """This indicates that a message contents does not match its CRC"""
    ERROR_CODE = 2
    RETRIABLE = True


class UnknownTopicOrPartition(ProtocolClientError):
    """This request is for a topic or partition that does not exist on this
        broker.
    """
    ERROR_CODE = 3
    RETRIABLE = True


class InvalidMessageSize(ProtocolClientError):
    """The message has a negative size"""
    ERROR_CODE = 4


class LeaderNotAvailable(ProtocolClientError):
    """This error is thrown if we are in the middle of a leadership election
        and there is currently no leader for this partition and hence it is
        unavailable for writes.
    """
    ERROR_CODE = 5
    RETRIABLE = True


class NotLeaderForPartition(ProtocolClientError):
    """This error is thrown if the client attempts to send messages to a
        replica that is not the leader for some partition. It indicates that
        the client's metadata is out of date.
    """
    ERROR_CODE = 6
    RETRIABLE = True


class RequestTimedOut(ProtocolClientError):
    """This error is thrown if the request exceeds the user-specified time
        limit in the request.
    """
    ERROR_CODE = 7
    RETRIABLE = True


class BrokerNotAvailable(ProtocolClientError):
    """This is not a client facing error and is used mostly by tools when a
        broker is not alive.
    """
    ERROR_CODE = 8


class ReplicaNotAvailable(ProtocolClientError):
    """If replica is expected on a broker, but is not (this can be safely
        ignored).
    """
    ERROR_CODE = 9


class MessageSizeTooLarge(ProtocolClientError):
    """The server has a configurable maximum message size to avoid unbounded
        memory allocation. This error is thrown if the client attempts to
        produce a message larger than this maximum.
    """
    ERROR_CODE = 10


class StaleControllerEpoch(ProtocolClientError):
    """Internal error code for broker-to-broker communication."""
    ERROR_CODE = 11


class OffsetMetadataTooLarge(ProtocolClientError):
    """If you specify a string larger than configured maximum for offset
        metadata
    """
    ERROR_CODE = 12


class NetworkException(ProtocolClientError):
    """The server disconnected before a response was received."""
    ERROR_CODE = 13
    RETRIABLE = True


class GroupLoadInProgress(ProtocolClientError):
    """The broker returns this error code for an offset fetch request if it is
        still loading offsets (after a leader change for that offsets topic
        partition), or in response to group membership requests (such as
        heartbeats) when group metadata is being loaded by the coordinator.
    """
    ERROR_CODE = 14
    RETRIABLE = True


class GroupCoordinatorNotAvailable(ProtocolClientError):
    """The broker returns this error code for consumer metadata requests or
        offset commit requests if the offsets topic has not yet been created.
    """
    ERROR_CODE = 15
    RETRIABLE = True


class NotCoordinatorForGroup(ProtocolClientError):
    """The broker returns this error code if it receives an offset fetch or
        commit request for a consumer group that it is not a coordinator for.
    """
    ERROR_CODE = 16
    RETRIABLE = True


class InvalidTopic(ProtocolClientError):
    """For a request which attempts to access an invalid topic (e.g. one which has
        an illegal name), or if an attempt is made to write to an internal topic
        (such as the consumer offsets topic).
    """
    ERROR_CODE = 17


class RecordListTooLarge(ProtocolClientError):
    """If a message batch in a produce request exceeds the maximum configured
        segment size.
    """
    ERROR_CODE = 18


class NotEnoughReplicas(ProtocolClientError):
    """Returned from a produce request when the number of in-sync replicas is
        lower than the configured minimum and requiredAcks is -1.
    """
    ERROR_CODE = 19
    RETRIABLE = True


class NotEnoughReplicasAfterAppend(ProtocolClientError):
    """Returned from a produce request when the message was written to the log,
        but with fewer in-sync replicas than required.
    """
    ERROR_CODE = 20
    RETRIABLE = True


class InvalidRequiredAcks(ProtocolClientError):
    """Returned from a produce request if the requested requiredAcks is invalid
        (anything other than -1, 1, or 0).
    """
    ERROR_CODE = 21


class IllegalGeneration(ProtocolClientError):
    """Returned from group membership requests (such as heartbeats) when the generation
        id provided in the request is not the current generation
    """
    ERROR_CODE = 22


class InconsistentGroupProtocol(ProtocolClientError):
    """Returned in join group when the member provides a protocol type or set of protocols
        which is not compatible with the current group.
    """
    ERROR_CODE = 23


class InvalidGroupId(ProtocolClientError):
    """Returned in join group when the groupId is empty or null."""
    ERROR_CODE = 24


class UnknownMemberId(ProtocolClientError):
    """Returned from group requests (offset commits/fetches, heartbeats, etc) when the
        memberId is not in the current generation.
    """
    ERROR_CODE = 25


class InvalidSessionTimeout(ProtocolClientError):
    """Returned in join group when the requested session timeout is outside of the allowed
        range on the broker
    """
    ERROR_CODE = 26


class RebalanceInProgress(ProtocolClientError):
    """Returned in heartbeat requests when the coordinator has begun rebalancing the
        group. This indicates to the client that it should rejoin the group.
    """
    ERROR_CODE = 27


class InvalidCommitOffsetSize(ProtocolClientError):
    """This error indicates that an offset commit was rejected because of
        oversize metadata.
    """
    ERROR_CODE = 28


class TopicAuthorizationFailed(ProtocolClientError):
    """Returned by the broker when the client is not authorized to access the requested
        topic.
    """
    ERROR_CODE = 29


class GroupAuthorizationFailed(ProtocolClientError):
    """Returned by the broker when the client is not authorized to access a particular
    groupId.
    """
    ERROR_CODE = 30


class ClusterAuthorizationFailed(ProtocolClientError):
    """Returned by the broker when the client is not authorized to use an
        inter-broker or administrative API.
    """
    ERROR_CODE = 31


ERROR_CODES = dict(
    (exc.ERROR_CODE, exc)
    for exc in (UnknownError,
                OffsetOutOfRangeError,
                InvalidMessageError,
                UnknownTopicOrPartition,
                InvalidMessageSize,
                LeaderNotAvailable,
                NotLeaderForPartition,
                RequestTimedOut,
                BrokerNotAvailable,
                ReplicaNotAvailable,
                MessageSizeTooLarge,
                StaleControllerEpoch,
                OffsetMetadataTooLarge,
                NetworkException,
                GroupLoadInProgress,
                GroupCoordinatorNotAvailable,
                NotCoordinatorForGroup,
                InvalidTopic,
                RecordListTooLarge,
                NotEnoughReplicas,
                NotEnoughReplicasAfterAppend,
                InvalidRequiredAcks,
                IllegalGeneration,
                InconsistentGroupProtocol,
                InvalidGroupId,
                UnknownMemberId,
                InvalidSessionTimeout,
                RebalanceInProgress,
                InvalidCommitOffsetSize,
                TopicAuthorizationFailed,
                GroupAuthorizationFailed,
                ClusterAuthorizationFailed)
)


def error_for_code(error_code):
    """Get the exception class for a broker error code

    Codes missing from `ERROR_CODES` resolve to :class:`UnknownError`.

    :param error_code: The non-zero error code reported by the broker
    :type error_code: int
    """
    return ERROR_CODES.get(error_code, UnknownError)
