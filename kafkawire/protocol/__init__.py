# - coding: utf-8 -
from .base import Request, Response
from .fetch import (PartitionFetchRequest, FetchRequest, FetchPartitionResponse,
                    FetchResponse)
from .message import MessageAttributes, Message, MessageSet
from .offset_commit import (GroupCoordinatorRequest, GroupCoordinatorResponse,
                            OffsetCommitRequest, OffsetCommitResponse,
                            OffsetFetchRequest, OffsetFetchResponse)
from .produce import ProduceRequest, ProduceResponse

"""
Author: Keith Bourgoin, Emmett Butler

Protocol implementation for Kafka>=0.8.2, message format v0

Each request class serializes only its own body with ``encode()`` and is bound
to a single response class through ``RESPONSE_CLASS``; ``get_bytes()`` adds
the request header for the transport.

For Reference:

https://cwiki.apache.org/confluence/display/KAFKA/A+Guide+To+The+Kafka+Protocol

Each message is encoded as either a Request or Response:

RequestOrResponse => Size (RequestMessage | ResponseMessage)
  Size => int32

RequestMessage => ApiKey ApiVersion CorrelationId ClientId RequestMessage
  ApiKey => int16
  ApiVersion => int16
  CorrelationId => int32
  ClientId => string
  RequestMessage => ProduceRequest | FetchRequest | OffsetCommitRequest | OffsetFetchRequest | GroupCoordinatorRequest

Response => CorrelationId ResponseMessage
  CorrelationId => int32
  ResponseMessage => ProduceResponse | FetchResponse | OffsetCommitResponse | OffsetFetchResponse | GroupCoordinatorResponse
"""
__all__ = ["Request", "Response", "ProduceRequest", "ProduceResponse",
           "PartitionFetchRequest", "FetchRequest", "FetchPartitionResponse",
           "FetchResponse", "GroupCoordinatorRequest", "GroupCoordinatorResponse",
           "OffsetCommitRequest", "OffsetCommitResponse",
           "OffsetFetchRequest", "OffsetFetchResponse",
           "MessageAttributes", "Message", "MessageSet"]
