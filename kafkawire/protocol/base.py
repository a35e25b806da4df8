# - coding: utf-8 -
import logging

from ..exceptions import error_for_code
from ..utils.struct_helpers import BytesBuilder, BytesReader

log = logging.getLogger(__name__)


class Request(object):
    """Base class for all Requests

    Each subclass targets one broker API and schema revision, named by
    ``API_KEY`` and ``API_VERSION``, and is bound to the one
    :class:`Response` subclass able to decode the broker's answer. The caller
    knows which request it sent, so decoding never has to look at the API key.
    """
    API_KEY = -1
    API_VERSION = 0
    RESPONSE_CLASS = None
    CLIENT_ID = b'kafkawire'

    def encode(self):
        """Serialize the request body, without the request header

        :rtype: bytes
        """
        builder = BytesBuilder()
        self.write_to(builder)
        return builder.take_bytes()

    def write_to(self, builder):
        raise NotImplementedError()

    def decode_response(self, buff):
        """Decode the body of the broker's response to this request"""
        return self.RESPONSE_CLASS.decode(buff)

    def get_bytes(self, correlation_id=0, client_id=None):
        """Serialize the request with the header the transport sends it with

        Specification::

            RequestOrResponse => Size RequestMessage
              Size => int32
            RequestMessage => ApiKey ApiVersion CorrelationId ClientId RequestBody
              ApiKey => int16
              ApiVersion => int16
              CorrelationId => int32
              ClientId => string

        :param correlation_id: This is a user-supplied integer. It will be
            passed back in the response by the server, unmodified. It is useful
            for matching request and response between the client and server.
        :type correlation_id: int
        :param client_id: Identifies the client application to the broker.
            Defaults to ``CLIENT_ID``.
        :rtype: bytes
        """
        body = BytesBuilder()
        body.add_int16(self.API_KEY)
        body.add_int16(self.API_VERSION)
        body.add_int32(correlation_id)
        body.add_string(self.CLIENT_ID if client_id is None else client_id)
        self.write_to(body)
        output = BytesBuilder()
        output.add_int32(len(body))  # msglen excludes this int
        output.add_raw(body.take_bytes())
        return output.take_bytes()


class Response(object):
    """Base class for Response objects.

    Subclasses are constructed from already decoded values and check the
    error codes they carry on construction, so a Response that exists is
    one the broker reported no error for.
    """
    API_KEY = -1

    @classmethod
    def decode(cls, buff):
        """Deserialize a response body into a new Response"""
        raise NotImplementedError()

    @staticmethod
    def unpack_header(buff):
        """Split a response into its correlation id and body

        ``buff`` is the response without its leading size, as read by the
        transport.

        :returns: tuple of (correlation id, body bytes)
        """
        reader = BytesReader(buff)
        correlation_id = reader.read_int32()
        return correlation_id, reader.read_raw(reader.remaining)

    def raise_error(self, err_code, response):
        """Raise an error based on the Kafka error code

        :param err_code: The error code from Kafka
        :param response: The decoded entities of the response
        """
        clsname = self.__class__.__name__
        log.debug("%s reported error code %d", clsname, err_code)
        raise error_for_code(err_code)(
            'Response Type: "%s"\tError Code: %d\tResponse: %s' % (
                clsname, err_code, response),
            error_code=err_code,
            response=response)

    def check_errors(self, error_codes, response):
        """Raise for the first non-zero code in ``error_codes``

        :param error_codes: Error codes in the order they appeared in the response
        :param response: The decoded entities, attached to the raised error
        """
        for err_code in error_codes:
            if err_code != 0:
                self.raise_error(err_code, response)
