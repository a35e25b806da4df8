import unittest

from kafkawire.common import ConsumerOffset, TopicPartition
from kafkawire import exceptions


class TestTopicPartition(unittest.TestCase):
    def test_value_identity(self):
        self.assertEqual(TopicPartition('test', 0), TopicPartition('test', 0))
        self.assertEqual(len({TopicPartition('test', 0), TopicPartition('test', 0),
                              TopicPartition('test', 1)}), 2)

    def test_str(self):
        self.assertEqual(str(TopicPartition('test', 3)), 'test:3')


class TestConsumerOffset(unittest.TestCase):
    def test_defaults(self):
        offset = ConsumerOffset('test', 0, 10)
        self.assertIsNone(offset.metadata)
        self.assertEqual(offset.error_code, 0)
        self.assertEqual(offset.topic_partition, TopicPartition('test', 0))

    def test_copy(self):
        offset = ConsumerOffset('test', 1, 10, 'meta', 0)
        copied = offset.copy(11, metadata='meta')
        self.assertEqual(copied, ConsumerOffset('test', 1, 11, 'meta', 0))
        self.assertEqual(offset.offset, 10)

        copied = offset.copy(12, metadata='other')
        self.assertEqual(copied.metadata, 'other')
        self.assertEqual(copied.topic_partition, offset.topic_partition)

    def test_copy_replaces_metadata(self):
        offset = ConsumerOffset('test', 1, 10, 'meta')
        self.assertIsNone(offset.copy(11).metadata)
        self.assertIsNone(offset.copy(11, metadata=None).metadata)

    def test_copy_clears_error(self):
        offset = ConsumerOffset('test', 1, -1, '', 14)
        self.assertEqual(offset.copy(0).error_code, 0)

    def test_immutable(self):
        offset = ConsumerOffset('test', 1, 10)
        with self.assertRaises(AttributeError):
            offset.offset = 11


class TestErrorCodes(unittest.TestCase):
    def test_lookup(self):
        self.assertIs(exceptions.error_for_code(3), exceptions.UnknownTopicOrPartition)
        self.assertIs(exceptions.error_for_code(-1), exceptions.UnknownError)
        self.assertIs(exceptions.error_for_code(1000), exceptions.UnknownError)

    def test_codes_are_unique(self):
        for code, exc in exceptions.ERROR_CODES.items():
            self.assertEqual(exc.ERROR_CODE, code)
            self.assertTrue(issubclass(exc, exceptions.ProtocolError))
        self.assertNotIn(0, exceptions.ERROR_CODES)

    def test_error_carries_code(self):
        err = exceptions.error_for_code(1000)('boom', error_code=1000)
        self.assertEqual(err.error_code, 1000)
        self.assertEqual(exceptions.LeaderNotAvailable('boom').error_code, 5)

    def test_retriable(self):
        self.assertTrue(exceptions.NotLeaderForPartition.RETRIABLE)
        self.assertFalse(exceptions.OffsetOutOfRangeError.RETRIABLE)

    def test_failure_kinds_are_distinct(self):
        kinds = (exceptions.MalformedProtocolData, exceptions.BufferUnderflowError,
                 exceptions.ChecksumMismatch, exceptions.ProtocolError)
        for kind in kinds:
            for other in kinds:
                if kind is not other:
                    self.assertFalse(issubclass(kind, other))


if __name__ == '__main__':
    unittest.main()
