import json
import os
import random
import tempfile
import unittest
from unittest.mock import patch

from quickchat.core.models import PersistenceError
from quickchat.directory import Directory
from quickchat.operations.message_log import MessageLog


class TestMessageLog(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "logs", "messages.json")
        self.log = MessageLog(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_append_line_creates_file(self):
        self.log.append_line('{"a":1}')
        self.log.append_line('{"a":2}')
        with open(self.path, encoding='utf-8') as f:
            self.assertEqual(f.read(), '{"a":1}\n{"a":2}\n')

    def test_read_records_missing_file(self):
        self.assertEqual(self.log.read_records(), [])

    def test_read_records_skips_bad_lines(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write('{"messageId":"0000000001"}\n\nnot json\n[1,2]\n{"messageId":"0000000002"}\n')
        records = self.log.read_records()
        self.assertEqual([r["messageId"] for r in records], ["0000000001", "0000000002"])

    def test_write_failure_raises_persistence_error(self):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertRaises(PersistenceError):
                self.log.append_line("x")

    def test_unencodable_text_raises_persistence_error(self):
        with self.assertRaises(PersistenceError):
            self.log.append_line("raw \udcff surrogate")

    def test_read_records_skips_undecodable_bytes(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, 'wb') as f:
            f.write(b'{"messageId":"0000000001"}\n\xff\xfe garbage\n{"messageId":"0000000002"}\n')
        records = self.log.read_records()
        self.assertEqual([r["messageId"] for r in records], ["0000000001", "0000000002"])

    def test_send_with_surrogate_payload_is_saved(self):
        directory = Directory(message_log=self.log, rng=random.Random(7))
        directory.register("ab_cd", "Pass123!", "Ann", "Bell", "+27821112222")
        directory.register("xy_z", "Other123!", "Xen", "Yu", "+27823334444")
        directory.login("ab_cd", "Pass123!")
        result = directory.send("+27823334444", "bad \udcff byte")
        self.assertTrue(result.ok)
        records = self.log.read_records()
        self.assertEqual(records[0]["message"], "bad \udcff byte")

    def test_directory_writes_one_line_per_send(self):
        directory = Directory(message_log=self.log, rng=random.Random(3))
        directory.register("ab_cd", "Pass123!", "Ann", "Bell", "+27821112222")
        directory.register("xy_z", "Other123!", "Xen", "Yu", "+27823334444")
        directory.login("ab_cd", "Pass123!")
        sent = [directory.send("+27823334444", text).record for text in ("hi", "how are you")]
        directory.send("+27000000000", "lost")

        records = self.log.read_records()
        self.assertEqual(len(records), 2)
        self.assertEqual([r["messageId"] for r in records], [m.message_id for m in sent])
        self.assertEqual(records[1]["message"], "how are you")
        self.assertEqual(records[1]["status"], "Sent")
        with open(self.path, encoding='utf-8') as f:
            lines = f.read().splitlines()
        self.assertEqual(json.loads(lines[0]), json.loads(sent[0].to_json()))


if __name__ == '__main__':
    unittest.main()
