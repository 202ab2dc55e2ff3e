import tempfile
from pathlib import Path

import unittest as ut
from typer.testing import CliRunner

from enigma.main import app
from enigma.test_config import CONFIG

MESSAGES = """* B I II III AAA
HELLO WORLD

* B I II III AAA BBB
AAAAA
"""


class MainTest(ut.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmp_dir.name)
        self.config_file = self.tmp_path / 'default.conf'
        self.config_file.write_text(CONFIG)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_stdin_to_stdout(self):
        result = self.runner.invoke(app, [str(self.config_file)], input=MESSAGES)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, 'ILBDA AMTAZ\n\nEWTYX\n')

    def test_files(self):
        input_file = self.tmp_path / 'message.in'
        input_file.write_text(MESSAGES)
        output_file = self.tmp_path / 'message.out'

        result = self.runner.invoke(app, [str(self.config_file), str(input_file), str(output_file)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(output_file.read_text(), 'ILBDA AMTAZ\n\nEWTYX\n')

    def test_decrypt(self):
        result = self.runner.invoke(app, [str(self.config_file)], input='* B I II III AAA\nILBDA AMTAZ\n')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, 'HELLO WORLD\n')

    def test_missing_config(self):
        result = self.runner.invoke(app, [str(self.tmp_path / 'missing.conf')], input=MESSAGES)
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Error: could not open', result.output)

    def test_input_not_utf8(self):
        input_file = self.tmp_path / 'message.in'
        input_file.write_bytes(b'* B I II III AAA\n\xff\xfe\n')

        result = self.runner.invoke(app, [str(self.config_file), str(input_file)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Error: could not read', result.output)
        self.assertNotIsInstance(result.exception, UnicodeDecodeError)

    def test_bad_message(self):
        result = self.runner.invoke(app, [str(self.config_file)], input='HELLO\n')
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Error: machine not configured', result.output)

        result = self.runner.invoke(app, [str(self.config_file)], input='* B I II III AAA\nhello\n')
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Error:', result.output)


if __name__ == "__main__":
    ut.main()
