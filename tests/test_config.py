import os
import tempfile
import unittest
from unittest.mock import patch

from stringmailer.config import CONFIG_ENV_VAR, load_settings, parse_bool, resolve_config_path
from stringmailer.errors import ConfigError
from tests.support import CONFIG_TEMPLATE


class TestLoadSettings(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.log_path = os.path.join(self.tmp.name, "mail.log")
        self.path = os.path.join(self.tmp.name, "config.ini")

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)
        return self.path

    def test_loads_complete_config(self):
        settings = load_settings(self.write(CONFIG_TEMPLATE.format(log_path=self.log_path)))
        self.assertEqual(settings.from_email, "noreply@example.org")
        self.assertEqual(settings.from_name, "String Mailer")
        self.assertTrue(settings.allow_to_override)
        self.assertEqual(settings.default_subject, "Default subject")
        self.assertEqual(settings.default_body, "Default body")
        self.assertEqual(settings.default_to, "default@example.org")
        self.assertEqual(settings.secret_word, "s3cret!")
        self.assertEqual(settings.log_file_path, self.log_path)
        self.assertFalse(settings.debug_mode)
        self.assertFalse(settings.use_json)
        self.assertFalse(settings.verify_override_domain)
        self.assertEqual((settings.smtp_host, settings.smtp_port, settings.smtp_timeout), ("localhost", 25, 30))

    def test_settings_are_immutable(self):
        settings = load_settings(self.write(CONFIG_TEMPLATE.format(log_path=self.log_path)))
        with self.assertRaises(Exception):
            settings.secret_word = "changed"

    def test_transport_section_is_optional_but_parsed(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path) + "\n[Transport]\nHost = mail.internal\nPort = 2525\n"
        settings = load_settings(self.write(text))
        self.assertEqual(settings.smtp_host, "mail.internal")
        self.assertEqual(settings.smtp_port, 2525)

    def test_percent_in_secret_is_literal(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("s3cret!", "100%sure")
        self.assertEqual(load_settings(self.write(text)).secret_word, "100%sure")

    def test_inline_semicolon_comment_is_dropped(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace(
            "SecretWord = s3cret!", "SecretWord = s3cret! ; rotate quarterly")
        self.assertEqual(load_settings(self.write(text)).secret_word, "s3cret!")

    def test_semicolon_inside_value_is_kept(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("s3cret!", "a;b")
        self.assertEqual(load_settings(self.write(text)).secret_word, "a;b")

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_settings(os.path.join(self.tmp.name, "nope.ini"))

    def test_unparsable_file(self):
        with self.assertRaises(ConfigError):
            load_settings(self.write("this is not an ini file\n"))

    def test_missing_section(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("[Output]\nUseJSON = 0\n", "")
        with self.assertRaisesRegex(ConfigError, r"\[Output\]"):
            load_settings(self.write(text))

    def test_missing_key(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("SecretWord = s3cret!\n", "")
        with self.assertRaisesRegex(ConfigError, "SecretWord"):
            load_settings(self.write(text))

    def test_unrecognized_boolean_token(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("UseJSON = 0", "UseJSON = maybe")
        with self.assertRaisesRegex(ConfigError, "Output.UseJSON"):
            load_settings(self.write(text))

    def test_invalid_default_recipient(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path).replace("default@example.org", "nobody")
        with self.assertRaisesRegex(ConfigError, "DefaultMailTo"):
            load_settings(self.write(text))

    def test_bad_port(self):
        text = CONFIG_TEMPLATE.format(log_path=self.log_path) + "\n[Transport]\nPort = twenty-five\n"
        with self.assertRaisesRegex(ConfigError, "Transport.Port"):
            load_settings(self.write(text))


class TestConfigHelpers(unittest.TestCase):
    def test_parse_bool_tokens(self):
        for token in ["1", "true", "Yes", " ON "]:
            self.assertTrue(parse_bool(token, "x"))
        for token in ["0", "false", "No", "off"]:
            self.assertFalse(parse_bool(token, "x"))
        for token in ["", "2", "enabled"]:
            with self.assertRaises(ConfigError):
                parse_bool(token, "x")

    def test_config_path_resolution(self):
        with patch.dict(os.environ, {CONFIG_ENV_VAR: "/etc/stringmailer.ini"}):
            self.assertEqual(resolve_config_path("explicit.ini"), "explicit.ini")
            self.assertEqual(resolve_config_path(), "/etc/stringmailer.ini")
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(resolve_config_path(), "config.ini")


if __name__ == '__main__':
    unittest.main()
