import os
import tempfile
import unittest
from unittest.mock import patch

from pysysctl.core.config import Config


class TestConfig(unittest.TestCase):

    def setUp(self):
        # Keep the developer's own PYSYSCTL_* variables out of the tests.
        env = {k: v for k, v in os.environ.items() if not k.startswith("PYSYSCTL_")}
        patcher = patch.dict(os.environ, env, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write_config(self, content):
        with tempfile.NamedTemporaryFile("w", suffix=".toml", delete=False, encoding="utf-8") as tmp_file:
            tmp_file.write(content)
        self.addCleanup(os.remove, tmp_file.name)
        return tmp_file.name

    def test_defaults(self):
        config = Config(config_path=self._write_config(""))

        self.assertEqual(config.get("output.format"), "json")
        self.assertEqual(config.get("output.indent"), 2)
        self.assertEqual(config.comment_prefixes, ("#", ";"))
        self.assertTrue(config.get("colors"))

    def test_file_values_are_merged(self):
        """Test that a settings file overrides only the keys it names."""
        path = self._write_config('[output]\nformat = "yaml"\n\n[parser]\ncomment_prefixes = ["//"]\n')
        config = Config(config_path=path)

        self.assertEqual(config.get("output.format"), "yaml")
        self.assertEqual(config.get("output.indent"), 2)
        self.assertEqual(config.comment_prefixes, ("//",))

    def test_loading_does_not_mutate_defaults(self):
        path = self._write_config('[output]\nindent = 8\n')
        Config(config_path=path)

        self.assertEqual(Config.DEFAULT_CONFIG["output"]["indent"], 2)

    def test_environment_overrides_file(self):
        path = self._write_config('[output]\nindent = 8\n')
        with patch.dict(os.environ, {
            "PYSYSCTL_OUTPUT_INDENT": "4",
            "PYSYSCTL_COLORS": "off",
            "PYSYSCTL_COMMENT_PREFIXES": "#, //",
            "PYSYSCTL_OUTPUT_FORMAT": "yaml",
        }):
            config = Config(config_path=path)

        self.assertEqual(config.get("output.indent"), 4)
        self.assertFalse(config.get("colors"))
        self.assertEqual(config.comment_prefixes, ("#", "//"))
        self.assertEqual(config.get("output.format"), "yaml")

    def test_invalid_integer_in_environment_is_ignored(self):
        with patch.dict(os.environ, {"PYSYSCTL_OUTPUT_INDENT": "wide"}):
            with self.assertLogs("pysysctl.core.config", level="WARNING"):
                config = Config(config_path=self._write_config(""))

        self.assertEqual(config.get("output.indent"), 2)

    def test_invalid_file_falls_back_to_defaults(self):
        path = self._write_config("this is = = not toml")

        with self.assertLogs("pysysctl.core.config", level="WARNING"):
            config = Config(config_path=path)

        self.assertEqual(config.get("output.format"), "json")

    def test_wrong_types_fall_back_to_defaults(self):
        """Test that settings of the wrong type are replaced by their defaults."""
        path = self._write_config(
            'colors = "yes"\n\n[parser]\ncomment_prefixes = 5\n\n[output]\nindent = "wide"\nformat = "yaml"\n'
        )

        with self.assertLogs("pysysctl.core.config", level="WARNING") as logs:
            config = Config(config_path=path)

        self.assertEqual(config.comment_prefixes, ("#", ";"))
        self.assertEqual(config.get("output.indent"), 2)
        self.assertIs(config.get("colors"), True)
        self.assertEqual(config.get("output.format"), "yaml")
        self.assertEqual(len(logs.records), 3)

    def test_section_replaced_by_scalar(self):
        path = self._write_config("parser = 5\n")

        with self.assertLogs("pysysctl.core.config", level="WARNING"):
            config = Config(config_path=path)

        self.assertEqual(config.comment_prefixes, ("#", ";"))

    def test_prefix_list_must_hold_strings(self):
        path = self._write_config("[parser]\ncomment_prefixes = [\"#\", 1]\n")

        with self.assertLogs("pysysctl.core.config", level="WARNING"):
            config = Config(config_path=path)

        self.assertEqual(config.comment_prefixes, ("#", ";"))

    def test_verbose_from_environment(self):
        with patch.dict(os.environ, {"PYSYSCTL_VERBOSE": "yes"}):
            config = Config(config_path=self._write_config(""))

        self.assertIs(config.get("verbose"), True)

    def test_get_and_set(self):
        config = Config(config_path=self._write_config(""))
        config.set("output.format", "yaml")
        config.set("extra.nested.value", 1)

        self.assertEqual(config.get("output.format"), "yaml")
        self.assertEqual(config.get("extra.nested.value"), 1)
        self.assertIsNone(config.get("does.not.exist"))
        self.assertEqual(config.get("does.not.exist", "fallback"), "fallback")


if __name__ == '__main__':
    unittest.main()
