import json
import os
import tempfile
import unittest

from pysysctl.core.errors import MalformedSchemaError, SchemaLoadError, UnknownTypeError
from pysysctl.core.schema import FieldType, Schema, SchemaField, load_schema


class TestLoadSchema(unittest.TestCase):

    def setUp(self):
        self.source = {
            "schema": {
                "endpoint": {"type": "string", "required": True, "description": "Service URL"},
                "debug": {"type": "bool"},
                "net.core.somaxconn": {"type": "int", "required": False},
                "vm.ratio": {"type": "float"},
            }
        }

    def test_fields_in_declaration_order(self):
        schema = load_schema(self.source)

        self.assertEqual(list(schema.fields), ["endpoint", "debug", "net.core.somaxconn", "vm.ratio"])
        self.assertEqual(
            schema.get("endpoint"),
            SchemaField("endpoint", FieldType.STRING, required=True, description="Service URL"),
        )

    def test_defaults(self):
        field = load_schema(self.source).get("debug")

        self.assertEqual(field.type, FieldType.BOOL)
        self.assertFalse(field.required)
        self.assertIsNone(field.description)

    def test_type_tokens_are_case_insensitive(self):
        schema = load_schema({"schema": {"a": {"type": "STRING"}, "b": {"type": "Int"}, "c": {"type": "Float"}}})

        self.assertEqual([f.type for f in schema], [FieldType.STRING, FieldType.INT, FieldType.FLOAT])

    def test_unknown_type_token(self):
        """Test that a misspelled type token is rejected with its field name."""
        with self.assertRaises(UnknownTypeError) as ctx:
            load_schema({"schema": {"endpoint": {"type": "stringg"}}})

        self.assertIsInstance(ctx.exception, SchemaLoadError)
        self.assertEqual(ctx.exception.field, "endpoint")
        self.assertEqual(ctx.exception.token, "stringg")

    def test_required_fields(self):
        schema = load_schema(self.source)

        self.assertEqual([f.name for f in schema.required_fields()], ["endpoint"])

    def test_unknown_entry_keys_are_ignored(self):
        schema = load_schema({"schema": {"a": {"type": "int", "default": 5}}})

        self.assertEqual(schema.get("a").type, FieldType.INT)

    def test_empty_schema(self):
        self.assertEqual(len(load_schema({"schema": {}})), 0)

    def test_schema_is_read_only(self):
        schema = load_schema(self.source)

        with self.assertRaises(TypeError):
            schema.fields["new"] = SchemaField("new", FieldType.STRING)

    def test_duplicate_field_names(self):
        with self.assertRaises(MalformedSchemaError):
            Schema([SchemaField("a", FieldType.INT), SchemaField("a", FieldType.BOOL)])


class TestMalformedSchema(unittest.TestCase):

    def assertMalformed(self, source, fragment):
        with self.assertRaises(MalformedSchemaError) as ctx:
            load_schema(source)
        self.assertIn(fragment, ctx.exception.detail)

    def test_document_not_a_mapping(self):
        self.assertMalformed(["schema"], "must be a mapping")

    def test_missing_schema_key(self):
        self.assertMalformed({"fields": {}}, "missing top-level 'schema'")

    def test_schema_not_a_mapping(self):
        self.assertMalformed({"schema": ["a", "b"]}, "'schema' must be a mapping")

    def test_entry_not_a_mapping(self):
        self.assertMalformed({"schema": {"a": "int"}}, "field 'a' must be a mapping")

    def test_entry_without_type(self):
        self.assertMalformed({"schema": {"a": {"required": True}}}, "has no 'type'")

    def test_non_string_type(self):
        self.assertMalformed({"schema": {"a": {"type": 5}}}, "non-string 'type'")

    def test_non_boolean_required(self):
        self.assertMalformed({"schema": {"a": {"type": "int", "required": "yes"}}}, "non-boolean 'required'")

    def test_non_string_description(self):
        self.assertMalformed({"schema": {"a": {"type": "int", "description": 3}}}, "non-string 'description'")

    def test_non_string_field_name(self):
        self.assertMalformed({"schema": {1: {"type": "int"}}}, "field names")


class TestSchemaDocuments(unittest.TestCase):

    def _write(self, suffix, content):
        with tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False, encoding="utf-8") as tmp_file:
            tmp_file.write(content)
        self.addCleanup(os.remove, tmp_file.name)
        return tmp_file.name

    def test_from_text_yaml(self):
        schema = Schema.from_text(
            "schema:\n"
            "  endpoint:\n"
            "    type: string\n"
            "    required: true\n"
            "  debug:\n"
            "    type: bool\n"
        )

        self.assertEqual(list(schema.fields), ["endpoint", "debug"])
        self.assertTrue(schema.get("endpoint").required)

    def test_invalid_yaml_is_malformed(self):
        with self.assertRaises(MalformedSchemaError):
            Schema.from_text("schema: [unclosed")

    def test_empty_yaml_is_malformed(self):
        with self.assertRaises(MalformedSchemaError):
            Schema.from_text("")

    def test_from_yaml_file(self):
        path = self._write(".yaml", "schema:\n  vm.swappiness:\n    type: int\n")

        self.assertEqual(Schema.from_file(path).get("vm.swappiness").type, FieldType.INT)

    def test_from_json_file(self):
        path = self._write(".json", json.dumps({"schema": {"ratio": {"type": "float", "required": True}}}))

        self.assertTrue(Schema.from_file(path).get("ratio").required)

    def test_from_toml_file(self):
        path = self._write(".toml", '[schema."net.ipv4.ip_forward"]\ntype = "bool"\nrequired = true\n')

        field = Schema.from_file(path).get("net.ipv4.ip_forward")
        self.assertEqual(field.type, FieldType.BOOL)
        self.assertTrue(field.required)

    def test_invalid_json_file(self):
        path = self._write(".json", "{not json")

        with self.assertRaises(MalformedSchemaError):
            Schema.from_file(path)

    def test_invalid_utf8_file_is_malformed(self):
        with tempfile.NamedTemporaryFile("wb", suffix=".yaml", delete=False) as tmp_file:
            tmp_file.write(b"schema:\n  a:\n    type: \xff\n")
        self.addCleanup(os.remove, tmp_file.name)

        with self.assertRaises(MalformedSchemaError) as ctx:
            Schema.from_file(tmp_file.name)

        self.assertIn("not valid UTF-8", ctx.exception.detail)

    def test_yaml_file_with_byte_order_mark(self):
        path = self._write(".yaml", "\ufeffschema:\n  a:\n    type: int\n")

        self.assertEqual(list(Schema.from_file(path).fields), ["a"])

    def test_missing_file(self):
        with self.assertRaises(OSError):
            Schema.from_file("/nonexistent/schema.yaml")


if __name__ == '__main__':
    unittest.main()
