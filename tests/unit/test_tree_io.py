"""Unit tests for tree descriptor loading."""

import json

import pytest

from enterprise_groovy.io import (
    TreeFormatError,
    load_units,
    parse_annotation,
    parse_class,
    parse_units,
)
from enterprise_groovy.model import (
    COMPILE_DYNAMIC,
    COMPILE_STATIC,
    EXTENSIONS_MEMBER,
    MODE_MEMBER,
    ArgumentKind,
)

from tests.fixtures import FOO_DESCRIPTOR


class TestParseAnnotation:
    """Tests for parse_annotation."""

    def test_short_name(self):
        assert parse_annotation("CompileDynamic").name == COMPILE_DYNAMIC

    def test_full_name_kept(self):
        assert parse_annotation("groovy.transform.ToString").name == "groovy.transform.ToString"

    def test_members(self):
        annotation = parse_annotation({
            "name": "CompileStatic",
            "members": {"extensions": ["A", "C"], "value": "TypeCheckingMode.SKIP"},
        })
        assert annotation.name == COMPILE_STATIC
        assert annotation.member(EXTENSIONS_MEMBER).kind is ArgumentKind.LIST
        assert annotation.member(EXTENSIONS_MEMBER).items == ("A", "C")
        assert annotation.member(MODE_MEMBER).value == "TypeCheckingMode.SKIP"

    def test_null_member_is_absent(self):
        annotation = parse_annotation({"name": "CompileStatic", "members": {"extensions": None}})
        assert annotation.member(EXTENSIONS_MEMBER).kind is ArgumentKind.ABSENT

    def test_missing_name(self):
        with pytest.raises(TreeFormatError, match="missing 'name'"):
            parse_annotation({"members": {}})


class TestParseClass:
    """Tests for parse_class."""

    def test_full_class(self):
        node = parse_class({
            "name": "com.acme.Foo",
            "annotations": ["CompileDynamic"],
            "fields": [{"name": "bar", "dynamically_typed": True}, {"name": "baz"}],
            "methods": [
                {
                    "name": "run",
                    "dynamic_return_type": True,
                    "annotations": [{"name": "CompileStatic", "members": {"value": "SKIP"}}],
                    "parameters": [{"name": "x", "dynamically_typed": True}, {"name": "y"}],
                }
            ],
        })
        assert [a.name for a in node.annotations] == [COMPILE_DYNAMIC]
        assert [(f.name, f.dynamically_typed) for f in node.fields] == [
            ("bar", True),
            ("baz", False),
        ]
        method = node.methods[0]
        assert method.dynamic_return_type is True
        assert method.annotations[0].name == COMPILE_STATIC
        assert [p.dynamically_typed for p in method.parameters] == [True, False]
        assert node.package_name == "com.acme"

    @pytest.mark.parametrize("fields, methods", [
        ([{"name": "x", "dynamically_typed": "false"}], []),
        ([], [{"name": "run", "dynamic_return_type": "no"}]),
        ([], [{"name": "run", "parameters": [{"name": "p", "dynamically_typed": 1}]}]),
    ])
    def test_non_boolean_flags_rejected(self, fields, methods):
        """Test that quoted or numeric typing flags are not read as true."""
        with pytest.raises(TreeFormatError, match="expected true or false"):
            parse_class({"name": "com.acme.Foo", "fields": fields, "methods": methods})

    def test_null_flag_is_false(self):
        node = parse_class({
            "name": "com.acme.Foo",
            "fields": [{"name": "x", "dynamically_typed": None}],
        })
        assert node.fields[0].dynamically_typed is False

    def test_explicit_package(self):
        node = parse_class({"name": "Foo", "package": "com.acme"})
        assert node.package_name == "com.acme"

    def test_fields_not_a_list(self):
        with pytest.raises(TreeFormatError, match="fields"):
            parse_class({"name": "com.acme.Foo", "fields": {"bar": True}})

    def test_error_names_location(self):
        with pytest.raises(TreeFormatError, match=r"com\.acme\.Foo\.methods\[0\]\.parameters\[1\]"):
            parse_class({
                "name": "com.acme.Foo",
                "methods": [{"name": "run", "parameters": [{"name": "x"}, {}]}],
            })


class TestParseUnits:
    """Tests for parse_units document shapes."""

    def test_units_key(self):
        units = parse_units(FOO_DESCRIPTOR)
        assert len(units) == 1
        assert units[0].name == "Foo.groovy"
        assert units[0].has_target_directory

    def test_list_document(self):
        units = parse_units([{"name": "a.groovy"}, {"name": "b.groovy"}])
        assert [u.name for u in units] == ["a.groovy", "b.groovy"]

    def test_single_unit(self):
        units = parse_units({"name": "script.groovy", "classes": [{"name": "Script1"}]})
        assert len(units) == 1
        assert units[0].has_target_directory is False
        assert units[0].classes[0].package_name == ""

    def test_scalar_document(self):
        with pytest.raises(TreeFormatError):
            parse_units("not a tree")


class TestLoadUnits:
    """Tests for load_units."""

    def test_yaml(self, foo_tree_file):
        units = load_units(foo_tree_file)
        foo = units[0].classes[0]
        assert foo.name == "com.acme.Foo"
        assert foo.fields[0].dynamically_typed is True
        assert foo.methods[0].parameters[0].name == "x"

    def test_json(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps(FOO_DESCRIPTOR))
        units = load_units(path)
        assert units[0].classes[0].name == "com.acme.Foo"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_units(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text("units: [unclosed")
        with pytest.raises(TreeFormatError, match="Can't parse"):
            load_units(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text("{")
        with pytest.raises(TreeFormatError):
            load_units(path)

    def test_quoted_false_in_yaml(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text(
            "name: Foo.groovy\n"
            "classes:\n"
            "  - name: com.acme.Foo\n"
            "    fields:\n"
            "      - {name: x, dynamically_typed: 'false'}\n"
        )
        with pytest.raises(TreeFormatError, match=r"fields\[0\]\.dynamically_typed"):
            load_units(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_bytes(b"name: Caf\xe9.groovy\n")
        with pytest.raises(TreeFormatError, match="Can't parse"):
            load_units(path)
