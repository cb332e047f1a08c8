import pytest

from content_schema import DocumentLoadError
from content_schema.file_io.document_loader import DocumentLoader, document_loader
from content_schema.file_io.source_location import format_source, lookup_source

CONTENT = """\
_type: order
items:
  - quantity: 0
  - productId:
      _ref: product-1
"""


def test_source_map_uses_json_pointers():
    source_map = DocumentLoader.build_source_map(CONTENT)
    assert source_map[""] == {"line": 1, "column": 1}
    assert source_map["/items"] == {"line": 3, "column": 3}
    assert source_map["/items/0/quantity"] == {"line": 3, "column": 15}
    assert source_map["/items/1/productId/_ref"]["line"] == 5


def test_keys_are_escaped():
    source_map = DocumentLoader.build_source_map("a/b:\n  c~d: 1\n")
    assert "/a~1b/c~0d" in source_map


def test_lookup_falls_back_to_nearest_ancestor():
    source_map = DocumentLoader.build_source_map(CONTENT)
    loc = lookup_source(source_map, "/items/0/productId")
    assert loc.pointer == "/items/0/productId"
    assert (loc.line, loc.column) == (3, 5)
    assert lookup_source(source_map, "/totalPrice").line == 1


def test_lookup_without_map():
    loc = lookup_source(None, "/x")
    assert loc.line is None
    assert format_source(loc) == ""


def test_format_source():
    source_map = DocumentLoader.build_source_map(CONTENT)
    assert format_source(lookup_source(source_map, "/items")) == "3:3"


def test_broken_yaml_has_empty_map():
    assert DocumentLoader.build_source_map("a: [") == {}


def test_load(tmp_path):
    path = tmp_path / "doc.yaml"
    path.write_text(CONTENT, encoding="utf-8")
    data = document_loader.load(path)
    assert data["items"][0] == {"quantity": 0}


def test_missing_file(tmp_path):
    with pytest.raises(DocumentLoadError, match="Document file not found"):
        document_loader.load(tmp_path / "missing.yaml")


def test_directory_is_not_a_document(tmp_path):
    with pytest.raises(DocumentLoadError, match="Path is not a file"):
        document_loader.load(tmp_path)


def test_recursive_alias_in_source_map():
    source_map = DocumentLoader.build_source_map("a: &x\n  b: 1\n  c: *x\n")
    assert source_map["/a/b"] == {"line": 2, "column": 6}
    assert source_map["/a/c"] == source_map["/a"]
    assert "/a/c/b" not in source_map
