"""Test YAML document sources."""

import io
from unittest.mock import patch

import pytest
import yaml

from yamlmap.core.errors import ResourceNotFoundError, ResourceReadError, YamlMapConfigurationError
from yamlmap.source import MappingSource, ResolutionMethod, YamlDocumentSource, YamlText


class TestResolutionMethod:
    def test_parse_member(self):
        assert ResolutionMethod.parse(ResolutionMethod.FIRST_FOUND) is ResolutionMethod.FIRST_FOUND

    def test_parse_value_any_case(self):
        assert ResolutionMethod.parse("Override_And_Ignore") is ResolutionMethod.OVERRIDE_AND_IGNORE

    def test_parse_dashes(self):
        assert ResolutionMethod.parse("first-found") is ResolutionMethod.FIRST_FOUND

    def test_parse_unknown_raises(self):
        # Act & Assert
        with pytest.raises(YamlMapConfigurationError) as exc_info:
            ResolutionMethod.parse("merge_everything")
        assert exc_info.value.code == "invalid_resolution_method"
        assert "override" in exc_info.value.details["choices"]


class TestYamlDocumentSource:
    """Test reading YAML resources into documents."""

    def test_reads_files_in_order(self, tmp_path):
        # Arrange
        first = tmp_path / "a.yaml"
        first.write_text("foo:\n  bar:\n    one: two\nthree: four\n")
        second = tmp_path / "b.yaml"
        second.write_text("foo:\n  bar:\n    one: 2\nfive: six\n")
        source = YamlDocumentSource([first, str(second)])

        # Act
        docs = list(source.documents())

        # Assert
        assert docs == [
            {"foo": {"bar": {"one": "two"}}, "three": "four"},
            {"foo": {"bar": {"one": 2}}, "five": "six"},
        ]

    def test_multi_document_file(self, tmp_path):
        # Arrange
        path = tmp_path / "multi.yaml"
        path.write_text("a: 1\n---\na: 2\nb: 3\n")

        # Act
        docs = list(YamlDocumentSource([path]).documents())

        # Assert
        assert docs == [{"a": 1}, {"a": 2, "b": 3}]

    def test_inline_text_and_stream(self):
        # Arrange
        source = YamlDocumentSource([YamlText("a: 1"), io.StringIO("b: [1, 2]")])

        # Act
        docs = list(source.documents())

        # Assert
        assert docs == [{"a": 1}, {"b": [1, 2]}]

    def test_json_is_accepted(self):
        docs = list(YamlDocumentSource([YamlText('{"a": {"b": true}}')]).documents())
        assert docs == [{"a": {"b": True}}]

    def test_empty_documents_skipped(self, tmp_path):
        # Arrange
        path = tmp_path / "empty.yaml"
        path.write_text("")

        # Act
        docs = list(YamlDocumentSource([path, YamlText("---\n---\nx: 1\n")]).documents())

        # Assert
        assert docs == [{"x": 1}]

    def test_non_mapping_document_skipped_with_warning(self):
        # Arrange
        source = YamlDocumentSource([YamlText("- a\n- b\n---\nk: v\n", name="list.yaml")])

        # Act
        with patch("yamlmap.source.logger") as mock_logger:
            docs = list(source.documents())

        # Assert
        assert docs == [{"k": "v"}]
        mock_logger.warning.assert_called_once()
        assert "list.yaml" in mock_logger.warning.call_args[0]

    def test_missing_file_raises_with_override(self, tmp_path):
        # Arrange
        missing = tmp_path / "missing.yaml"
        source = YamlDocumentSource([missing])

        # Act & Assert
        with pytest.raises(ResourceNotFoundError) as exc_info:
            list(source.documents())
        assert exc_info.value.code == "resource_not_found"
        assert exc_info.value.details["path"] == str(missing)

    def test_missing_file_ignored_with_override_and_ignore(self, tmp_path):
        # Arrange
        present = tmp_path / "present.yaml"
        present.write_text("a: 1\n")
        source = YamlDocumentSource(
            [tmp_path / "missing.yaml", present],
            resolution_method="override_and_ignore",
        )

        # Act
        with patch("yamlmap.source.logger") as mock_logger:
            docs = list(source.documents())

        # Assert
        assert docs == [{"a": 1}]
        mock_logger.warning.assert_called_once()

    def test_first_found_uses_only_first_existing(self, tmp_path):
        # Arrange
        second = tmp_path / "second.yaml"
        second.write_text("a: 2\n---\nb: 2\n")
        third = tmp_path / "third.yaml"
        third.write_text("a: 3\n")
        source = YamlDocumentSource(
            [tmp_path / "first.yaml", second, third],
            resolution_method=ResolutionMethod.FIRST_FOUND,
        )

        # Act
        docs = list(source.documents())

        # Assert
        assert docs == [{"a": 2}, {"b": 2}]

    def test_first_found_skips_resource_without_documents(self, tmp_path):
        # Arrange
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        populated = tmp_path / "b.yaml"
        populated.write_text("a: 1\n")
        later = tmp_path / "c.yaml"
        later.write_text("a: 2\n")
        source = YamlDocumentSource([empty, populated, later], resolution_method="first_found")

        # Act
        docs = list(source.documents())

        # Assert
        assert docs == [{"a": 1}]

    def test_first_found_skips_resource_with_only_non_mappings(self):
        # Arrange
        source = YamlDocumentSource(
            [YamlText("- a\n- b\n"), YamlText("k: v\n"), YamlText("k: w\n")],
            resolution_method=ResolutionMethod.FIRST_FOUND,
        )

        # Act
        docs = list(source.documents())

        # Assert
        assert docs == [{"k": "v"}]

    def test_first_found_none_exist(self, tmp_path):
        source = YamlDocumentSource([tmp_path / "x.yaml"], resolution_method="first_found")
        assert list(source.documents()) == []

    def test_directory_counts_as_missing(self, tmp_path):
        with pytest.raises(ResourceNotFoundError):
            list(YamlDocumentSource([tmp_path]).documents())

    def test_unreadable_file_raises_read_error(self, tmp_path):
        # Arrange
        path = tmp_path / "locked.yaml"
        path.write_text("a: 1\n")
        denied = PermissionError(13, "Permission denied")

        # Act
        with patch("builtins.open", side_effect=denied):
            with pytest.raises(ResourceReadError) as exc_info:
                list(YamlDocumentSource([path]).documents())

        # Assert
        assert exc_info.value.code == "resource_unreadable"
        assert exc_info.value.details["path"] == str(path)
        assert exc_info.value.original_error is denied
        assert exc_info.value.__cause__ is denied

    def test_invalid_yaml_raises_yaml_error(self, tmp_path):
        # Arrange
        path = tmp_path / "bad.yaml"
        path.write_text("not: a: valid: yaml:")

        # Act & Assert
        with patch("yamlmap.source.logger") as mock_logger:
            with pytest.raises(yaml.YAMLError):
                list(YamlDocumentSource([path]).documents())
        mock_logger.error.assert_called_once()

    def test_no_resources(self):
        assert list(YamlDocumentSource([]).documents()) == []

    def test_resources_property_is_copy(self):
        source = YamlDocumentSource(["a.yaml"])
        source.resources.append("b.yaml")
        assert source.resources == ["a.yaml"]

    def test_reads_again_on_each_call(self, tmp_path):
        # Arrange
        path = tmp_path / "c.yaml"
        path.write_text("v: 1\n")
        source = YamlDocumentSource([path])
        first = list(source.documents())

        # Act
        path.write_text("v: 2\n")
        second = list(source.documents())

        # Assert
        assert first == [{"v": 1}]
        assert second == [{"v": 2}]


class TestMappingSource:
    def test_yields_documents_in_order(self):
        docs = list(MappingSource({"a": 1}, {"b": 2}).documents())
        assert docs == [{"a": 1}, {"b": 2}]

    def test_empty(self):
        assert list(MappingSource().documents()) == []
