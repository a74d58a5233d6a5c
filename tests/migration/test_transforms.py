"""Tests for migration value transforms."""

import pytest

from lens_migrate.exceptions import RuleTransformError
from lens_migrate.migration import transforms


class TestLineOrAnnotation:
    """Test the wholeLine -> over conversion."""

    def test_true_is_line(self) -> None:
        assert transforms.line_or_annotation(True, "annotation") == "line"

    def test_false_is_annotation(self) -> None:
        assert transforms.line_or_annotation(False, "line") == "annotation"

    def test_non_boolean_rejected(self) -> None:
        with pytest.raises(RuleTransformError):
            transforms.line_or_annotation("yes", None)


class TestBooleanToEnum:
    """Test legacy flag to enum conversion with read-through."""

    def test_true_selects_primary(self) -> None:
        """Test True maps to the primary enum value."""
        transform = transforms.boolean_to_enum("debug")
        assert transform(True, "errors") == "debug"

    def test_false_keeps_current_value(self) -> None:
        """Test False defers to whatever the destination holds."""
        transform = transforms.boolean_to_enum("debug")
        assert transform(False, "verbose") == "verbose"
        assert transform(False, "silent") == "silent"

    def test_non_boolean_rejected(self) -> None:
        transform = transforms.boolean_to_enum("debug")
        with pytest.raises(RuleTransformError):
            transform(1, "silent")


class TestRenameListMember:
    """Test enum member rename inside a list."""

    def test_replaces_in_place_position(self) -> None:
        """Test the old member is replaced at the same index."""
        transform = transforms.rename_list_member("overviewRuler", "overview")
        assert transform(["gutter", "overviewRuler", "line"], None) == [
            "gutter",
            "overview",
            "line",
        ]

    def test_absent_member_unchanged(self) -> None:
        """Test a list without the old member is returned unchanged."""
        transform = transforms.rename_list_member("overviewRuler", "overview")
        assert transform(["gutter", "line"], None) == ["gutter", "line"]

    def test_input_not_mutated(self) -> None:
        """Test the source list is copied, not modified."""
        transform = transforms.rename_list_member("overviewRuler", "overview")
        source = ["overviewRuler"]
        transform(source, None)
        assert source == ["overviewRuler"]

    def test_single_occurrence(self) -> None:
        """Test only the first match is replaced."""
        transform = transforms.rename_list_member("a", "b")
        assert transform(["a", "a"], None) == ["b", "a"]

    def test_non_list_rejected(self) -> None:
        transform = transforms.rename_list_member("a", "b")
        with pytest.raises(RuleTransformError):
            transform("a", None)


class TestReplaceValue:
    """Test retired value replacement."""

    def test_replaces_match(self) -> None:
        transform = transforms.replace_value("standard", "alternate")
        assert transform("standard", "chorded") == "alternate"

    def test_other_values_kept(self) -> None:
        transform = transforms.replace_value("standard", "alternate")
        assert transform("chorded", "chorded") == "chorded"
        assert transform("none", "chorded") == "none"


class TestPerLanguageScopes:
    """Test the per-language code lens reshape."""

    def test_reshape(self) -> None:
        """Test keys are renamed for every entry."""
        value = [
            {
                "language": "csharp",
                "locations": ["document", "containers"],
                "customSymbols": ["Method"],
            },
            {"language": "json", "locations": []},
        ]
        assert transforms.per_language_scopes(value, []) == [
            {
                "language": "csharp",
                "scopes": ["document", "containers"],
                "symbolScopes": ["Method"],
            },
            {"language": "json", "scopes": []},
        ]

    def test_missing_language_stays_missing(self) -> None:
        """Test absent keys are not invented."""
        assert transforms.per_language_scopes(
            [{"locations": ["document"]}], []
        ) == [{"scopes": ["document"]}]

    @pytest.mark.parametrize("value", ["document", [1], None])
    def test_invalid_shapes(self, value) -> None:
        """Test non-list input or non-object entries are rejected."""
        with pytest.raises(RuleTransformError):
            transforms.per_language_scopes(value, [])
