"""Unit tests for size-based exclusion rules."""

import os

import pytest
from humanfriendly import InvalidSize

from dirwalk.exclusion_rules.size_rules import SizeExclusionRules, parse_file_size
from dirwalk.walker.config import WalkConfig
from dirwalk.walker.entry import WalkEntry
from dirwalk.walker.walker import walk


def entry_for(path, **flags):
    path = str(path)
    return WalkEntry(os.path.basename(path), path, path, os.path.basename(path), os.path.basename(path), **flags)


class TestParseFileSize:
    """Test the parse_file_size utility function."""

    def test_parse_bytes_only(self):
        assert parse_file_size("1024") == 1024
        assert parse_file_size("0") == 0

    def test_parse_human_readable_decimal(self):
        assert parse_file_size("1KB") == 1000
        assert parse_file_size("1MB") == 1000000
        assert parse_file_size("2.5MB") == 2500000

    def test_parse_human_readable_binary(self):
        assert parse_file_size("1KiB") == 1024
        assert parse_file_size("1MiB") == 1048576

    def test_parse_with_spaces(self):
        assert parse_file_size("1 GB") == 1000000000

    @pytest.mark.parametrize("value", ["invalid", "", "1XB"])
    def test_parse_invalid_format(self, value):
        with pytest.raises(ValueError, match="Invalid size format") as excinfo:
            parse_file_size(value)
        assert isinstance(excinfo.value.__cause__, InvalidSize)


class TestSizeExclusionRules:
    """Test the SizeExclusionRules class."""

    def test_init_with_string(self):
        assert SizeExclusionRules("1MB").max_size_bytes == 1000000

    def test_init_with_int(self):
        assert SizeExclusionRules(1048576).max_size_bytes == 1048576

    def test_init_with_negative_int(self):
        with pytest.raises(ValueError, match="Size cannot be negative"):
            SizeExclusionRules(-1)

    @pytest.mark.parametrize("value", [1.5, None, True])
    def test_init_with_invalid_type(self, value):
        with pytest.raises(ValueError, match="max_size must be string or int"):
            SizeExclusionRules(value)

    def test_exclude_file_within_limit(self, tmp_path):
        path = tmp_path / "small.txt"
        path.write_bytes(b"small content")
        assert not SizeExclusionRules(1000).exclude(entry_for(path, is_file=True))

    def test_exclude_file_exceeds_limit(self, tmp_path):
        path = tmp_path / "large.txt"
        path.write_bytes(b"this content is longer than 10 bytes")
        assert SizeExclusionRules(10).exclude(entry_for(path, is_file=True))

    def test_exclude_file_at_limit(self, tmp_path):
        path = tmp_path / "exact.txt"
        path.write_bytes(b"x" * 10)
        assert not SizeExclusionRules(10).exclude(entry_for(path, is_file=True))

    def test_exclude_directory(self, tmp_path):
        assert not SizeExclusionRules(1).exclude(entry_for(tmp_path, is_directory=True))

    def test_exclude_missing_file(self, tmp_path):
        assert not SizeExclusionRules(1).exclude(entry_for(tmp_path / "missing.txt", is_file=True))

    def test_exclude_symlink_to_large_file(self, symlink_tree):
        rules = SizeExclusionRules(5)
        assert rules.exclude(entry_for(symlink_tree / "link_file", is_symlink_file=True))
        assert not rules.exclude(entry_for(symlink_tree / "dangling", is_symlink_file=True))

    def test_has_rules(self):
        assert SizeExclusionRules(1000).has_rules()
        assert not SizeExclusionRules(0).has_rules()

    def test_zero_limit_keeps_every_file(self, tmp_path):
        path = tmp_path / "large.txt"
        path.write_bytes(b"x" * 100)
        assert not SizeExclusionRules(0).exclude(entry_for(path, is_file=True))
        assert not SizeExclusionRules("0").exclude(entry_for(path, is_file=True))

    def test_zero_limit_walk_yields_everything(self, sample_tree):
        config = WalkConfig(exclusion_rules=SizeExclusionRules(0))
        paths = sorted(entry.path_relative.replace(os.sep, "/") for entry in walk(sample_tree, config))
        assert paths == ["a.txt", "b", "b/c.txt"]

    def test_load_rules_not_supported(self, tmp_path):
        rules_file = tmp_path / "sizes"
        rules_file.write_text("500MB")
        with pytest.raises(NotImplementedError, match="SizeExclusionRules doesn't support loading rules from files"):
            SizeExclusionRules("1GB").load_rules(str(rules_file))

    def test_add_rule_not_supported(self):
        with pytest.raises(NotImplementedError, match="SizeExclusionRules doesn't support adding individual rules"):
            SizeExclusionRules("1GB").add_rule("500MB")
