"""Tests for the CCI list parser."""

import unittest

import pytest

from stig_mapper.catalog.parser import derive_title, load_cci_list, parse_cci_list
from stig_mapper.exceptions import FileError, ParseError
from tests.samples import SAMPLE_CCI, cci_item, cci_list


class TestDeriveTitle(unittest.TestCase):
    """Test title derivation from definitions."""

    def test_leading_sentence(self):
        """Test that the title stops before the first period."""
        self.assertEqual(derive_title("First part. Second part."), "First part")

    def test_no_period_truncates(self):
        """Test that a long definition without a period is cut to 100 characters."""
        text = "x" * 150
        self.assertEqual(derive_title(text), "x" * 100)

    def test_short_without_period(self):
        """Test that a short definition is used whole."""
        self.assertEqual(derive_title("short"), "short")

    def test_empty(self):
        """Test that an empty definition gives an empty title."""
        self.assertEqual(derive_title(""), "")


class TestParseSample(unittest.TestCase):
    """Test parsing the namespaced sample list."""

    @classmethod
    def setUpClass(cls):
        cls.mappings = parse_cci_list(SAMPLE_CCI, source="U_CCI_List.xml")
        cls.by_id = {m.id: m for m in cls.mappings}

    def test_items_without_id_dropped(self):
        """Test that items lacking an id are skipped."""
        self.assertEqual([m.id for m in self.mappings], ["CCI-000001", "CCI-000002", "CCI-000003"])

    def test_nist_references_deduplicated_in_order(self):
        """Test that repeated NIST indexes appear once in first-seen order."""
        self.assertEqual(
            self.by_id["CCI-000001"].nist_controls,
            ("AC-1 a", "AC-1 a 1", "AC-1.1 (i and ii)"),
        )

    def test_empty_index_skipped(self):
        """Test that references with an empty index are ignored."""
        self.assertEqual(self.by_id["CCI-000002"].nist_controls, ("AC-2",))

    def test_multiple_controls(self):
        """Test that an item can map to several control families."""
        self.assertEqual(self.by_id["CCI-000003"].nist_controls, ("AC-2", "AU-12"))

    def test_title_and_definition(self):
        """Test title derivation from the definition text."""
        first = self.by_id["CCI-000001"]
        self.assertEqual(first.title, "The organization develops an access control policy")
        self.assertEqual(
            first.definition,
            "The organization develops an access control policy. It is reviewed annually.",
        )
        second = self.by_id["CCI-000002"]
        self.assertEqual(second.title, second.definition)

    def test_item_metadata(self):
        """Test that type, status and publish date are captured."""
        third = self.by_id["CCI-000003"]
        self.assertEqual(third.cci_type, "technical")
        self.assertEqual(third.status, "draft")
        self.assertEqual(third.publish_date, "2009-09-14")


class TestParseEdgeCases:
    """Reference filtering and document-level edge cases."""

    def test_non_nist_references_ignored(self):
        """Test that only NIST SP 800-53 references are collected."""
        doc = (
            '<cci_list><cci_items><cci_item id="CCI-1"><definition>D.</definition><references>'
            '<reference title="ISO 27001" index="A.9" />'
            '<reference title="NIST SP 800-53 Revision 4" index="AC-3" />'
            "</references></cci_item></cci_items></cci_list>"
        )
        [mapping] = parse_cci_list(doc)
        assert mapping.nist_controls == ("AC-3",)

    def test_reference_outside_references_ignored(self):
        """Test that a reference outside <references> is not collected."""
        doc = (
            '<cci_list><cci_items><cci_item id="CCI-1">'
            '<reference title="NIST SP 800-53" index="AC-9" />'
            "</cci_item></cci_items></cci_list>"
        )
        [mapping] = parse_cci_list(doc)
        assert mapping.nist_controls == ()

    def test_item_without_references(self):
        """Test that an item with no references has no controls."""
        [mapping] = parse_cci_list(cci_list([cci_item("CCI-000009", [])]))
        assert mapping.nist_controls == ()
        assert mapping.title == "Definition"

    def test_without_namespace(self):
        """Test that a list without the default namespace parses."""
        mappings = parse_cci_list(cci_list([cci_item("CCI-1", ["AC-1"]), cci_item("CCI-2", ["AC-2"])]))
        assert [m.id for m in mappings] == ["CCI-1", "CCI-2"]

    def test_empty_list(self):
        """Test that an empty list yields no mappings."""
        assert parse_cci_list("<cci_list><cci_items/></cci_list>") == []

    def test_blank_id_dropped(self):
        """Test that a blank id is treated as missing."""
        mappings = parse_cci_list(cci_list([cci_item("", ["AC-1"]), cci_item("CCI-2", ["AC-2"])]))
        assert [m.id for m in mappings] == ["CCI-2"]

    def test_malformed(self):
        """Test that malformed XML raises ParseError with source and offset."""
        with pytest.raises(ParseError) as info:
            parse_cci_list("<cci_list><cci_items><cci_item id='x'></cci_items></cci_list>", source="bad.xml")
        assert info.value.ctx["source"] == "bad.xml"
        assert isinstance(info.value.offset, int)


class TestLoadCciList:
    """File-based loading."""

    def test_load(self, sample_cci_file):
        """Test loading the sample CCI list from disk."""
        mappings = load_cci_list(sample_cci_file)
        assert len(mappings) == 3

    def test_missing(self, temp_dir):
        """Test that a missing file raises FileError."""
        with pytest.raises(FileError):
            load_cci_list(temp_dir / "missing.xml")
