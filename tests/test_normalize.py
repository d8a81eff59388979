"""Tests for quota_transformer.normalize: input text pre-processing."""

from quota_transformer.normalize import (
    is_banner_line,
    normalize_characters,
    prepare_input,
    strip_banner,
    strip_title_prefixes,
)


# ---------------------------------------------------------------------------
# Character normalization
# ---------------------------------------------------------------------------


class TestCharacters:
    def test_nbsp_to_space(self):
        assert normalize_characters("West\u00a0US") == "West US"

    def test_smart_quotes_kept(self):
        assert normalize_characters("\u201cSub1\u201d \u2018x\u2019") == "\u201cSub1\u201d \u2018x\u2019"

    def test_dashes_kept(self):
        assert normalize_characters("\u2013") == "\u2013"
        assert normalize_characters("a\u2014b") == "a\u2014b"

    def test_zero_width_removed(self):
        assert normalize_characters("\ufeffID\u200b") == "ID"

    def test_tabs_preserved(self):
        assert normalize_characters("ID\t\tRegion") == "ID\t\tRegion"

    def test_crlf_unified(self):
        assert normalize_characters("a\r\nb\rc") == "a\nb\nc"

    def test_idempotent(self):
        dirty = "\ufeff\u201cID\u201d\u00a0\t Region\r\n"
        once = normalize_characters(dirty)
        assert normalize_characters(once) == once


# ---------------------------------------------------------------------------
# Banner
# ---------------------------------------------------------------------------


class TestBanner:
    def test_signature_detected(self):
        assert is_banner_line("Project: Quota  Server: ado.example  Query: Shared/Open")

    def test_case_insensitive(self):
        assert is_banner_line("PROJECT:x SERVER:y QUERY:z")

    def test_partial_signature_not_banner(self):
        assert not is_banner_line("Project: Quota  Query: Open")

    def test_header_row_not_banner(self):
        assert not is_banner_line("ID\tSubscription ID\tRegion")

    def test_strip_first_line_only(self):
        text = "Project: P Server: S Query: Q\nID\tRegion\nProject: P Server: S Query: Q"
        assert strip_banner(text) == "ID\tRegion\nProject: P Server: S Query: Q"

    def test_no_banner_unchanged(self):
        assert strip_banner("ID\tRegion\nQ1\tEast US") == "ID\tRegion\nQ1\tEast US"


# ---------------------------------------------------------------------------
# Title prefix
# ---------------------------------------------------------------------------


class TestTitlePrefix:
    def test_prefix_removed(self):
        assert strip_title_prefixes("Title: ID\tRegion") == "ID\tRegion"

    def test_case_insensitive_every_line(self):
        assert strip_title_prefixes("title:a\nTITLE:  b") == "a\nb"

    def test_mid_line_kept(self):
        assert strip_title_prefixes("ID Title: x") == "ID Title: x"


# ---------------------------------------------------------------------------
# prepare_input
# ---------------------------------------------------------------------------


class TestPrepareInput:
    def test_empty(self):
        assert prepare_input("") == ""

    def test_full(self):
        text = "\ufeffProject: P Server: S Query: Q\r\nTitle: ID\tRegion\r\nQ1\tEast\u00a0US"
        assert prepare_input(text) == "ID\tRegion\nQ1\tEast US"

    def test_banner_kept_when_disabled(self):
        text = "Project: P Server: S Query: Q\nID"
        assert prepare_input(text, strip_export_banner=False) == text
