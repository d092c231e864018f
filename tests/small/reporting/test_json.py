"""Tests for the JSON reporter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from devtools_coverage.collectors.results import CoverageEntry
from devtools_coverage.ranges import TextRange
from devtools_coverage.reporting.json_reporter import JsonReporter


if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def entries() -> list[CoverageEntry]:
    return [
        CoverageEntry(url='https://example.com/app.js', ranges=[TextRange(0, 5), TextRange(9, 14)], text='x' * 14),
        CoverageEntry(url='https://example.com/site.css', ranges=[], text='a {}'),
    ]


class TestJsonReporter:
    """Serialising coverage entries."""

    def test_to_json_lists_entries(self, entries):
        data = json.loads(JsonReporter().to_json(entries))

        assert data == {
            'entries': [
                {
                    'url': 'https://example.com/app.js',
                    'ranges': [{'start': 0, 'end': 5}, {'start': 9, 'end': 14}],
                    'text': 'x' * 14,
                },
                {'url': 'https://example.com/site.css', 'ranges': [], 'text': 'a {}'},
            ],
        }

    def test_raw_script_coverage_is_included_when_present(self):
        raw = {'scriptId': '1', 'url': '', 'functions': []}
        entry = CoverageEntry(url='debugger://VM1', ranges=[], text='', raw_script_coverage=raw)

        data = json.loads(JsonReporter().to_json([entry]))

        assert data['entries'][0]['rawScriptCoverage'] == raw

    def test_raw_script_coverage_key_absent_by_default(self, entries):
        data = json.loads(JsonReporter().to_json(entries))

        assert all('rawScriptCoverage' not in entry for entry in data['entries'])

    def test_empty_report(self):
        assert json.loads(JsonReporter().to_json([])) == {'entries': []}

    def test_write_report(self, entries, tmp_path: Path):
        output = tmp_path / 'coverage.json'

        JsonReporter().write_report(entries, output)

        assert json.loads(output.read_text()) == json.loads(JsonReporter().to_json(entries))
