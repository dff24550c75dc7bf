import pytest

from scraper.koeri_report import (
    COLUMN_HEADER,
    KoeriReportParser,
    find_data_lines,
    parse_line,
    parse_report,
)

SAMPLE_LINE = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C"
REVISED_LINE = (
    "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- PLACE NAME (14:00:00) REVIZE01"
)


def test_parse_line_maps_fixed_columns():
    record = parse_line(SAMPLE_LINE)

    assert record.to_dict() == {
        "date": "2024.03.15",
        "time": "14:23:11",
        "latitude": 38.4521,
        "longitude": 27.1234,
        "depth": 7.3,
        "magnitudeMD": None,
        "magnitudeML": 3.2,
        "magnitudeMw": None,
        "location": "SOME PLACE NAME",
        "solutionQuality": "C",
        "id": "2024.03.15_14:23:11_38.4521_27.1234",
        "isFallback": False,
    }


def test_parse_line_drops_revision_timestamp():
    record = parse_line(REVISED_LINE)

    assert record.location == "PLACE NAME"
    assert record.solution_quality == "REVIZE01"
    assert "(14:00:00)" not in record.location


def test_revize_without_timestamp_excludes_only_quality():
    line = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- PLACE NAME REVIZE02"
    record = parse_line(line)

    assert record.location == "PLACE NAME"
    assert record.solution_quality == "REVIZE02"


def test_parenthesis_before_ordinary_quality_stays_in_location():
    line = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- NURDAGI (GAZIANTEP) İlksel"
    record = parse_line(line)

    assert record.location == "NURDAGI (GAZIANTEP)"
    assert record.solution_quality == "İlksel"


def test_parse_line_is_deterministic():
    assert parse_line(SAMPLE_LINE) == parse_line(SAMPLE_LINE)
    assert parse_line(SAMPLE_LINE).id == parse_line("  " + SAMPLE_LINE + "  ").id


def test_id_depends_only_on_date_time_and_coordinates():
    other = "2024.03.15 14:23:11 38.4521 27.1234 12.0 1.1 2.2 2.3 ELSEWHERE ENTIRELY  B"
    moved = "2024.03.15 14:23:11 38.4522 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C"

    assert parse_line(other).id == parse_line(SAMPLE_LINE).id
    assert parse_line(moved).id != parse_line(SAMPLE_LINE).id


def test_all_magnitudes_present():
    line = "2024.03.15 14:23:11 38.4521 27.1234 7.3 3.1 3.2 3.3 SOME PLACE  C"
    record = parse_line(line)

    assert (record.magnitude_md, record.magnitude_ml, record.magnitude_mw) == (3.1, 3.2, 3.3)


def test_all_magnitudes_absent():
    line = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- -.- -.- SOME PLACE  C"
    record = parse_line(line)

    assert record.magnitude_md is None
    assert record.magnitude_ml is None
    assert record.magnitude_mw is None


def test_too_few_tokens_is_rejected():
    assert parse_line("2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- C") is None


@pytest.mark.parametrize(
    "line",
    [
        "Tarih Saat 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE C",
        "15.03.2024 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE C",
        "2024.03.15 14:23 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE C",
        "note 2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- PLACE C",
        "",
        "   ",
    ],
)
def test_lines_without_leading_date_time_are_rejected(line):
    assert parse_line(line) is None


def test_malformed_number_rejects_only_that_line():
    bad = "2024.03.15 14:23:11 38.45x1 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C"
    bad_magnitude = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- ?.? -.- SOME PLACE  C"

    assert parse_line(bad) is None
    assert parse_line(bad_magnitude) is None

    records = parse_report("\n".join([bad, SAMPLE_LINE, bad_magnitude]))
    assert [r.id for r in records] == ["2024.03.15_14:23:11_38.4521_27.1234"]


@pytest.mark.parametrize(
    "line",
    [
        "2024.03.15 14:23:11 nan 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C",
        "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- inf -.- SOME PLACE NAME  C",
        "2024.03.15 14:23:11 38_4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C",
    ],
)
def test_non_decimal_numbers_are_rejected(line):
    assert parse_line(line) is None
    assert parse_report("\n".join([line, SAMPLE_LINE])) == [parse_line(SAMPLE_LINE)]


def test_parse_report_survives_unexpected_line_errors(monkeypatch):
    parser = KoeriReportParser()
    original = parser.parse_line

    def flaky(line):
        if "BOOM" in line:
            raise RuntimeError("unexpected")
        return original(line)

    monkeypatch.setattr(parser, "parse_line", flaky)
    text = "\n".join(
        [SAMPLE_LINE, "2024.03.15 10:00:00 38.1 27.1 5.0 -.- 2.0 -.- BOOM TOWN  C"]
    )

    records = parser.parse_report(text)
    assert len(records) == 1


def test_find_data_lines_without_dates_returns_empty():
    text = "Nothing to see here\n-.- placeholder without a date\n"
    assert find_data_lines(text) == []
    assert find_data_lines("") == []


def test_find_data_lines_single_qualifying_line():
    text = "Header text\n2024.03.15 is a date in prose\n" + SAMPLE_LINE + "\nfooter"
    assert find_data_lines(text) == [SAMPLE_LINE]


def test_find_data_lines_keeps_order(sample_report):
    lines = find_data_lines(sample_report)

    assert len(lines) == 3
    assert lines[0].startswith("2024.03.15 14:23:11")
    assert lines[2].startswith("2024.03.15 12:05:09")


def test_header_anchor_without_rows_returns_empty():
    text = "TURKIYE VE YAKIN CEVRESINDEKI SON DEPREMLER\n" + COLUMN_HEADER + "\n------ ----\n"
    assert find_data_lines(text) == []


def test_parse_report_from_html(sample_report):
    records = parse_report(sample_report)

    assert [r.location for r in records] == [
        "SOME PLACE NAME",
        "NURDAGI (GAZIANTEP)",
        "SINDIRGI (BALIKESIR)",
    ]
    assert records[2].solution_quality == "REVIZE01"
    assert records[2].magnitude_mw == 4.3


def test_html_and_plain_text_parse_the_same(sample_report):
    parser = KoeriReportParser()
    plain = parser.extract_report_text(sample_report)

    assert "<pre>" not in plain
    assert parser.parse_report(plain) == parser.parse_report(sample_report)


def test_rows_in_a_later_pre_block_are_found():
    html = (
        "<html><body><pre>Son guncelleme: banner</pre>\n<pre>\n"
        "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME İlksel\n"
        "</pre></body></html>"
    )

    records = parse_report(html)

    assert len(records) == 1
    assert records[0].location == "SOME PLACE NAME"
    assert records[0].solution_quality == "İlksel"


def test_row_with_inline_markup_stays_one_row():
    html = (
        "<html><body>\n"
        "2024.03.15 <b>14:23:11</b> 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C\n"
        "</body></html>"
    )

    records = parse_report(html)

    assert len(records) == 1
    assert records[0].time == "14:23:11"
    assert records[0].id == "2024.03.15_14:23:11_38.4521_27.1234"


def test_row_sharing_a_line_with_the_pre_tag():
    html = "<pre>" + SAMPLE_LINE + "\n</pre>"

    assert parse_report(html) == [parse_line(SAMPLE_LINE)]


def test_plain_text_is_not_rewritten():
    parser = KoeriReportParser()
    text = "A & B\n" + SAMPLE_LINE
    assert parser.extract_report_text(text) == text


def test_parse_report_handles_empty_input():
    assert parse_report("") == []
    assert parse_report(None) == []
