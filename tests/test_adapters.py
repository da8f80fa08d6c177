import json

import pytest

from timing2toggl.adapters.csv_adapter import parse as parse_csv
from timing2toggl.adapters.json_adapter import parse as parse_json
from timing2toggl.errors import FileReadError, MalformedRowError, MissingFieldError, RecordError
from timing2toggl.normalizer import ErrorPolicy

HEADER = "Start Date,Duration,Task Title,Project\n"


def test_csv_parse_success(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        HEADER + "2023-01-05 10:00:00,1:30:00,Write spec,Infra\n" "2023-01-06 09:00:00,0:20:00,Standup,Team\n",
        encoding="utf-8",
    )
    result = parse_csv(str(path), "a@b.com")
    assert result.skipped is False
    assert result.entries[0].as_row() == ["a@b.com", "Infra", "Write spec", "2023-01-05", "10:00:00", "01:30:00"]
    assert result.entries[1].project == "Team"


def test_csv_headers_case_insensitive_and_extra_columns(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "START DATE,End Date,DURATION,task title,Project\n"
        "2023-01-05 10:00:00,2023-01-05 11:00:00,1:00:00,Plan,Infra\n",
        encoding="utf-8",
    )
    result = parse_csv(str(path), "a@b.com")
    assert result.entries[0].description == "Plan"
    assert result.entries[0].duration == "01:00:00"


def test_csv_semicolon_delimiter_and_bom(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "\ufeffStart Date;Duration;Task Title;Project\n"
        "2023-01-05 10:00:00;1:30:00;Write spec;Infra\n"
        "2023-01-05 12:00:00;0:10:00;Email;Infra\n",
        encoding="utf-8",
    )
    result = parse_csv(str(path), "a@b.com")
    assert [entry.description for entry in result.entries] == ["Write spec", "Email"]


def test_csv_skips_malformed_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        HEADER
        + "2023-01-05 10:00:00,1:30:00,Write spec,Infra\n"
        + "2023-01-05 11:00:00,broken\n"
        + "2023-01-05 12:00:00,1:30,Bad duration,Infra\n"
        + "not a date,1:00:00,Bad date,Infra\n"
        + "2023-01-05 13:00:00,0:05:00,Coffee,Infra\n",
        encoding="utf-8",
    )
    result = parse_csv(str(path), "a@b.com")
    assert result.skipped is True
    assert [entry.description for entry in result.entries] == ["Write spec", "Coffee"]


def test_csv_blank_lines_are_not_skips(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(HEADER + "2023-01-05 10:00:00,1:30:00,Write spec,Infra\n\n", encoding="utf-8")
    result = parse_csv(str(path), "a@b.com")
    assert result.skipped is False
    assert len(result.entries) == 1


def test_csv_header_only_and_empty(tmp_path):
    header_only = tmp_path / "header.csv"
    header_only.write_text(HEADER, encoding="utf-8")
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    for path in (header_only, empty):
        result = parse_csv(str(path), "a@b.com")
        assert result.entries == []
        assert result.skipped is False


def test_csv_abort_policy(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(HEADER + "2023-01-05 10:00:00,1:30:00,Write spec,Infra\n2023-01-05,x\n", encoding="utf-8")
    with pytest.raises(MalformedRowError) as info:
        parse_csv(str(path), "a@b.com", policy=ErrorPolicy.ABORT)
    assert str(info.value).startswith("Row 3: ")


def test_csv_missing_file(tmp_path):
    with pytest.raises(FileReadError):
        parse_csv(str(tmp_path / "missing.csv"), "a@b.com")


def test_json_parse_success(tmp_path):
    path = tmp_path / "export.json"
    payload = [
        {"startDate": "2023-01-05T10:00:00+02:00", "duration": "0:45:10", "activityTitle": "Review", "project": "Infra"},
        {"startDate": "2023-01-05T12:00:00Z", "duration": "1:00:00", "taskActivityTitle": "Deploy", "project": "Ops"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    result = parse_json(str(path), "a@b.com")
    assert result.skipped is False
    first, second = result.entries
    assert (first.start_date, first.start_time, first.duration) == ("2023-01-05", "08:00:00", "00:45:10")
    assert second.description == "Deploy"
    assert second.start_time == "12:00:00"


def test_json_activity_title_preferred(tmp_path):
    path = tmp_path / "export.json"
    payload = [
        {
            "startDate": "2023-01-05T10:00:00Z",
            "duration": "0:10:00",
            "activityTitle": "Primary",
            "taskActivityTitle": "Fallback",
            "project": "Infra",
        }
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    assert parse_json(str(path), "a@b.com").entries[0].description == "Primary"


def test_json_parse_malformed_aborts(tmp_path):
    path = tmp_path / "export.json"
    payload = [
        {"startDate": "2023-01-05T10:00:00Z", "duration": "0:10:00", "activityTitle": "Ok", "project": "Infra"},
        {"startDate": "2023-01-05T11:00:00Z", "duration": "0:10:00", "activityTitle": "No project"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(MissingFieldError) as info:
        parse_json(str(path), "a@b.com")
    assert str(info.value).startswith("Item 2: ")


def test_json_continue_policy(tmp_path):
    path = tmp_path / "export.json"
    payload = [
        "not an object",
        {"startDate": "2023-01-05T11:00:00Z", "duration": "0:10:00", "activityTitle": "Ok", "project": "Infra"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    result = parse_json(str(path), "a@b.com", policy=ErrorPolicy.CONTINUE)
    assert result.skipped is True
    assert len(result.entries) == 1


@pytest.mark.parametrize("content", ["{not json", '{"startDate": "2023-01-05"}'])
def test_json_unreadable(tmp_path, content):
    path = tmp_path / "export.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(FileReadError):
        parse_json(str(path), "a@b.com")


def test_record_errors_are_value_errors(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps([{"startDate": "bad"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path), "a@b.com")
    assert issubclass(RecordError, ValueError)


def test_csv_apostrophes_are_not_quotes(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        HEADER
        + "2023-01-05 10:00:00,1:00:00,'Til lunch,Infra\n"
        + "2023-01-05 11:00:00,1:00:00,Bob's 'big' fix,Infra\n",
        encoding="utf-8",
    )
    result = parse_csv(str(path), "a@b.com")
    assert result.skipped is False
    assert [entry.description for entry in result.entries] == ["'Til lunch", "Bob's 'big' fix"]
