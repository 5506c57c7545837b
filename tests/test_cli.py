"""
Tests for the command-line interface.
"""
import json

import requests
import responses

from check_pages.cli import EXIT_CONFIG, EXIT_ISSUES, EXIT_OK, build_parser, collect_options, main

PAGE = "http://a.example/x"


@responses.activate
def test_success(capsys):
    responses.add(responses.GET, PAGE, body="<html></html>", status=200)

    assert main([PAGE, "--no-color"]) == EXIT_OK

    err = capsys.readouterr().err
    assert f"✓ Page: {PAGE}" in err
    assert "All checks passed" in err


@responses.activate
def test_issues_fail_the_run(capsys):
    responses.add(responses.GET, PAGE, body="<html></html>", status=200)
    responses.add(responses.GET, "http://a.example/down", body=requests.exceptions.ConnectionError("refused"))

    assert main([PAGE, "http://a.example/down", "--no-color"]) == EXIT_ISSUES

    err = capsys.readouterr().err
    assert "✗ Page error: ConnectionError" in err
    assert "1 issue, see above" in err


@responses.activate
def test_missing_pages_is_a_configuration_error(capsys):
    assert main(["--check-links"]) == EXIT_CONFIG

    assert "pageUrls option is not present" in capsys.readouterr().err
    assert len(responses.calls) == 0


@responses.activate
def test_invalid_max_response_time_makes_no_requests(capsys):
    assert main([PAGE, "--max-response-time", "0"]) == EXIT_CONFIG

    assert "maxResponseTime option is invalid" in capsys.readouterr().err
    assert len(responses.calls) == 0


@responses.activate
def test_config_file(tmp_path, capsys):
    responses.add(responses.GET, PAGE, body='<a href="/y">y</a>', status=200)
    responses.add(responses.HEAD, "http://a.example/y", status=200)
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"options": {"pageUrls": [PAGE], "checkLinks": True}}))

    assert main(["--config", str(path), "--no-color"]) == EXIT_OK

    assert [call.request.method for call in responses.calls] == ["GET", "HEAD"]


def test_command_line_overrides_config_file(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"pageUrls": ["http://b.example/"], "maxResponseTime": 500, "checkXhtml": True}))
    args = build_parser().parse_args([PAGE, "--config", str(path), "--max-response-time", "100", "--ignore", "http://a.example/skip"])

    options = collect_options(args)

    assert options == {
        "pageUrls": [PAGE],
        "maxResponseTime": 100.0,
        "checkXhtml": True,
        "linksToIgnore": ["http://a.example/skip"],
    }


def test_unset_flags_are_not_passed():
    args = build_parser().parse_args([PAGE])

    assert collect_options(args) == {"pageUrls": [PAGE]}
