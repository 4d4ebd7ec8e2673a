"""Tests for reporting outputs to the workflow."""

import pytest

from mastodon_action.output import set_action_outputs, write_output


def test_outputs_are_appended_to_github_output(tmp_path, monkeypatch) -> None:
    output_file = tmp_path / "github_output"
    output_file.write_text("previous=step\n")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    set_action_outputs({"id": "123", "url": "http://example.com/status/123"})

    assert output_file.read_text() == (
        "previous=step\nid=123\nurl=http://example.com/status/123\n"
    )


def test_legacy_set_output_without_github_output(capsys) -> None:
    set_action_outputs({"id": "129", "scheduled_at": "2020-01-07 00:00:00+00:00"})

    assert capsys.readouterr().out == (
        "::set-output name=id::129\n"
        "::set-output name=scheduled_at::2020-01-07 00:00:00+00:00\n"
    )


def test_unwritable_output_file_is_logged_not_raised(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "missing-dir" / "output"))

    write_output("id", "123")

    assert "::set-output" not in capsys.readouterr().out


@pytest.mark.parametrize("value", ["", "with spaces and = signs"])
def test_values_are_written_verbatim(tmp_path, monkeypatch, value: str) -> None:
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    write_output("url", value)

    assert output_file.read_text() == f"url={value}\n"
