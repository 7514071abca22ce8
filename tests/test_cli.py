from __future__ import annotations

import json

import pytest

from claimlens.cli import main


def _run(capsys, *argv: str):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_align_vague_claims(capsys, data_dir):
    code, out, _ = _run(
        capsys,
        "--data-dir", str(data_dir),
        "align", "--vague-claims", str(data_dir / "claims_vague.json"),
    )
    assert code == 0
    paragraphs = json.loads(out)
    assert len(paragraphs) == 3
    assert paragraphs[0][0] == {"text": "Hamas militants attacked Israel", "claim_index": 0}
    assert [s["claim_index"] for s in paragraphs[1]] == [1, None, 2, None]
    assert paragraphs[1][2]["text"] == "evacuated"
    assert paragraphs[2][0]["claim_index"] == 3


def test_align_with_enriched_claims_reconstructs_article(capsys, data_dir):
    code, out, _ = _run(capsys, "--data-dir", str(data_dir), "align")
    assert code == 0
    paragraphs = json.loads(out)
    assert paragraphs[0] == [
        {
            "text": "Hamas militants attacked Israel on 7 October 2023, "
            "crossing the border from Gaza at dawn.",
            "claim_index": None,
        }
    ]


def test_annotate_single_claim(capsys, data_dir):
    code, out, _ = _run(capsys, "--data-dir", str(data_dir), "annotate", "--id", "2")
    assert code == 0
    [result] = json.loads(out)
    assert result["id"] == 2
    assert result["segments"] == [
        {"text": "Residents of Sderot", "role": "Patient", "is_action": False, "family": "Patient"},
        {"text": " ", "role": None, "is_action": False, "family": None},
        {"text": "were evacuated", "role": "Action", "is_action": True, "family": "Action"},
        {"text": " ", "role": None, "is_action": False, "family": None},
        {
            "text": "to hotels in Eilat",
            "role": "Final_location.destination",
            "is_action": False,
            "family": "Final_location",
        },
    ]


def test_annotate_inline_sentence(capsys):
    roles = json.dumps([{"word": "Northern Israel", "role": "Location"}])
    code, out, _ = _run(
        capsys, "annotate", "--sentence", "forces entered Northern Israel", "--roles", roles
    )
    assert code == 0
    assert json.loads(out)[-1] == {
        "text": "Northern Israel",
        "role": "Location",
        "is_action": False,
        "family": "Location",
    }


def test_annotate_unknown_role_has_no_family(capsys):
    roles = json.dumps([{"word": "rockets", "role": "Projectile"}])
    code, out, _ = _run(capsys, "annotate", "--sentence", "rockets fell", "--roles", roles)
    assert code == 0
    assert json.loads(out)[0]["family"] is None


@pytest.mark.parametrize(
    "roles, message",
    [("{not json", "not valid JSON"), ("[1]", "is not of type 'object'")],
)
def test_annotate_rejects_bad_roles(capsys, roles, message):
    code, out, err = _run(capsys, "annotate", "--sentence", "Rockets fell", "--roles", roles)
    assert code == 1
    assert out == ""
    assert err.startswith("error: --roles")
    assert message in err


def test_roles_without_sentence_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", "--roles", "[]"])
    assert excinfo.value.code == 2
    assert "--roles requires --sentence" in capsys.readouterr().err


def test_mentions(capsys):
    code, out, _ = _run(capsys, "mentions", "--text", "Two militants fled", "--phrase", "militant")
    assert code == 0
    assert json.loads(out) == [
        {"text": "Two ", "highlighted": False},
        {"text": "militants", "highlighted": True},
        {"text": " fled", "highlighted": False},
    ]


def test_recipe(capsys, data_dir):
    code, out, _ = _run(capsys, "--data-dir", str(data_dir), "recipe", "--id", "1")
    assert code == 0
    [view] = json.loads(out)
    assert [r["word"] for r in view["roles"]] == ["Hamas militants", "Israel", "Gaza"]
    assert len(view["main"]) == 2


def test_unknown_claim_id(capsys, data_dir):
    code, _, err = _run(capsys, "--data-dir", str(data_dir), "recipe", "--id", "99")
    assert code == 1
    assert "no claim with id 99" in err


def test_missing_fixture_reports_error(capsys, tmp_path):
    code, out, err = _run(capsys, "--data-dir", str(tmp_path), "align")
    assert code == 1
    assert out == ""
    assert err.startswith("error: cannot read")


def test_no_command_prints_help(capsys):
    code, out, _ = _run(capsys)
    assert code == 0
    assert "usage: claimlens" in out


def test_bad_config_file_reports_error(capsys, monkeypatch, tmp_path):
    config = tmp_path / "claimlens.yaml"
    config.write_text("- not\n- a mapping\n")
    monkeypatch.setenv("CLAIMLENS_CONFIG", str(config))
    code, out, err = _run(capsys, "mentions", "--text", "x", "--phrase", "x")
    assert code == 1
    assert out == ""
    assert "expected a mapping" in err
