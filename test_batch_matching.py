"""
Test Batch Matching runner
"""

import json

import pytest

from run_batch_matching import RosterLoadError, load_client, load_roster, main


def test_sample_run_to_stdout(capsys, monkeypatch):
    monkeypatch.delenv("ADVISOR_MATCH_POLICY", raising=False)
    exit_code = main([])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["n_advisors"] == 3
    run = payload["runs"][0]
    assert run["client_file"] == "client.json"
    assert run["policy"] == "enhanced"
    assert run["client_segment"] == "ultra_hnw"
    assert run["n_needs"] == 3
    assert run["error"] == ""

    results = run["results"]
    assert [r["rank"] for r in results] == [1, 2, 3]
    assert results[0]["advisor_id"] == "adv-1"
    assert run["summary"]["best_advisor"] == "adv-1"
    assert {"lead_score", "backup_score", "support_score", "confidence_score", "metrics"} <= set(results[0])
    assert any("Basic Estate Planning" in line for line in results[0]["explanation"]["top_drivers"])


def test_classic_policy_top_and_out_file(tmp_path):
    out = tmp_path / "nested" / "results.json"
    exit_code = main(["--policy", "classic", "--top", "1", "--out", str(out), "--no-taxonomy"])

    payload = json.loads(out.read_text(encoding="utf-8"))
    run = payload["runs"][0]
    assert exit_code == 0
    assert run["policy"] == "classic"
    assert len(run["results"]) == 1
    assert "confidence_score" not in run["results"][0]
    assert run["results"][0]["skill_matches"][0]["subtopic_name"] == "Unknown"


def test_config_overrides_flag(capsys):
    main(["--policy", "classic", "--config", '{"importanceWeight": 1.0, "urgencyWeight": 0.0}'])
    overridden = json.loads(capsys.readouterr().out)["runs"][0]["results"]

    main(["--policy", "classic"])
    default = json.loads(capsys.readouterr().out)["runs"][0]["results"]
    default_lead = {r["advisor_id"]: r["lead_score"] for r in default}

    assert {r["advisor_id"]: r["lead_score"] for r in overridden} != default_lead


def test_clients_directory_records_bad_files(tmp_path, capsys):
    clients = tmp_path / "clients"
    clients.mkdir()
    (clients / "a_good.json").write_text(json.dumps([{"subtopic_id": "sub-portfolio", "importance": 9, "urgency": 9}]))
    (clients / "b_broken.json").write_text("{not json")

    exit_code = main(["--clients", str(clients)])
    runs = json.loads(capsys.readouterr().out)["runs"]

    assert exit_code == 1
    assert [r["client_file"] for r in runs] == ["a_good.json", "b_broken.json"]
    assert runs[0]["summary"]["best_advisor"] == "adv-2"
    assert runs[1]["error"].startswith("RosterLoadError")


@pytest.mark.parametrize("argv", [
    ["--advisors", "does/not/exist.json"],
    ["--policy", "v9"],
    ["--config", '{"unknownKnob": 1}'],
    ["--config", "not json"],
    ["--taxonomy-dir", "does/not/exist"],
])
def test_bad_input_exits_with_message(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code != 0
    assert isinstance(exc_info.value.code, str)


def test_loaders(tmp_path):
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps({"advisors": [{"id": "x", "skills": [{"subtopic_id": "s", "skill_level": 4}]}]}))
    advisors = load_roster(roster)
    assert advisors[0].skill_level("s") == 4

    bad_roster = tmp_path / "bad.json"
    bad_roster.write_text(json.dumps([{"name": "missing id"}]))
    with pytest.raises(RosterLoadError):
        load_roster(bad_roster)

    client = tmp_path / "client.json"
    client.write_text(json.dumps({"client_segment": "essentials", "needs": [{"subtopic_id": "s"}]}))
    needs, segment, complexity = load_client(client)
    assert (len(needs), segment, complexity) == (1, "essentials", None)


def test_roster_skill_without_subtopic_is_a_load_error(tmp_path):
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps([{"id": "x", "skills": [{"skill_level": 4}]}]))

    with pytest.raises(RosterLoadError, match="subtopic_id"):
        load_roster(roster)

    with pytest.raises(SystemExit) as exc_info:
        main(["--advisors", str(roster)])
    assert "subtopic_id" in exc_info.value.code


def test_taxonomy_dir_without_csvs_exits(tmp_path):
    empty = tmp_path / "taxonomy"
    empty.mkdir()

    with pytest.raises(SystemExit) as exc_info:
        main(["--taxonomy-dir", str(empty)])
    assert exc_info.value.code.startswith("Cannot load taxonomy")


def test_classic_run_uses_classic_wording(capsys):
    main(["--policy", "classic"])
    results = json.loads(capsys.readouterr().out)["runs"][0]["results"]
    drivers = {r["advisor_id"]: r["explanation"]["top_drivers"] for r in results}

    assert "16 years of experience" in drivers["adv-1"]
    assert "Certified: CFP, CPA" in drivers["adv-1"]
