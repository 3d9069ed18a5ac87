import json
from typer.testing import CliRunner
from lazyeyekit.cli import app

runner = CliRunner()


def test_patterns_table():
    res = runner.invoke(app, ["patterns", "saccades", "--steps", "7"])
    assert res.exit_code == 0
    assert "#3B82F6" in res.output


def test_patterns_unknown_kind():
    assert runner.invoke(app, ["patterns", "tetris"]).exit_code == 2


def test_replay_jsonl(tmp_path, face):
    frame = face(left=(290, 100), right=(350, 100))
    lines = []
    for i in range(5):
        pts = None if i == 2 else frame.pts.tolist()
        lines.append(json.dumps({"width": 640, "height": 480, "pts": pts, "ts": i / 30}))
    p = tmp_path / "rec.jsonl"
    p.write_text("\n".join(lines) + "\n")
    res = runner.invoke(app, ["replay", str(p)])
    assert res.exit_code == 0, res.output
    rows = [json.loads(l) for l in res.output.splitlines() if l.startswith("{\"frame\"")]
    assert len(rows) == 5
    assert rows[2]["eye"] is None
    assert rows[0]["eye"]["eyeAlignment"] == 1.0
    assert rows[4]["lazyEye"]["eye"] == "none"


def test_replay_null_timestamp_uses_frame_clock(tmp_path, face):
    pts = face().pts.tolist()
    p = tmp_path / "rec.jsonl"
    p.write_text("\n".join(json.dumps({"width": 640, "height": 480, "pts": pts, "ts": None}) for _ in range(3)) + "\n")
    res = runner.invoke(app, ["replay", str(p)])
    assert res.exit_code == 0, res.output
    assert len([l for l in res.output.splitlines() if l.startswith("{\"frame\"")]) == 3


def test_replay_rejects_bad_step_count(tmp_path):
    p = tmp_path / "rec.jsonl"
    p.write_text("")
    for steps in ("-3", "0"):
        res = runner.invoke(app, ["replay", str(p), "--exercise", "saccades", "--steps", steps])
        assert res.exit_code == 2
