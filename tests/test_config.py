import pytest
from lazyeyekit.config import PipelineConfig, load_config
from lazyeyekit.errors import ConfigError


def test_defaults():
    cfg = load_config(None)
    assert cfg.fps == 30 and cfg.reference_size == (640, 480)
    d = cfg.deviation
    assert (d.threshold, d.horizontal_margin, d.vertical_margin, d.severe_threshold) == (12, 15, 8, 20)
    assert cfg.blink_threshold == 0.3 and cfg.gaze_smoothing is None
    assert len(cfg.contours.left) == 16 and len(cfg.contours.right) == 16


def test_yaml_overrides(tmp_path):
    p = tmp_path / "lek.yaml"
    p.write_text("fps: 60\ndeviation:\n  threshold: 10\nexercise:\n  kind: smooth-pursuit\n  sub_mode: circle\n"
                 "gaze_smoothing:\n  beta: 0.2\n")
    cfg = load_config(p)
    assert cfg.fps == 60 and cfg.deviation.threshold == 10 and cfg.deviation.window == 30
    assert cfg.exercise.kind == "smooth-pursuit" and cfg.exercise.sub_mode == "circle"
    assert cfg.gaze_smoothing.beta == 0.2


@pytest.mark.parametrize("text", ["fps: -1\n", "exercise:\n  kind: tetris\n", "- a\n- b\n", "fps: [\n",
                                  "history_size: 20\n"])
def test_bad_config(tmp_path, text):
    p = tmp_path / "bad.yaml"
    p.write_text(text)
    with pytest.raises(ConfigError):
        load_config(p)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file_is_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_config(p) == PipelineConfig()
