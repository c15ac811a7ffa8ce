import pytest
import yaml

from memoria.store.workdir import (
    CONFIG_NAME,
    WorkConfig,
    default_cfg,
    init_work,
    load_work_cfg,
)


def test_init_creates_layout(tmp_path):
    memoria_dir = init_work(tmp_path / "work")
    assert memoria_dir == (tmp_path / "work" / ".memoria").resolve()
    assert (memoria_dir / CONFIG_NAME).exists()
    assert (memoria_dir / "drafts").is_dir()


def test_init_keeps_existing_config(tmp_path):
    memoria_dir = init_work(tmp_path)
    cfg_path = memoria_dir / CONFIG_NAME
    first = yaml.safe_load(cfg_path.read_text())["work"]["id"]

    init_work(tmp_path)

    assert yaml.safe_load(cfg_path.read_text())["work"]["id"] == first


def test_load_defaults(tmp_path):
    init_work(tmp_path)
    work_dir, memoria_dir, cfg = load_work_cfg(tmp_path)

    assert work_dir == tmp_path.resolve()
    assert memoria_dir == work_dir / ".memoria"
    assert cfg.save_limit is None
    assert cfg.history_max_depth is None
    assert cfg.practice_level == 3
    assert cfg.voice_accent == "en-US"
    assert not cfg.diagnostics


def test_load_outside_work(tmp_path):
    with pytest.raises(RuntimeError, match="missing .memoria"):
        load_work_cfg(tmp_path)


def test_load_without_config(tmp_path):
    (tmp_path / ".memoria").mkdir()
    with pytest.raises(RuntimeError, match="missing config.yml"):
        load_work_cfg(tmp_path)


def test_load_invalid_config(tmp_path):
    memoria_dir = init_work(tmp_path)
    cfg = default_cfg()
    cfg["drafts"]["save_limit"] = 0
    (memoria_dir / CONFIG_NAME).write_text(yaml.safe_dump(cfg))

    with pytest.raises(RuntimeError, match="save_limit"):
        load_work_cfg(tmp_path)


class TestWorkConfig:
    def test_requires_work_id(self):
        with pytest.raises(ValueError):
            WorkConfig.from_dict({"work": {}})

    def test_reads_all_sections(self):
        cfg = WorkConfig.from_dict(
            {
                "work": {"id": "w1"},
                "drafts": {"save_limit": 5},
                "history": {"max_depth": 20},
                "practice": {"level": 1},
                "voice": {
                    "accent": "en-GB",
                    "preference": {"name": "Daniel", "lang": "en-GB", "uri": "d"},
                    "recommended": "Daniel",
                },
                "ui": {"diagnostics": True},
            }
        )
        assert cfg.save_limit == 5
        assert cfg.history_max_depth == 20
        assert cfg.practice_level == 1
        assert cfg.voice_accent == "en-GB"
        assert cfg.voice_preference["name"] == "Daniel"
        assert cfg.voice_recommended == "Daniel"
        assert cfg.diagnostics

    def test_rejects_bad_level(self):
        with pytest.raises(ValueError):
            WorkConfig.from_dict({"work": {"id": "w"}, "practice": {"level": 7}})

    def test_rejects_boolean_limit(self):
        with pytest.raises(ValueError):
            WorkConfig.from_dict({"work": {"id": "w"}, "drafts": {"save_limit": True}})
