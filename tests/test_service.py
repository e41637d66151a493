"""Tests for the store-backed API: config resolution, seeding, resolve, summary."""

from __future__ import annotations

import pytest

from abilities import ConfigError, NotFoundError, list_documents, resolve, store_summary, write_document
from abilities.defaults import resolve_abilities_root, resolve_seed_dir, BUNDLED_DIR
from abilities.resolve import load_request


@pytest.fixture
def no_seed(monkeypatch):
    monkeypatch.setenv("ABILITIES_SEED", "0")


@pytest.fixture
def seeded(monkeypatch):
    monkeypatch.delenv("ABILITIES_SEED", raising=False)
    monkeypatch.delenv("ABILITIES_SEED_DIR", raising=False)


class TestConfig:
    def test_explicit_root_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ABILITIES_DATA_DIR", "/elsewhere")
        assert resolve_abilities_root(tmp_path) == tmp_path

    def test_abilities_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ABILITIES_DATA_DIR", str(tmp_path / "ab"))
        assert resolve_abilities_root() == tmp_path / "ab"

    def test_data_dir_env(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ABILITIES_DATA_DIR", raising=False)
        monkeypatch.setenv("CONTEXT_DATA_DIR", str(tmp_path))
        assert resolve_abilities_root() == tmp_path / "abilities"

    def test_cwd_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ABILITIES_DATA_DIR", raising=False)
        monkeypatch.delenv("CONTEXT_DATA_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert resolve_abilities_root() == tmp_path / "data" / "abilities"

    @pytest.mark.parametrize("value", ["0", "false", "OFF", "no"])
    def test_seed_disabled(self, monkeypatch, value):
        monkeypatch.setenv("ABILITIES_SEED", value)
        assert resolve_seed_dir() is None

    def test_seed_default_is_bundled(self, seeded):
        assert resolve_seed_dir() == BUNDLED_DIR


class TestSeededStore:
    def test_first_use_seeds_bundled_docs(self, seeded, tmp_path):
        ids = {d.id for d in list_documents(root=tmp_path)}
        assert {"persona.engineer", "rule.backend.base", "repo.example-service"} <= ids

    def test_summary_counts(self, seeded, tmp_path):
        summary = store_summary(root=tmp_path)
        assert summary["root"] == str(tmp_path)
        assert summary["total"] == 7
        assert summary["counts"] == {"personas": 2, "rules": 2, "policies": 1, "repos": 1, "styles": 1}
        assert summary["latest_updated_at"]

    def test_resolve_bundled(self, seeded, tmp_path):
        result = resolve("engineer", ["backend"], root=tmp_path)
        assert result.manifest.applied["rules"] == ["rule.security.base", "rule.backend.base"]
        assert result.manifest.applied["policies"] == ["policy.communication", "style.code"]
        assert result.manifest.order == [
            "rule.security.base",
            "persona.engineer",
            "rule.backend.base",
            "policy.communication",
            "style.code",
        ]

    def test_resolve_with_repo_alias(self, seeded, tmp_path):
        result = resolve("dev", repo_id="example", root=tmp_path)
        assert result.manifest.applied["persona"] == "persona.engineer"
        assert result.manifest.applied["repo"] == "repo.example-service"
        assert result.repo.startswith("Python 3.11 service.")


class TestUnseededStore:
    def test_empty_summary(self, no_seed, tmp_path):
        summary = store_summary(root=tmp_path)
        assert summary["total"] == 0
        assert summary["latest_updated_at"] is None

    def test_write_then_resolve(self, no_seed, tmp_path):
        write_document(root=tmp_path, type="persona", id="persona.engineer", priority=100, body="Engineer.")
        write_document(root=tmp_path, type="rule", id="rule.backend.base", priority=100,
                       tags=["backend"], body="Backend rule.", directory="backend")
        result = resolve("engineer", ["backend"], root=tmp_path, trace=True)
        assert result.manifest.applied["rules"] == ["rule.backend.base"]
        assert result.rules == ["Backend rule."]
        assert [t.reason for t in result.trace] == ["persona", "tag-match"]
        d = result.to_dict()
        assert d["trace"][0] == {"id": "persona.engineer", "type": "persona", "priority": 100, "reason": "persona"}

    def test_no_trace_key_by_default(self, no_seed, tmp_path):
        write_document(root=tmp_path, type="persona", id="persona.engineer", priority=100, body="Engineer.")
        assert "trace" not in resolve("engineer", root=tmp_path).to_dict()

    def test_repeat_resolve_identical(self, no_seed, tmp_path):
        write_document(root=tmp_path, type="persona", id="persona.engineer", priority=100, body="Engineer.")
        a = resolve("engineer", root=tmp_path)
        b = resolve("engineer", root=tmp_path)
        assert (a.prompt, a.manifest.hash) == (b.prompt, b.manifest.hash)

    def test_unknown_persona(self, no_seed, tmp_path):
        with pytest.raises(NotFoundError):
            resolve("nonexistent", root=tmp_path)

    def test_write_escape_rejected(self, no_seed, tmp_path):
        with pytest.raises(ConfigError):
            write_document(root=tmp_path, type="rule", id="rule.x", priority=1, body="b", relative_dir="../escape")

    def test_list_bad_type(self, no_seed, tmp_path):
        with pytest.raises(ConfigError):
            list_documents("widget", root=tmp_path)


class TestLoadRequest:
    def test_loads_mapping(self, tmp_path):
        path = tmp_path / "req.yaml"
        path.write_text("persona: engineer\ntags: [Backend, security]\nrepo_id: billing\ntrace: true\n")
        req = load_request(path)
        assert req.persona == "engineer"
        assert req.tags == ["backend", "security"]
        assert req.repo_id == "billing"
        assert req.trace is True

    def test_repo_key_alias(self, tmp_path):
        path = tmp_path / "req.yaml"
        path.write_text("persona: engineer\nrepo: billing\n")
        assert load_request(path).repo_id == "billing"

    def test_missing_persona(self, tmp_path):
        path = tmp_path / "req.yaml"
        path.write_text("tags: [x]\n")
        with pytest.raises(ConfigError, match="persona"):
            load_request(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "req.yaml"
        path.write_text("- engineer\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_request(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_request(tmp_path / "nope.yaml")
