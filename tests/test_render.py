"""Tests for prompt rendering and the manifest."""

from __future__ import annotations

import re

from abilities.resolve import render
from abilities.resolve.render import prompt_hash
from abilities.store.models import AbilityDocument

PERSONA = AbilityDocument(id="persona.engineer", type="persona", body="You build things.")
REPO = AbilityDocument(id="repo.svc", type="repo", priority=120, body="Python 3.11 only.")
RULE = AbilityDocument(id="rule.be", type="rule", body="Validate input.")
STYLE = AbilityDocument(id="style.code", type="style", priority=80, body="Match the file.")


class TestRender:
    def test_persona_only(self):
        prompt, manifest = render(PERSONA, None, [], [])
        assert prompt == "# Persona\n\n<!-- persona.engineer (priority 100) -->\nYou build things."
        assert manifest.applied == {"persona": "persona.engineer", "repo": "", "rules": [], "policies": []}
        assert manifest.order == ["persona.engineer"]

    def test_all_sections_in_order(self):
        prompt, _ = render(PERSONA, REPO, [RULE], [STYLE])
        titles = re.findall(r"^# (.+)$", prompt, re.MULTILINE)
        assert titles == ["Persona", "Repo Constraints", "Rules", "Policies & Style"]
        assert "<!-- repo.svc (priority 120) -->\nPython 3.11 only." in prompt
        assert prompt.endswith("<!-- style.code (priority 80) -->\nMatch the file.")

    def test_empty_sections_omitted(self):
        prompt, _ = render(PERSONA, None, [], [STYLE])
        assert "# Rules" not in prompt
        assert "# Repo Constraints" not in prompt
        assert "\n\n# Policies & Style\n\n" in prompt

    def test_multiple_docs_joined_by_blank_lines(self):
        other = AbilityDocument(id="rule.zz", type="rule", body="Second.")
        prompt, manifest = render(PERSONA, None, [RULE, other], [])
        assert "Validate input.\n\n<!-- rule.zz (priority 100) -->\nSecond." in prompt
        assert manifest.rules == ["rule.be", "rule.zz"]

    def test_explicit_order_used(self):
        _, manifest = render(PERSONA, REPO, [RULE], [], order=[REPO, PERSONA, RULE])
        assert manifest.order == ["repo.svc", "persona.engineer", "rule.be"]


class TestManifestHash:
    def test_fixed_length_hex(self):
        _, manifest = render(PERSONA, None, [RULE], [])
        assert re.fullmatch(r"[0-9a-f]{32}", manifest.hash)

    def test_depends_on_rule_ids(self):
        assert prompt_hash("p", ["rule.a"]) != prompt_hash("p", ["rule.b"])

    def test_depends_on_prompt(self):
        assert prompt_hash("p1", []) != prompt_hash("p2", [])

    def test_to_dict_shape(self):
        _, manifest = render(PERSONA, REPO, [RULE], [STYLE])
        d = manifest.to_dict()
        assert set(d) == {"applied", "order", "hash"}
        assert d["applied"]["policies"] == ["style.code"]
