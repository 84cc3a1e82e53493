from __future__ import annotations

from commitgen_relay.common.templates import PLACEHOLDER, load_template, render_prompt


def test_render_prompt_substitution() -> None:
    tpl = "Diff: {{diff}}!"
    out = render_prompt(tpl, "+x")
    assert out == "Diff: +x!"


def test_render_prompt_without_placeholder_appends() -> None:
    out = render_prompt("Write a commit message.\n", "+x")
    assert out == "Write a commit message.\n\n+x"


def test_packaged_template_embeds_diff_verbatim() -> None:
    tpl = load_template()
    assert PLACEHOLDER in tpl
    diff = "diff --git a/a.py b/a.py\n+print('{{not a placeholder}}')\n"
    prompt = render_prompt(tpl, diff)
    assert diff in prompt
    assert "Do not use markdown" in prompt
    assert "72 characters" in prompt


def test_load_template_from_path(tmp_path) -> None:  # noqa: ANN001
    p = tmp_path / "tpl.txt"
    p.write_text("Custom {{diff}}", encoding="utf-8")
    assert load_template(p) == "Custom {{diff}}"
