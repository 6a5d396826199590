"""Shared fixtures for the capcli tests."""

import pytest

from capcli.core import config


class ScriptedPrompter:
    """Answers wizard questions from a fixed script, recording what was asked."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []

    def ask(self, question):
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"no scripted answer for {question.name}")
        return self.answers.pop(0)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at an empty temporary directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("CAPCLI_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("CAPCLI_TOKEN", raising=False)
    monkeypatch.delenv("CAPCLI_API_URL", raising=False)
    config.reset_user_config()
    yield config_home
    config.reset_user_config()


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter
