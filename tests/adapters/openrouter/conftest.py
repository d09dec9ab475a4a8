from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers.openrouter import ScriptedOpenRouter, make_classifier_config

if TYPE_CHECKING:
    from lifeboard.config.classifier import ClassifierConfig


@pytest.fixture
def classifier_config() -> ClassifierConfig:
    return make_classifier_config()


@pytest.fixture
def openrouter() -> ScriptedOpenRouter:
    return ScriptedOpenRouter()
