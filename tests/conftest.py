# pylint: disable=wrong-import-position,redefined-outer-name
"""Root conftest for all Critic tests.

Clears environment variables the app factory reads before any critic module
import, so that tests never pick up a developer's local configuration.
"""
import os

SETTINGS_ENV_VARS = (
    "HF_TOKEN",
    "HF_MODEL",
    "HF_BASE_URL",
    "HF_MAX_RETRIES",
    "CRITIQUE_TIMEOUT_MS",
    "LOG_LEVEL",
    "SAMPLES_PATH",
)

for _name in SETTINGS_ENV_VARS:
    os.environ.pop(_name, None)

import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from critic.config import CritiqueConfig, Settings
from critic.critique.invoker import CompletionInvoker
from critic.critique.pipeline import CritiquePipeline
from critic.main import create_app
from critic.samples.store import InMemorySampleStore


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Undo any settings variable a test or an imported module put into the environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


VALID_CRITIQUE = """\
Detailed Diagnosis
The function ignores its input and always returns 0.

[Proposed Fix]
def f(x):
    return sum(x)

<Test_Validation>
assert f([1, 2, 3]) == 6
assert f([]) == 0
assert f([-1]) == -1
"""


class StubCompletions:
    """Stands in for `client.chat.completions` of the OpenAI client."""

    def __init__(self, reply=VALID_CRITIQUE, hang=False, error=None, completion=None):
        self.reply = reply
        self.hang = hang
        self.error = error
        self.completion = completion
        self.calls = []
        self.cancelled = False

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.hang:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.completion is not None:
            return self.completion
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))]
        )


class StubClient:
    """Async context manager shaped like `AsyncOpenAI`; records when it is closed."""

    def __init__(self, completions: StubCompletions):
        self.chat = SimpleNamespace(completions=completions)
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


class StubClientFactory:
    def __init__(self, completions: StubCompletions):
        self.completions = completions
        self.configs = []
        self.clients = []

    def __call__(self, config):
        self.configs.append(config)
        client = StubClient(self.completions)
        self.clients.append(client)
        return client


@pytest.fixture
def make_config():
    def _make(**overrides) -> CritiqueConfig:
        values = {
            "api_key": SecretStr("hf_test_token"),  # pragma: allowlist secret
            "model": "test/coder-model",
            "timeout_ms": 2000,
        }
        values.update(overrides)
        return CritiqueConfig(**values)

    return _make


@pytest.fixture
def make_pipeline(make_config):
    """Build a pipeline around a stub model; returns (pipeline, factory)."""

    def _make(completions=None, **config_overrides):
        factory = StubClientFactory(completions or StubCompletions())
        invoker = CompletionInvoker(make_config(**config_overrides), client_factory=factory)
        return CritiquePipeline(invoker), factory

    return _make


@pytest.fixture
def make_client(make_pipeline):
    """TestClient for an app wired to a stub model; returns (client, factory)."""

    def _make(completions=None, samples=(), **config_overrides):
        pipeline, factory = make_pipeline(completions, **config_overrides)
        app = create_app(
            settings=Settings(_env_file=None),
            pipeline=pipeline,
            sample_store=InMemorySampleStore(list(samples)),
        )
        return TestClient(app), factory

    return _make


@pytest.fixture
def stub_completions():
    return StubCompletions


@pytest.fixture
def stub_client_factory():
    return StubClientFactory


@pytest.fixture
def valid_payload():
    return {
        "id": "s1",
        "prd": "Return sum of list",
        "buggy_solution_code": "def f(x): return 0",
        "failure_info": {"trace": "AssertionError"},
    }
