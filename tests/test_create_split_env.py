from dataclasses import FrozenInstanceError

import pytest

from envgate import EnvConfigurationError, EnvValidationError, create_split_env
from envgate.schema import env_object, string, transform, url


def _server():
    return env_object({"DATABASE_URL": url(), "API_SECRET": string(min_length=32)})


def _client():
    return env_object({"VITE_API_URL": url()})


RUNTIME_ENV = {
    "DATABASE_URL": "https://db.example.com",
    "API_SECRET": "super-secret-key-at-least-32-chars-long",
    "VITE_API_URL": "https://api.example.com",
}


def test_validates_and_merges_server_and_client_schemas(server_env):
    env = create_split_env(server=_server(), client=_client(), runtime_env=RUNTIME_ENV, client_prefix="VITE_")

    assert env.DATABASE_URL == "https://db.example.com"
    assert env.API_SECRET == "super-secret-key-at-least-32-chars-long"
    assert env.VITE_API_URL == "https://api.example.com"


def test_client_context_only_exposes_client_fields(browser_env):
    env = create_split_env(server=_server(), client=_client(), runtime_env=RUNTIME_ENV, client_prefix="VITE_")

    assert dict(env) == {"VITE_API_URL": "https://api.example.com"}
    with pytest.raises(AttributeError):
        env.DATABASE_URL


def test_client_context_never_validates_server_schema(browser_env):
    env = create_split_env(
        server=_server(),
        client=_client(),
        runtime_env={"VITE_API_URL": "https://api.example.com"},
        client_prefix="VITE_",
    )

    assert env.VITE_API_URL == "https://api.example.com"


def test_strict_server_schema_still_rejects_unknown_keys(server_env):
    with pytest.raises(EnvValidationError, match="TYPO_KEY"):
        create_split_env(
            server=_server(),
            client=_client(),
            runtime_env={**RUNTIME_ENV, "TYPO_KEY": "x"},
            client_prefix="VITE_",
        )


def test_throws_if_client_prefix_is_missing_from_client_vars(server_env):
    with pytest.raises(EnvValidationError, match="API_URL: Required"):
        create_split_env(
            server=env_object({"DATABASE_URL": string()}),
            client=env_object({"API_URL": string()}),
            runtime_env={"DATABASE_URL": "https://db.example.com", "API_URL": "https://api.example.com"},
            client_prefix="VITE_",
        )


def test_supports_skip_validation(server_env):
    env = create_split_env(
        server=env_object({"DATABASE_URL": url()}),
        client=env_object({"VITE_API_URL": url()}),
        runtime_env={"DATABASE_URL": "invalid-url", "VITE_API_URL": "also-invalid"},
        client_prefix="VITE_",
        skip_validation=True,
    )

    assert env["DATABASE_URL"] == "invalid-url"
    assert env["VITE_API_URL"] == "also-invalid"


def test_returns_frozen_object(server_env):
    env = create_split_env(
        server=env_object({"SECRET": string()}),
        client=env_object({"VITE_PUBLIC": string()}),
        runtime_env={"SECRET": "secret", "VITE_PUBLIC": "public"},
        client_prefix="VITE_",
    )

    with pytest.raises(FrozenInstanceError):
        env.SECRET = "new-secret"


def test_client_keys_win_on_collision(server_env):
    env = create_split_env(
        server=env_object({"VITE_MODE": transform(string(), lambda s: f"server-{s}")}),
        client=env_object({"VITE_MODE": string()}),
        runtime_env={"VITE_MODE": "shared"},
        client_prefix="VITE_",
    )

    assert env.VITE_MODE == "shared"


def test_error_handler_is_passed_through(server_env):
    seen = []

    def on_error(issues):
        seen.extend(issues)
        raise RuntimeError("bad env")

    with pytest.raises(RuntimeError, match="bad env"):
        create_split_env(
            server=env_object({"DATABASE_URL": url()}),
            client=_client(),
            runtime_env={"DATABASE_URL": "nope", "VITE_API_URL": "https://api.example.com"},
            client_prefix="VITE_",
            on_error=on_error,
        )

    assert [i.dotted_path for i in seen] == ["DATABASE_URL"]


def test_requires_client_prefix():
    with pytest.raises(EnvConfigurationError):
        create_split_env(server=_server(), client=_client(), runtime_env=RUNTIME_ENV, client_prefix="")


def test_requires_record_schemas():
    with pytest.raises(EnvConfigurationError, match="client"):
        create_split_env(server=_server(), client=string(), runtime_env=RUNTIME_ENV, client_prefix="VITE_")


def test_injected_probe_selects_client_branch(server_env):
    env = create_split_env(
        server=_server(),
        client=_client(),
        runtime_env=RUNTIME_ENV,
        client_prefix="VITE_",
        context_probe=lambda: True,
    )

    assert list(env) == ["VITE_API_URL"]



def test_reports_server_and_client_issues_together(server_env):
    seen = []

    def on_error(issues):
        seen.extend(issues)
        raise RuntimeError("bad env")

    with pytest.raises(RuntimeError):
        create_split_env(
            server=_server(),
            client=_client(),
            runtime_env={"DATABASE_URL": "nope", "API_SECRET": "short", "VITE_API_URL": "also-nope"},
            client_prefix="VITE_",
            on_error=on_error,
        )

    assert [i.dotted_path for i in seen] == ["DATABASE_URL", "API_SECRET", "VITE_API_URL"]


def test_default_error_lists_both_halves(server_env):
    with pytest.raises(EnvValidationError) as exc_info:
        create_split_env(
            server=_server(),
            client=_client(),
            runtime_env={"API_SECRET": "super-secret-key-at-least-32-chars-long"},
            client_prefix="VITE_",
        )

    message = str(exc_info.value)
    assert "DATABASE_URL: Required" in message
    assert "VITE_API_URL: Required" in message
