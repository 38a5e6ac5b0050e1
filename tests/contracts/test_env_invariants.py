"""Behavioral contracts of resolved records.

Prove the rules callers depend on stay true: results are immutable,
deterministic, all-or-nothing and never leak secrets in their text forms.
"""

import copy
import os
from unittest.mock import patch

import pytest

from tinyenv import EnvRecord, MissingVariableError, TinyEnvSchema, tinyenv


class TestRecordInvariants:
    """Contracts of the EnvRecord returned by every entry point."""

    @pytest.mark.contract
    def test_record_is_immutable(self):
        """Invariant: the returned record cannot be written to."""
        with patch.dict(os.environ, {}, clear=True):
            env = tinyenv(["NODE_ENV"], defaults={"NODE_ENV": "development"})

        with pytest.raises(AttributeError):
            env.NODE_ENV = "production"  # type: ignore[misc]
        with pytest.raises(TypeError):
            env["NODE_ENV"] = "production"  # type: ignore[index]
        with pytest.raises(TypeError):
            del env["NODE_ENV"]  # type: ignore[attr-defined]
        with pytest.raises(AttributeError):
            del env.NODE_ENV
        with pytest.raises(TypeError):
            env.origin["NODE_ENV"] = "env"  # type: ignore[index]

        assert env.NODE_ENV == "development"

    @pytest.mark.contract
    def test_resolution_is_idempotent(self):
        """Invariant: identical inputs give element-wise equal records."""
        schema = TinyEnvSchema(
            ["PORT", "HOSTS", "CONFIG"],
            {"defaults": {"PORT": 3000, "HOSTS": [], "CONFIG": {"a": 0}}},
        )
        source = {"PORT": "8080", "HOSTS": "a,b", "CONFIG": '{"a": 1}'}

        first = schema.parse(source)
        second = schema.parse(source)

        assert first == second
        assert first is not second
        assert first.to_dict() == {"PORT": 8080, "HOSTS": ["a", "b"], "CONFIG": {"a": 1}}

    @pytest.mark.contract
    def test_failure_exposes_no_partial_record(self):
        """Invariant: a failing key means no record at all."""
        seen = []
        schema = TinyEnvSchema(
            ["A", "B", "C"],
            {"validator": lambda key, value: seen.append(key)},
        )

        with pytest.raises(MissingVariableError, match="B$"):
            schema.parse({"A": "1", "C": "3"})

        assert seen == ["A"]

    @pytest.mark.contract
    def test_record_is_a_mapping(self):
        """Invariant: records behave like read-only dicts in declaration order."""
        record = TinyEnvSchema(["B", "A"]).parse({"A": "1", "B": "2"})

        assert isinstance(record, EnvRecord)
        assert list(record) == ["B", "A"]
        assert len(record) == 2
        assert dict(record) == {"B": "2", "A": "1"}
        assert record == {"A": "1", "B": "2"}
        assert record.get("C") is None

    @pytest.mark.contract
    def test_unknown_attribute(self):
        record = TinyEnvSchema(["A"]).parse({"A": "1"})
        with pytest.raises(AttributeError):
            _ = record.B

    @pytest.mark.contract
    def test_record_can_be_copied(self):
        """Invariant: copies are equal, independent records with the same origins."""
        record = TinyEnvSchema(["A", "B"], {"defaults": {"B": [1]}}).parse({"A": "x"})

        for clone in (copy.copy(record), copy.deepcopy(record)):
            assert isinstance(clone, EnvRecord)
            assert clone == record
            assert clone.origin == {"A": "env", "B": "default"}
            with pytest.raises(AttributeError):
                clone.A = "y"  # type: ignore[misc]


class TestSecretRedaction:
    """Secrets must never appear in string forms or audits."""

    @pytest.mark.contract
    def test_secret_values_are_redacted(self):
        record = TinyEnvSchema(["API_KEY", "DB_PASSWORD", "PORT"]).parse(
            {"API_KEY": "secret_api_key_12345", "DB_PASSWORD": "hunter2", "PORT": "80"}
        )

        for text in (str(record), repr(record), record.audit()):
            assert "secret_api_key_12345" not in text
            assert "hunter2" not in text
            assert "[REDACTED]" in text
            assert "'80'" in text

    @pytest.mark.contract
    def test_audit_reports_origin(self):
        record = TinyEnvSchema(["A", "B"], {"defaults": {"B": 2}}).parse({"A": "x"})
        assert record.audit() == "A: env:'x'\nB: default:2"
