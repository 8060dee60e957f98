"""Shared pytest fixtures and test helpers for custreg tests."""

from __future__ import annotations

import json
import random
from collections.abc import Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from custreg.domain.customer import Customer, OrganizationInfo, PersonInfo
from custreg.domain.types import State
from custreg.infrastructure.memory import InMemoryCustomerRepository
from custreg.services.registry import RegistryService
from custreg.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """Telemetry is a context-wide switch; keep it from leaking between tests."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory so no stray custreg.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CUSTREG_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Domain values
# ---------------------------------------------------------------------------


def make_person(**overrides: Any) -> PersonInfo:
    fields: dict[str, Any] = {
        "given_name": "given-name",
        "family_name": "family-name",
        "ssn": "SSN",
        "date_of_birth": date(1970, 1, 1),
        "citizenship": "US",
    }
    fields.update(overrides)
    return PersonInfo(**fields)


def make_org(**overrides: Any) -> OrganizationInfo:
    fields: dict[str, Any] = {
        "name": "org-name",
        "form": "Ltd",
        "legal_id": "legal-id",
        "registration_date": date(1970, 1, 1),
        "registration_country": "US",
    }
    fields.update(overrides)
    return OrganizationInfo(**fields)


def seed_customers() -> list[Customer]:
    return [
        Customer(id=1, state=State.PROSPECT, info=make_person()),
        Customer(id=2, state=State.ACTIVE, info=make_org()),
    ]


def person_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": "private",
        "given_name": "given-name",
        "family_name": "family-name",
        "ssn": "SSN",
        "date_of_birth": "1970-01-01",
        "citizenship": "US",
    }
    payload.update(overrides)
    return payload


def org_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": "organization",
        "name": "org-name",
        "form": "Ltd",
        "legal_id": "legal-id",
        "registration_date": "1970-01-01",
        "registration_country": "US",
    }
    payload.update(overrides)
    return payload


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def person() -> PersonInfo:
    return make_person()


@pytest.fixture
def org() -> OrganizationInfo:
    return make_org()


@pytest.fixture
def repo() -> InMemoryCustomerRepository:
    """Repository seeded with a person (ID 1) and an organization (ID 2)."""
    return InMemoryCustomerRepository(seed_customers(), lock_timeout=1.0)


@pytest.fixture
def empty_repo() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository(lock_timeout=1.0)


@pytest.fixture
def service(repo: InMemoryCustomerRepository) -> RegistryService:
    return RegistryService(repo, rng=random.Random(1234))


@pytest.fixture
def empty_service(empty_repo: InMemoryCustomerRepository) -> RegistryService:
    return RegistryService(empty_repo, rng=random.Random(1234))
