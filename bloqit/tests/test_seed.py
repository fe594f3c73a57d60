from __future__ import annotations

from pathlib import Path

import pytest

from bloqit.core.errors import ValidationError
from bloqit.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqit.infrastructure.seed import seed_database


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "seed.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_seed_runs_once(tmp_path: Path, session) -> None:
    path = _write(
        tmp_path,
        "bloqs:\n"
        "  - id: B1\n"
        "    title: Riod Eixample\n"
        "    address: Pg. de Gràcia 74, Barcelona\n"
        "    lockers:\n"
        "      - id: L1\n"
        "      - id: L2\n"
        "        status: OPEN\n",
    )

    assert seed_database(session, path) == 1
    assert seed_database(session, path) == 0
    assert [bloq.bloq_id for bloq in BloqRepositoryImpl(session).list()] == ["B1"]


@pytest.mark.parametrize(
    "text,missing",
    [
        ("bloqs:\n  - title: Riod Eixample\n", "address"),
        ("bloqs:\n  - address: Pg. de Gràcia 74\n", "title"),
        ("bloqs:\n  - title: ''\n    address: Pg. de Gràcia 74\n", "title"),
    ],
)
def test_seed_entry_without_required_field_is_rejected(tmp_path: Path, session, text: str, missing: str) -> None:
    with pytest.raises(ValidationError, match=missing):
        seed_database(session, _write(tmp_path, text))

    assert BloqRepositoryImpl(session).list() == []


def test_seed_without_bloqs_list_is_rejected(tmp_path: Path, session) -> None:
    with pytest.raises(ValidationError):
        seed_database(session, _write(tmp_path, "lockers: []\n"))
