from __future__ import annotations

import uuid

from travelsync.domain.model import EntityFamily
from travelsync.domain.reconciliation import FamilyResult, ProfileResult


def test_profile_result_separates_failed_families() -> None:
    result = ProfileResult(
        source_id="P100",
        profile_id=uuid.UUID(int=1),
        families=[
            FamilyResult(family=EntityFamily.EMAILS, inserted=2, deleted=1),
            FamilyResult(family=EntityFamily.PHONES, error="boom"),
        ],
    )

    assert result.partial is True
    assert result.errors == ["phones: boom"]
    assert result.rows_affected == {EntityFamily.EMAILS: 3}


def test_profile_result_without_errors_is_not_partial() -> None:
    result = ProfileResult(
        source_id="P100",
        families=[FamilyResult(family=EntityFamily.EMAILS, updated=1)],
    )

    assert result.partial is False
    assert result.errors == []
