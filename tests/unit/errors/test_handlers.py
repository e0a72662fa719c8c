"""Unit tests for problem-detail rendering helpers."""

import pytest

from thothix.core.errors import ErrorCode, status_for_errors
from thothix.core.outcome import StructuredError


pytestmark = pytest.mark.unit


class TestStatusForErrors:
    """Tests for status selection from structured errors."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (ErrorCode.VALIDATION_ERROR, 400),
            (ErrorCode.UNAUTHORIZED, 401),
            (ErrorCode.FORBIDDEN, 403),
            (ErrorCode.PRIVATE_CHANNEL_INVITE_ONLY, 403),
            (ErrorCode.PROJECT_ACCESS_DENIED, 403),
            (ErrorCode.USER_NOT_FOUND, 404),
            (ErrorCode.CHANNEL_NOT_FOUND, 404),
            (ErrorCode.CONFLICT, 409),
            (ErrorCode.ALREADY_MEMBER, 409),
        ],
    )
    def test_known_codes(self, code: ErrorCode, expected: int) -> None:
        assert status_for_errors((StructuredError.create(code),)) == expected

    def test_first_error_decides(self) -> None:
        errors = (
            StructuredError.create(ErrorCode.USER_NOT_FOUND),
            StructuredError.create(ErrorCode.VALIDATION_ERROR),
        )

        assert status_for_errors(errors) == 404

    def test_unknown_code_is_bad_request(self) -> None:
        assert status_for_errors((StructuredError.create("SOMETHING_ELSE"),)) == 400
