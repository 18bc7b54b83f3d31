"""Unit tests for AntiAbuseService."""

from uuid import uuid4

import pytest

from narravo.domain.error import (
    InvalidSubmissionError,
    RateLimitedError,
    SubmittedTooFastError,
    ValidationFailedError,
)
from narravo.domain.repository import ConfigRepository
from narravo.domain.service import AntiAbuseService, ConfigService, RateLimitService
from narravo.domain.service.config_service import (
    RATE_COMMENTS_PER_MINUTE,
    RATE_MIN_SUBMIT_SECS,
)
from narravo.domain.value import AbuseAction, UserId
from tests.di import FakeClock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

HEADERS = {"x-real-ip": "203.0.113.7"}


async def build_gate(unit_env) -> tuple[AntiAbuseService, FakeClock]:
    """Gate whose dwell-time check reads the same fake clock as the store."""
    clock = await unit_env.get(FakeClock)
    gate = AntiAbuseService(
        rate_limit_service=await unit_env.get(RateLimitService),
        config_service=await unit_env.get(ConfigService),
        clock=clock,
    )
    return gate, clock


def opened_ago(clock: FakeClock, seconds: float) -> float:
    return (clock() - seconds) * 1000


class TestHoneypot:
    """Tests for the hidden form field."""

    @pytest.mark.asyncio
    async def test_filled_honeypot_rejects_an_otherwise_valid_request(
        self, unit_env
    ):
        """A bot filling the hidden field is rejected regardless of timing."""
        # Arrange
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.COMMENT,
            honeypot="x",
            submit_start_time=opened_ago(clock, 30),
            headers=HEADERS,
        )

        # Assert
        assert result.valid is False
        assert isinstance(result.error, InvalidSubmissionError)
        assert result.message == "Invalid form submission"
        assert result.rate_limit_info is None

    @pytest.mark.asyncio
    async def test_honeypot_rejection_does_not_consume_rate_limit(self, unit_env):
        """Rejected bots do not use up the real user's allowance."""
        # Arrange
        gate, clock = await build_gate(unit_env)
        user_id = UserId(uuid4())
        for _ in range(10):
            await gate.validate(
                user_id=user_id,
                action=AbuseAction.COMMENT,
                honeypot="spam",
                submit_start_time=opened_ago(clock, 30),
            )

        # Act
        result = await gate.validate(
            user_id=user_id,
            action=AbuseAction.COMMENT,
            submit_start_time=opened_ago(clock, 30),
        )

        # Assert
        assert result.valid is True
        assert result.rate_limit_info.remaining == 4

    @pytest.mark.asyncio
    async def test_whitespace_honeypot_is_ignored(self, unit_env):
        """Browsers may autofill blanks; only real content counts."""
        # Arrange
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.COMMENT,
            honeypot="   ",
            submit_start_time=opened_ago(clock, 30),
        )

        # Assert
        assert result.valid is True


class TestDwellTime:
    """Tests for the minimum time between render and submit."""

    @pytest.mark.asyncio
    async def test_submission_before_minimum_is_rejected(self, unit_env):
        """Submitting one second after render fails the default 2s minimum."""
        # Arrange
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.COMMENT,
            submit_start_time=opened_ago(clock, 1),
        )

        # Assert
        assert result.valid is False
        assert isinstance(result.error, SubmittedTooFastError)
        assert result.error.required_seconds == 2.0
        assert "2 seconds" in result.message

    @pytest.mark.asyncio
    async def test_missing_start_time_is_rejected(self, unit_env):
        """No start time counts as too fast."""
        # Arrange
        gate, _ = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()), action=AbuseAction.COMMENT
        )

        # Assert
        assert isinstance(result.error, SubmittedTooFastError)

    @pytest.mark.asyncio
    async def test_configured_minimum_is_used(self, unit_env):
        """RATE.MIN-SUBMIT-SECS raises the bar."""
        # Arrange
        config_repo = await unit_env.get(ConfigRepository)
        await config_repo.set_value(RATE_MIN_SUBMIT_SECS, 10)
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.COMMENT,
            submit_start_time=opened_ago(clock, 5),
        )

        # Assert
        assert isinstance(result.error, SubmittedTooFastError)
        assert result.error.required_seconds == 10


class TestRateLimit:
    """Tests for the rate limit step of the gate."""

    @pytest.mark.asyncio
    async def test_over_limit_submission_reports_retry_after(self, unit_env):
        """The gate surfaces the limiter's wait time."""
        # Arrange
        gate, clock = await build_gate(unit_env)
        user_id = UserId(uuid4())
        for _ in range(5):
            result = await gate.validate(
                user_id=user_id,
                action=AbuseAction.COMMENT,
                submit_start_time=opened_ago(clock, 30),
                headers=HEADERS,
            )
            assert result.valid is True

        # Act
        result = await gate.validate(
            user_id=user_id,
            action=AbuseAction.COMMENT,
            submit_start_time=opened_ago(clock, 30),
            headers=HEADERS,
        )

        # Assert
        assert result.valid is False
        assert isinstance(result.error, RateLimitedError)
        assert result.error.retry_after == 60
        assert result.rate_limit_info.allowed is False
        with pytest.raises(RateLimitedError):
            result.raise_for_error()

    @pytest.mark.asyncio
    async def test_unusable_limit_configuration_fails_closed(self, unit_env):
        """Configuration problems become a generic validation failure."""
        # Arrange
        config_repo = await unit_env.get(ConfigRepository)
        await config_repo.set_value(RATE_COMMENTS_PER_MINUTE, "unlimited")
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.COMMENT,
            submit_start_time=opened_ago(clock, 30),
        )

        # Assert
        assert result.valid is False
        assert isinstance(result.error, ValidationFailedError)
        assert result.message == "Validation failed"

    @pytest.mark.asyncio
    async def test_valid_submission_passes(self, unit_env):
        """A clean submission is accepted with the window snapshot."""
        # Arrange
        gate, clock = await build_gate(unit_env)

        # Act
        result = await gate.validate(
            user_id=UserId(uuid4()),
            action=AbuseAction.REACTION,
            submit_start_time=opened_ago(clock, 3),
        )

        # Assert
        assert result.valid is True
        assert result.error is None
        assert result.rate_limit_info.limit == 20
        result.raise_for_error()
