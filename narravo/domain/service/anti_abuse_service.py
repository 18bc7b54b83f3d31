"""Anti-abuse gate for comment and reaction submissions."""

import math
import time
from typing import Callable, Mapping, Optional

import logfire

from narravo.domain.error import (
    AntiAbuseError,
    InvalidSubmissionError,
    RateLimitedError,
    SubmittedTooFastError,
    ValidationFailedError,
)
from narravo.domain.model.rate_limit import AntiAbuseResult
from narravo.domain.value import AbuseAction, UserId

from .base import Service
from .config_service import RATE_MIN_SUBMIT_SECS, ConfigService
from .rate_limit_service import RateLimitService

DEFAULT_MIN_SUBMIT_SECONDS = 2.0


class AntiAbuseService(Service):
    """Single accept/reject decision for a submission.

    Checks run cheapest first and stop at the first failure:

    1. Honeypot: a hidden field humans never fill in.
    2. Dwell time: the form must have been open for a minimum time.
    3. Rate limit: records the request against the per-action window.

    A request that passes step 3 stays recorded even if the submission
    later fails downstream.
    """

    def __init__(
        self,
        rate_limit_service: RateLimitService,
        config_service: ConfigService,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize anti-abuse service.

        Args:
            rate_limit_service: Rate limiting service
            config_service: Runtime configuration
            clock: Returns the current time in epoch seconds
        """
        self.rate_limit_service = rate_limit_service
        self.config_service = config_service
        self.clock = clock

    async def validate(
        self,
        user_id: UserId,
        action: AbuseAction,
        honeypot: Optional[str] = None,
        submit_start_time: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> AntiAbuseResult:
        """Validate a submission.

        Never raises: unexpected failures are reported as a generic
        ``ValidationFailedError`` rejection.

        Args:
            user_id: Submitting user
            action: Submission kind
            honeypot: Value of the hidden honeypot field
            submit_start_time: Epoch milliseconds when the form was rendered
            headers: Request headers, for the client IP

        Returns:
            Result with the typed rejection or the rate limit snapshot
        """
        with logfire.span(
            "anti_abuse_service.validate",
            user_id=str(user_id),
            action=action.value,
        ):
            try:
                self.validate_honeypot(honeypot)
                await self.validate_min_submit_time(submit_start_time)

                check = await self.rate_limit_service.record_request(
                    action, user_id, headers=headers
                )
                if not check.allowed:
                    raise RateLimitedError(check.retry_after or 1, check)
            except RateLimitedError as e:
                return AntiAbuseResult(
                    valid=False, error=e, rate_limit_info=e.rate_limit_info
                )
            except AntiAbuseError as e:
                logfire.warn(
                    "Submission rejected",
                    user_id=str(user_id),
                    action=action.value,
                    reason=type(e).__name__,
                )
                return AntiAbuseResult(valid=False, error=e)
            except Exception as e:
                logfire.error(
                    "Anti-abuse validation failed",
                    user_id=str(user_id),
                    action=action.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return AntiAbuseResult(valid=False, error=ValidationFailedError())

            return AntiAbuseResult(valid=True, rate_limit_info=check)

    @staticmethod
    def validate_honeypot(honeypot: Optional[str]) -> None:
        """Reject any non-blank honeypot value.

        Raises:
            InvalidSubmissionError: If the honeypot was filled in
        """
        if honeypot and honeypot.strip():
            raise InvalidSubmissionError()

    async def min_submit_seconds(self) -> float:
        """Configured minimum dwell time, falling back to the default."""
        value = await self.config_service.get_number(RATE_MIN_SUBMIT_SECS)
        if value is None or value <= 0:
            return DEFAULT_MIN_SUBMIT_SECONDS
        return value

    async def validate_min_submit_time(
        self, submit_start_time: Optional[float]
    ) -> float:
        """Require the form to have been open long enough.

        Args:
            submit_start_time: Epoch milliseconds when the form was rendered

        Returns:
            Seconds the form was open

        Raises:
            SubmittedTooFastError: If the start time is missing, invalid or too recent
        """
        required = await self.min_submit_seconds()

        if (
            submit_start_time is None
            or isinstance(submit_start_time, bool)
            or not isinstance(submit_start_time, (int, float))
            or not math.isfinite(submit_start_time)
            or submit_start_time <= 0
        ):
            raise SubmittedTooFastError(required)

        elapsed = (self.clock() * 1000 - submit_start_time) / 1000
        if elapsed < required:
            raise SubmittedTooFastError(required, elapsed)
        return elapsed
