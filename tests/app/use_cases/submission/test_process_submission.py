"""Testes do ProcessSubmissionUseCase (pipeline de submissão)."""

from __future__ import annotations

from typing import Any

import pytest

from app.domain.outcome import (
    FailureReason,
    PartialFailure,
    RateLimitType,
    SubmissionStatus,
)
from app.infra.stores.rate_limiter import AdmissionControl, FixedWindowRateLimiter
from app.protocols.results import Err, Ok
from app.services.operations_log import OperationsLog
from app.use_cases.submission import (
    STAGE_ORDER,
    ProcessSubmissionUseCase,
    SubmissionConfig,
)
from tests.fakes.fake_clock import FakeClock
from tests.fakes.fake_messaging_provider import FakeMessagingProvider
from tests.fakes.fake_notification_provider import FakeNotificationProvider

BASE_NAME = "ext-theguild-acme-corp"


def _build(
    messaging: FakeMessagingProvider | None = None,
    notification: FakeNotificationProvider | None = None,
    *,
    limit: int = 10,
    ops_channel: str = "C-OPS",
    config: SubmissionConfig | None = None,
    limiter: FixedWindowRateLimiter | None = None,
) -> tuple[ProcessSubmissionUseCase, FakeMessagingProvider, FakeNotificationProvider]:
    messaging = messaging or FakeMessagingProvider()
    notification = notification or FakeNotificationProvider()
    limiter = limiter or FixedWindowRateLimiter(clock=FakeClock(start_ms=0))
    use_case = ProcessSubmissionUseCase(
        messaging=messaging,
        notification=notification,
        admission=AdmissionControl(limiter, limit=limit, window_seconds=3600),
        ops_log=OperationsLog(messaging, ops_channel),
        config=config
        or SubmissionConfig(workspace_id="T123", guild_group_id="S-GUILD"),
    )
    return use_case, messaging, notification


class TestSuccessfulSubmission:
    """Fluxo completo sem falhas."""

    @pytest.mark.asyncio
    async def test_happy_path(self) -> None:
        use_case, messaging, notification = _build()

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.status is SubmissionStatus.SUCCEEDED
        assert outcome.succeeded is True
        assert outcome.sanitized_company_name == "acme-corp"
        assert outcome.channel_name == BASE_NAME
        assert outcome.channel_id == "C0001"
        assert outcome.email_sent is True
        assert outcome.partial_failures == ()
        assert outcome.remaining_origin == 9
        assert outcome.remaining_identity == 9
        assert outcome.reset_at_ms == 3_600_000
        assert messaging.operations() == [
            "create_channel",
            "list_group_members",
            "invite_users",
            "invite_external_guest",
        ]

        recipient, params = notification.sent[0]
        assert recipient == "ana@acme.io"
        assert params.company_name == "Acme Corp"
        assert params.channel_name == BASE_NAME
        assert params.channel_url == "https://app.slack.com/client/T123/C0001"

    @pytest.mark.asyncio
    async def test_ops_log_messages(self) -> None:
        use_case, messaging, _ = _build()

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        texts = [text for _, text, _ in messaging.posted]
        assert texts[0] == (
            f'New submission {outcome.submission_id} from ana@acme.io for "Acme Corp" '
            "(identifier: acme-corp)"
        )
        assert texts[-1] == f"Submission successfully processed for ana@acme.io: #{BASE_NAME}"
        assert messaging.posted[-1][2] == "info"

    @pytest.mark.asyncio
    async def test_group_members_invited(self) -> None:
        use_case, messaging, _ = _build(FakeMessagingProvider(group_members=["UA", "UB"]))

        await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        invite = next(args for name, args in messaging.calls if name == "invite_users")
        assert invite == ("C0001", ("UA", "UB"))

    @pytest.mark.asyncio
    async def test_empty_group_skips_invite(self) -> None:
        use_case, messaging, _ = _build(FakeMessagingProvider(group_members=[]))

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert outcome.partial_failures == ()
        assert "invite_users" not in messaging.operations()

    def test_pipeline_order(self) -> None:
        use_case, _, _ = _build()
        assert use_case.pipeline.stage_names == STAGE_ORDER


class TestPartialFailures:
    """Falhas não fatais não derrubam a submissão."""

    @pytest.mark.asyncio
    async def test_guest_invite_failure(self) -> None:
        messaging = FakeMessagingProvider(
            failures={"invite_external_guest": Err.of("user_is_restricted")}
        )
        use_case, messaging, _ = _build(messaging)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.status is SubmissionStatus.SUCCEEDED
        assert outcome.partial_failures == (PartialFailure.GUEST_INVITE,)
        assert (
            "C-OPS",
            f"Guest invite failed for ana@acme.io on #{BASE_NAME}: user_is_restricted",
            "warn",
        ) in messaging.posted

    @pytest.mark.asyncio
    async def test_all_best_effort_steps_fail(self) -> None:
        messaging = FakeMessagingProvider(
            failures={
                "invite_users": Err.of("not_in_channel"),
                "invite_external_guest": Err.of("http_error", "HTTP 500: Server Error"),
            }
        )
        notification = FakeNotificationProvider(result=Err.of("missing_message_id"))
        use_case, messaging, _ = _build(messaging, notification)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert outcome.email_sent is False
        assert outcome.partial_failures == (
            PartialFailure.GROUP_INVITE,
            PartialFailure.GUEST_INVITE,
            PartialFailure.NOTIFICATION_EMAIL,
        )
        assert messaging.posted[1:] == [
            ("C-OPS", f"Group invite failed for #{BASE_NAME}: not_in_channel", "warn"),
            (
                "C-OPS",
                f"Guest invite failed for ana@acme.io on #{BASE_NAME}: "
                "http_error: HTTP 500: Server Error",
                "warn",
            ),
            ("C-OPS", "Notification email failed for ana@acme.io: missing_message_id", "warn"),
            (
                "C-OPS",
                f"Submission processed for ana@acme.io with #{BASE_NAME}. "
                "Partial failures: group invite, guest invite, notification email",
                "warn",
            ),
        ]

    @pytest.mark.asyncio
    async def test_collaborator_exception_counts_as_failure(self) -> None:
        notification = FakeNotificationProvider(error=TimeoutError("slow"))
        use_case, _, _ = _build(notification=notification)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert outcome.partial_failures == (PartialFailure.NOTIFICATION_EMAIL,)

    @pytest.mark.asyncio
    async def test_collaborator_raising_on_call_counts_as_failure(self) -> None:
        """Método que levanta antes de devolver o awaitable também vira Err."""

        class EagerlyFailingMessaging(FakeMessagingProvider):
            def invite_external_guest(self, email: str, channel_id: str) -> Any:
                raise ConnectionError("refused")

        use_case, messaging, _ = _build(EagerlyFailingMessaging())

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert outcome.partial_failures == (PartialFailure.GUEST_INVITE,)
        assert (
            "C-OPS",
            f"Guest invite failed for ana@acme.io on #{BASE_NAME}: "
            "unexpected_error: ConnectionError: refused",
            "warn",
        ) in messaging.posted

    @pytest.mark.asyncio
    async def test_ops_log_failure_never_propagates(self) -> None:
        messaging = FakeMessagingProvider(raises={"post_message": RuntimeError("down")})
        use_case, _, _ = _build(messaging)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True

    @pytest.mark.asyncio
    async def test_ops_log_disabled(self) -> None:
        use_case, messaging, _ = _build(ops_channel="")

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert messaging.posted == []


class TestChannelCreation:
    """Colisões de nome e falhas fatais."""

    @pytest.mark.asyncio
    async def test_name_collision_retries_with_suffix(self) -> None:
        taken = {BASE_NAME, f"{BASE_NAME}-2", f"{BASE_NAME}-3"}
        use_case, messaging, _ = _build(FakeMessagingProvider(taken_names=set(taken)))

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.succeeded is True
        assert outcome.channel_name == f"{BASE_NAME}-4"
        assert messaging.attempted_channel_names() == [
            BASE_NAME,
            f"{BASE_NAME}-2",
            f"{BASE_NAME}-3",
            f"{BASE_NAME}-4",
        ]

    @pytest.mark.asyncio
    async def test_collision_retries_exhausted(self) -> None:
        taken = {BASE_NAME} | {f"{BASE_NAME}-{n}" for n in range(2, 11)}
        use_case, messaging, notification = _build(FakeMessagingProvider(taken_names=taken))

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.status is SubmissionStatus.FAILED_UPSTREAM
        assert outcome.failure_reason is FailureReason.EXHAUSTED_COLLISION_RETRIES
        assert outcome.upstream_code == "name_taken"
        assert len(messaging.attempted_channel_names()) == 10
        assert notification.sent == []
        assert messaging.posted[-1] == (
            "C-OPS",
            "Channel creation failed for acme-corp: exhausted collision retries after 10 attempts",
            "error",
        )

    @pytest.mark.asyncio
    async def test_fatal_error_short_circuits(self) -> None:
        messaging = FakeMessagingProvider(
            failures={"create_channel": Err.of("restricted_action")}
        )
        use_case, messaging, notification = _build(messaging)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.status is SubmissionStatus.FAILED_UPSTREAM
        assert outcome.failure_reason is FailureReason.CHANNEL_CREATION_FAILED
        assert outcome.upstream_code == "restricted_action"
        assert messaging.operations() == ["create_channel"]
        assert notification.sent == []
        assert messaging.posted[-1] == (
            "C-OPS",
            "Channel creation failed for acme-corp: restricted_action",
            "error",
        )

    @pytest.mark.asyncio
    async def test_membership_failure_is_fatal(self) -> None:
        messaging = FakeMessagingProvider(
            failures={"list_group_members": Err.of("no_such_subteam")}
        )
        use_case, messaging, notification = _build(messaging)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.status is SubmissionStatus.FAILED_UPSTREAM
        assert outcome.failure_reason is FailureReason.GROUP_MEMBERSHIP_FAILED
        assert outcome.channel_id == "C0001"
        assert messaging.operations() == ["create_channel", "list_group_members"]
        assert notification.sent == []
        assert messaging.posted[-1] == (
            "C-OPS",
            f"Group membership fetch failed for #{BASE_NAME}: no_such_subteam",
            "error",
        )
        assert [severity for _, _, severity in messaging.posted] == ["info", "error"]

    @pytest.mark.asyncio
    async def test_rate_limited_failure_logs_retry_hint(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        messaging = FakeMessagingProvider(
            failures={"create_channel": Err.of("rate_limited", "HTTP 429", 30)}
        )
        use_case, _, _ = _build(messaging)

        with caplog.at_level("ERROR"):
            outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.failure_reason is FailureReason.CHANNEL_CREATION_FAILED
        record = next(r for r in caplog.records if r.getMessage() == "submission_failed_upstream")
        assert record.upstream_code == "rate_limited"
        assert record.retry_after_seconds == 30

    def test_suffixed_name_not_shortened(self) -> None:
        """Prefixo padrão + slug máximo já ocupa 80 chars; o sufixo excede."""
        config = SubmissionConfig()
        slug = "a" * 67

        assert len(config.channel_name_for_attempt(slug, 1)) == 80
        assert config.channel_name_for_attempt(slug, 2) == f"ext-theguild-{slug}-2"

    @pytest.mark.asyncio
    async def test_custom_prefix(self) -> None:
        config = SubmissionConfig(workspace_id="T1", guild_group_id="S1", channel_prefix="conf-")
        use_case, _, _ = _build(config=config)

        outcome = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")

        assert outcome.channel_name == "conf-acme-corp"

    @pytest.mark.asyncio
    async def test_contract_violation_raises(self) -> None:
        from utils.errors import CollaboratorContractError

        messaging = FakeMessagingProvider(failures={"create_channel": {"ok": True}})
        use_case, _, _ = _build(messaging)

        with pytest.raises(CollaboratorContractError):
            await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")


class TestRejections:
    """Validação e admissão rejeitam antes de qualquer chamada externa."""

    @pytest.mark.asyncio
    async def test_validation_rejection(self) -> None:
        use_case, messaging, _ = _build()

        outcome = await use_case.submit("", "bad", "1.2.3.4")

        assert outcome.status is SubmissionStatus.REJECTED_VALIDATION
        assert outcome.validation_errors == (
            "companyName: Company name is required",
            "email: Invalid email format",
        )
        assert messaging.calls == []

    @pytest.mark.asyncio
    async def test_origin_rate_limit(self) -> None:
        use_case, messaging, _ = _build(limit=1)

        first = await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")
        second = await use_case.submit("Other Co", "bob@other.io", "1.2.3.4")

        assert first.succeeded is True
        assert second.status is SubmissionStatus.REJECTED_RATE_LIMIT
        assert second.rate_limit is not None
        assert second.rate_limit.limit_type is RateLimitType.IP
        assert second.rate_limit.remaining == 0
        assert messaging.attempted_channel_names() == [BASE_NAME]

    @pytest.mark.asyncio
    async def test_identity_quota_untouched_by_earlier_rejections(self) -> None:
        """Identidade só é contada após validação e admissão de origem."""
        limiter = FixedWindowRateLimiter(clock=FakeClock(start_ms=0))
        use_case, _, _ = _build(limit=1, limiter=limiter)

        invalid = await use_case.submit("", "b@beta.io", "9.9.9.9")
        await use_case.submit("Acme Corp", "ana@acme.io", "1.1.1.1")
        blocked = await use_case.submit("Beta", "b@beta.io", "1.1.1.1")

        assert invalid.status is SubmissionStatus.REJECTED_VALIDATION
        assert blocked.status is SubmissionStatus.REJECTED_RATE_LIMIT
        assert blocked.rate_limit is not None
        assert blocked.rate_limit.limit_type is RateLimitType.IP
        assert limiter.get_status("email:b@beta.io", 1).count == 0
        assert limiter.get_status("ip:9.9.9.9", 1).count == 0

    @pytest.mark.asyncio
    async def test_identity_rate_limit(self) -> None:
        use_case, _, _ = _build(limit=1)

        await use_case.submit("Acme Corp", "ana@acme.io", "1.2.3.4")
        outcome = await use_case.submit("Acme Corp", "ANA@acme.io", "5.6.7.8")

        assert outcome.status is SubmissionStatus.REJECTED_RATE_LIMIT
        assert outcome.rate_limit is not None
        assert outcome.rate_limit.limit_type is RateLimitType.EMAIL
        assert outcome.rate_limit.reset_at_ms == 3_600_000

    @pytest.mark.asyncio
    async def test_pre_admitted_origin_not_counted_twice(self) -> None:
        use_case, _, _ = _build(limit=2)

        decision = use_case.admit_origin("1.2.3.4")
        outcome = await use_case.submit_payload(
            {"companyName": "Acme Corp", "email": "ana@acme.io"},
            "1.2.3.4",
            origin_decision=decision,
        )

        assert outcome.remaining_origin == 1
        assert use_case.admit_origin("1.2.3.4").remaining == 0


class TestPreview:
    def test_preview_sanitize(self) -> None:
        use_case, messaging, _ = _build(limit=0)

        preview = use_case.preview_sanitize("Café 🚀!")

        assert preview.ok is True
        assert preview.sanitized_company_name == "cafe"
        assert messaging.calls == []

    def test_preview_invalid(self) -> None:
        use_case, _, _ = _build()

        preview = use_case.preview_payload({"companyName": 12})

        assert preview.ok is False
        assert preview.validation_errors == ["companyName: Expected string"]
