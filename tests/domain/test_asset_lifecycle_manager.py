"""Unit tests for the AssetLifecycleManager domain service."""

import pytest

from itam.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    InvalidTransitionError,
    OperationTimeoutError,
    ValidationError,
)
from itam.domain.model.asset import Asset, AssetStatus
from itam.domain.model.events import StatusChanged
from itam.domain.service.asset_lifecycle_manager import AssetLifecycleManager
from itam.domain.service.event_publisher import EventPublisher
from itam.infrastructure.persistence.memory import InMemoryAssetRepository
from tests.fakes import (
    FIXED_NOW,
    FailingAuditSink,
    RacingStore,
    RecordingAuditSink,
    RecordingNotificationSink,
    fixed_clock,
)


def _setup(status=AssetStatus.EXPECTED, owner_id=None, repo_wrapper=None):
    """Build a manager over one asset 'LT-001' in the given status."""
    repo = InMemoryAssetRepository([
        Asset(id="LT-001", name="ThinkPad", status=status, owner_id=owner_id),
    ])
    audit = RecordingAuditSink()
    notifications = RecordingNotificationSink()
    store = repo_wrapper(repo) if repo_wrapper else repo
    manager = AssetLifecycleManager(
        store, EventPublisher(audit, notifications), clock=fixed_clock
    )
    return manager, repo, audit, notifications


class TestRequestTransitionHappyPath:

    def test_legal_edge_updates_status(self):
        manager, repo, _, _ = _setup()
        result = manager.request_transition("LT-001", AssetStatus.RECEIVED, actor="alice")
        assert result == AssetStatus.RECEIVED
        assert repo.get("LT-001").status == AssetStatus.RECEIVED
        assert repo.get("LT-001").version == 1

    def test_emits_status_changed(self):
        manager, _, audit, _ = _setup()
        manager.request_transition("LT-001", "Received", actor="alice", reason="dock 4")

        (event,) = audit.events
        assert isinstance(event, StatusChanged)
        assert event.asset_id == "LT-001"
        assert event.from_status == AssetStatus.EXPECTED
        assert event.to_status == AssetStatus.RECEIVED
        assert event.actor == "alice"
        assert event.reason == "dock 4"
        assert event.timestamp == FIXED_NOW

    def test_full_lifecycle_walk(self):
        manager, repo, audit, _ = _setup()
        for target in ["Received", "Staged", "In Service", "Repair", "In Service",
                       "Retired", "Disposed"]:
            manager.request_transition("LT-001", target)
        assert repo.get("LT-001").status == AssetStatus.DISPOSED
        assert len(audit.events) == 7


class TestIdempotentTransition:

    def test_same_status_twice_emits_once(self):
        manager, _, audit, _ = _setup(status=AssetStatus.RECEIVED)
        manager.request_transition("LT-001", AssetStatus.STAGED)
        manager.request_transition("LT-001", AssetStatus.STAGED)
        assert len(audit.of_type(StatusChanged)) == 1

    def test_current_status_is_a_no_op(self):
        manager, repo, audit, _ = _setup(status=AssetStatus.IN_SERVICE)
        assert manager.request_transition("LT-001", "In Service") == AssetStatus.IN_SERVICE
        assert manager.request_transition("LT-001", "In Service") == AssetStatus.IN_SERVICE
        assert repo.get("LT-001").version == 0
        assert audit.events == []

    def test_retried_disposal_succeeds(self):
        manager, _, audit, _ = _setup(status=AssetStatus.DISPOSED)
        assert manager.request_transition("LT-001", "Disposed") == AssetStatus.DISPOSED
        assert audit.events == []


class TestIllegalTransitions:

    @pytest.mark.parametrize("actor,reason", [
        (None, None),
        ("admin", "restock"),
        ("root", "override"),
    ])
    def test_retired_to_staged_always_rejected(self, actor, reason):
        manager, repo, audit, _ = _setup(status=AssetStatus.RETIRED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            manager.request_transition("LT-001", "Staged", actor=actor, reason=reason)

        err = exc_info.value
        assert err.current == AssetStatus.RETIRED
        assert err.target == AssetStatus.STAGED
        assert err.valid_next_states == (AssetStatus.DISPOSED,)
        assert repo.get("LT-001").status == AssetStatus.RETIRED
        assert audit.events == []

    def test_message_lists_valid_next_states(self):
        manager, _, _, _ = _setup(status=AssetStatus.REPAIR)
        with pytest.raises(InvalidTransitionError, match="In Service, Retired"):
            manager.request_transition("LT-001", "Staged")

    def test_disposed_is_terminal(self):
        manager, _, _, _ = _setup(status=AssetStatus.DISPOSED)
        with pytest.raises(InvalidTransitionError, match="none") as exc_info:
            manager.request_transition("LT-001", "Retired")
        assert exc_info.value.valid_next_states == ()

    def test_unknown_status_rejected(self):
        manager, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown asset status"):
            manager.request_transition("LT-001", "Lost")

    def test_missing_asset_rejected(self):
        manager, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            manager.request_transition("NOPE", "Received")

    def test_archived_asset_rejected(self):
        manager, repo, _, _ = _setup()
        asset = repo.get("LT-001")
        repo.compare_and_swap("LT-001", asset, asset.archive())
        with pytest.raises(ValidationError, match="archived"):
            manager.request_transition("LT-001", "Received")


class TestConcurrency:

    def test_lost_swap_is_a_conflict_and_not_retried(self):
        wrapper = {}

        def racing(repo):
            wrapper["store"] = RacingStore(repo, races=1)
            return wrapper["store"]

        manager, repo, audit, _ = _setup(repo_wrapper=racing)
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            manager.request_transition("LT-001", "Received")

        assert exc_info.value.retryable
        assert wrapper["store"].swap_attempts == 1
        assert repo.get("LT-001").status == AssetStatus.EXPECTED
        assert audit.events == []

    def test_competing_writer_wins(self):
        def competitor(inner, asset_id):
            current = inner.get(asset_id)
            inner.compare_and_swap(asset_id, current, current.with_status(AssetStatus.RECEIVED))

        manager, repo, _, _ = _setup(
            repo_wrapper=lambda r: RacingStore(r, races=1, interfere=competitor)
        )
        with pytest.raises(ConcurrencyConflictError):
            manager.request_transition("LT-001", "Received")
        # The competitor's write stands; retrying is now an idempotent success
        assert repo.get("LT-001").status == AssetStatus.RECEIVED
        assert manager.request_transition("LT-001", "Received") == AssetStatus.RECEIVED

    def test_expired_timeout_has_no_effect(self):
        manager, repo, audit, _ = _setup()
        with pytest.raises(OperationTimeoutError):
            manager.request_transition("LT-001", "Received", timeout=0)
        assert repo.get("LT-001").status == AssetStatus.EXPECTED
        assert audit.events == []


class TestSideEffects:

    def test_retirement_releases_owner_and_notifies(self):
        manager, repo, _, notifications = _setup(
            status=AssetStatus.IN_SERVICE, owner_id="bob"
        )
        manager.request_transition("LT-001", "Retired")

        assert repo.get("LT-001").owner_id is None
        (user, payload) = notifications.sent[0]
        assert user == "bob"
        assert payload["to"] == "Retired"

    def test_repair_keeps_owner(self):
        manager, repo, _, notifications = _setup(
            status=AssetStatus.IN_SERVICE, owner_id="bob"
        )
        manager.request_transition("LT-001", "Repair")
        assert repo.get("LT-001").owner_id == "bob"
        assert len(notifications.sent) == 1

    def test_no_owner_no_notification(self):
        manager, _, _, notifications = _setup(status=AssetStatus.IN_SERVICE)
        manager.request_transition("LT-001", "Repair")
        assert notifications.sent == []

    def test_audit_failure_does_not_roll_back(self):
        repo = InMemoryAssetRepository([Asset(id="LT-001", name="ThinkPad")])
        manager = AssetLifecycleManager(repo, EventPublisher(FailingAuditSink()))
        manager.request_transition("LT-001", "Received")
        assert repo.get("LT-001").status == AssetStatus.RECEIVED


class TestValidNextStates:

    def test_repair_offers_in_service_and_retired(self):
        manager, _, _, _ = _setup(status=AssetStatus.REPAIR)
        assert set(manager.get_valid_next_states("LT-001")) == {
            AssetStatus.IN_SERVICE,
            AssetStatus.RETIRED,
        }

    def test_ordered_by_lifecycle(self):
        manager, _, _, _ = _setup(status=AssetStatus.IN_SERVICE)
        assert manager.get_valid_next_states("LT-001") == [
            AssetStatus.REPAIR,
            AssetStatus.RETIRED,
        ]

    def test_matches_what_the_mutator_accepts(self):
        for status in AssetStatus:
            manager, _, _, _ = _setup(status=status)
            offered = set(manager.get_valid_next_states("LT-001"))
            for target in AssetStatus:
                if target == status:
                    continue
                manager, _, _, _ = _setup(status=status)
                if target in offered:
                    manager.request_transition("LT-001", target)
                else:
                    with pytest.raises(InvalidTransitionError):
                        manager.request_transition("LT-001", target)

    def test_missing_asset(self):
        manager, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            manager.get_valid_next_states("NOPE")
