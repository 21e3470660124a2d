# -*- coding: utf-8 -*-
"""
Service layer tests: label service validation, profile bootstrap and
in-memory store behaviour under concurrent requests.

Run with: pytest tests/test_services.py -v
"""

import threading

import pytest
from unittest.mock import MagicMock

from helpdesk.database.memory_store import MemoryStore
from helpdesk.errors import ConflictError, NotFoundError, ValidationError
from helpdesk.service.label_service import LabelService
from helpdesk.service.profile_service import ProfileService
from helpdesk.utils.constants import DEV_USER_ID
from helpdesk.utils.dependency_container import DependencyContainer

from conftest import ADMIN_ID, USER_ID, make_profile


class TestLabelService:

    def test_associate_passes_through_to_store(self):
        store = MagicMock()
        LabelService(store).associate("T1", "L1")
        store.create_association.assert_called_once_with("T1", "L1")

    @pytest.mark.parametrize("value", [None, "", "  ", 12, ["L1"]])
    def test_associate_rejects_missing_label_id(self, value):
        store = MagicMock()

        with pytest.raises(ValidationError) as exc:
            LabelService(store).associate("T1", value)

        assert exc.value.message == "labelId is required"
        store.create_association.assert_not_called()

    def test_padded_label_id_is_stripped(self):
        store = MagicMock()
        service = LabelService(store)

        service.associate("T1", " L1 ")
        service.disassociate("T1", "L1\n")

        store.create_association.assert_called_once_with("T1", "L1")
        store.delete_association.assert_called_once_with("T1", "L1")

    def test_disassociate_rejects_missing_label_id(self):
        store = MagicMock()

        with pytest.raises(ValidationError):
            LabelService(store).disassociate("T1", None)

        store.delete_association.assert_not_called()

    def test_create_label_strips_whitespace(self):
        store = MemoryStore()
        label = LabelService(store).create_label("  billing ", " #f59e0b")
        assert (label.name, label.color) == ("billing", "#f59e0b")

    def test_delete_label_requires_id(self):
        with pytest.raises(ValidationError) as exc:
            LabelService(MagicMock()).delete_label("")
        assert exc.value.message == "ID is required"


class TestProfileService:

    def test_existing_profile_is_returned(self):
        store = MagicMock()
        store.find_by_id.return_value = make_profile(ADMIN_ID, "ADMIN")

        assert ProfileService(store).is_admin(ADMIN_ID) is True
        store.create.assert_not_called()

    def test_first_visit_creates_user_profile(self):
        store = MemoryStore()

        profile = ProfileService(store).get_or_create(USER_ID)

        assert profile.role == "USER"
        assert store.find_by_id(USER_ID) is profile

    def test_concurrent_creation_reloads_winner(self):
        winner = make_profile(USER_ID, "USER")
        store = MagicMock()
        store.find_by_id.side_effect = [None, winner]
        store.create.side_effect = ConflictError("Profile already exists")

        assert ProfileService(store).get_or_create(USER_ID) is winner


class TestMemoryStore:

    def test_seed(self):
        store = MemoryStore(seed=True)
        assert store.find_by_id(DEV_USER_ID).is_admin
        assert [label.name for label in store.list_labels()] == ["bug", "feature"]

    def test_reset(self):
        store = MemoryStore(seed=True)
        store.create_association("T1", store.list_labels()[0].id)

        store.reset()

        assert store.profiles == {}
        assert store.list_labels() == []
        assert store.associations == []

    def test_returned_association_is_detached_from_store(self):
        store = MemoryStore()
        association = store.create_association("T1", "L1")
        association.label_id = "L2"
        assert store.associations[0].label_id == "L1"



class TestDependencyContainer:

    def test_factory_builds_once_on_first_access(self):
        container = DependencyContainer()
        factory = MagicMock(return_value="store")
        container.register_factory("label_store", factory)

        assert container.get_service("label_store") == "store"
        assert container.get_service("label_store") == "store"
        factory.assert_called_once_with(container)

    def test_unknown_service_raises(self):
        with pytest.raises(KeyError):
            DependencyContainer().get_service("missing")

    def test_public_surface(self):
        assert [name for name in vars(DependencyContainer) if not name.startswith("_")] == [
            "register_service", "register_factory", "get_service", "init_app",
        ]

def run_concurrently(count, func):
    """Start `count` threads calling func() together; return (successes, errors)."""
    barrier = threading.Barrier(count)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            outcome = func()
        except Exception as e:
            outcome = e
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    errors = [r for r in results if isinstance(r, Exception)]
    return len(results) - len(errors), errors


class TestMemoryStoreConcurrency:
    """Under concurrent requests exactly one create and one delete of a pair wins."""

    THREADS = 20

    def test_concurrent_creates_store_one_association(self):
        store = MemoryStore()

        successes, errors = run_concurrently(self.THREADS, lambda: store.create_association("T1", "L1"))

        assert successes == 1
        assert len(errors) == self.THREADS - 1
        assert all(isinstance(e, ConflictError) for e in errors)
        assert len(store.associations) == 1

    def test_concurrent_deletes_remove_once(self):
        store = MemoryStore()
        store.create_association("T1", "L1")

        successes, errors = run_concurrently(self.THREADS, lambda: store.delete_association("T1", "L1"))

        assert successes == 1
        assert len(errors) == self.THREADS - 1
        assert all(isinstance(e, NotFoundError) for e in errors)
        assert store.associations == []

    def test_listing_while_labels_are_deleted(self):
        store = MemoryStore()
        labels = [store.create_label(f"label-{i}", "#000000") for i in range(self.THREADS)]
        for label in labels:
            store.create_association("T1", label.id)
        pending = labels[::2]
        pending_lock = threading.Lock()

        def delete_or_list():
            with pending_lock:
                label = pending.pop() if pending else None
            if label:
                store.delete_label(label.id)
            return store.list_associations("T1"), store.list_labels()

        successes, errors = run_concurrently(self.THREADS, delete_or_list)

        assert errors == []
        assert successes == self.THREADS
        remaining = {label.id for label in store.list_labels()}
        assert {a.label_id for a in store.list_associations("T1")} == remaining
