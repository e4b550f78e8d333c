"""Tests for mutations and toasts (F2)."""

import pytest

from lms_dashboard.query.client import Mutation
from lms_dashboard.query.toast import Toast, Toaster


class TestToaster:
    """Tests for the toast queue."""

    def test_success_toast(self):
        toaster = Toaster()
        toast = toaster.success("Course created successfully")
        assert toast.title == "Success"
        assert toast.description == "Course created successfully"
        assert not toast.is_error
        assert toaster.last is toast

    def test_error_toast_is_destructive(self):
        toaster = Toaster()
        toast = toaster.error("Failed to create course")
        assert toast.title == "Error"
        assert toast.variant == "destructive"
        assert toast.is_error

    def test_custom_error_title_and_duration(self):
        toaster = Toaster()
        toast = toaster.error("Already taken", title="Email Already Exists", duration=5000)
        assert toast.title == "Email Already Exists"
        assert toast.duration == 5000

    def test_listener_receives_toasts(self):
        received: list[Toast] = []
        toaster = Toaster(listener=received.append)
        toaster.success("one")
        toaster.error("two")
        assert [t.description for t in received] == ["one", "two"]

    def test_queue_is_bounded(self):
        toaster = Toaster(limit=2)
        for i in range(3):
            toaster.success(str(i))
        assert [t.description for t in toaster.toasts] == ["1", "2"]

    def test_dismiss_all(self):
        toaster = Toaster()
        toaster.success("x")
        toaster.dismiss_all()
        assert toaster.toasts == []
        assert toaster.last is None


class TestMutation:
    """Tests for Mutation lifecycle callbacks."""

    @pytest.mark.asyncio
    async def test_success_calls_on_success(self):
        calls = []

        async def create(name):
            return {"id": "c1", "name": name}

        mutation = Mutation(create, on_success=lambda data, v: calls.append((data, v)))
        data = await mutation.mutate_async("Algebra")

        assert data == {"id": "c1", "name": "Algebra"}
        assert calls == [(data, "Algebra")]
        assert mutation.data == data
        assert not mutation.is_pending

    @pytest.mark.asyncio
    async def test_mutate_async_reraises_after_on_error(self):
        errors = []

        async def create(name):
            raise ValueError("duplicate code")

        mutation = Mutation(create, on_error=lambda e, v: errors.append(str(e)))
        with pytest.raises(ValueError, match="duplicate code"):
            await mutation.mutate_async("Algebra")

        assert errors == ["duplicate code"]
        assert isinstance(mutation.error, ValueError)
        assert not mutation.is_pending

    @pytest.mark.asyncio
    async def test_mutate_swallows(self):
        errors = []

        async def create(name):
            raise ValueError("nope")

        mutation = Mutation(create, on_error=lambda e, v: errors.append(e))
        assert await mutation.mutate("x") is None
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_pending_while_running(self):
        seen = []

        async def create(name):
            seen.append(mutation.is_pending)
            return name

        mutation = Mutation(create)
        await mutation.mutate_async("x")
        assert seen == [True]

    @pytest.mark.asyncio
    async def test_reset(self):
        async def create(name):
            return name

        mutation = Mutation(create)
        await mutation.mutate_async("x")
        mutation.reset()
        assert mutation.data is None
        assert mutation.error is None
