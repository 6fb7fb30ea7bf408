"""
Entity Tests

🧪 Local state, change notification and the fetch/save protocol. Remote
outcomes are delivered through ``change``/``error`` events once the task
returned by ``fetch``/``save`` settles.
"""

import asyncio
import logging

import pytest

from starbind import (
    Entity, EntityEvent, MissingIdentifierError, RemoteError, RemoteResponse, UNDEFINED,
)


class Post(Entity):
    resource_url = "/posts"


class TestEntityState:

    def test_build_does_not_touch_the_network(self, remote):
        post = Post.build({"title": "Hello"}, remote=remote)

        assert post.get("title") == "Hello"
        assert remote.mock_calls == []

    def test_build_requires_a_resource_url(self, remote):
        with pytest.raises(ValueError):
            Entity.build({}, remote=remote)

    def test_build_with_explicit_resource_url(self, remote):
        entity = Entity.build({}, remote=remote, resource_url="/things")

        assert entity.sync.resource_url == "/things"

    def test_unset_attribute_is_undefined(self, remote):
        post = Post.build({}, remote=remote)

        assert post.get("title") is UNDEFINED
        assert post.is_new

    def test_set_merges_attributes(self, remote):
        post = Post.build({"title": "Hello", "votes": 1}, remote=remote)

        post.set({"votes": 2})

        assert post.get_all() == {"title": "Hello", "votes": 2}

    def test_every_set_emits_one_change(self, remote, recorder_factory):
        post = Post.build({"title": "Hello"}, remote=remote)
        change = recorder_factory()
        post.on(EntityEvent.CHANGE, change)

        post.set({"title": "Hello"})
        post.set({"title": "Hello"})

        assert change.count == 2
        assert change.calls == [(), ()]

    def test_custom_events_are_delegated(self, remote, recorder_factory):
        post = Post.build({}, remote=remote)
        handler = recorder_factory()

        post.on("published", handler)
        post.trigger("published", "now")
        post.off("published", handler)
        post.trigger("published", "again")

        assert handler.calls == [("now",)]

    def test_none_id_counts_as_missing(self, remote):
        post = Post.build({"id": None}, remote=remote)

        assert post.is_new
        with pytest.raises(MissingIdentifierError):
            post.fetch()


class TestEntityFetch:

    def test_fetch_without_id_raises_synchronously(self, remote):
        post = Post.build({}, remote=remote)

        with pytest.raises(MissingIdentifierError):
            post.fetch()

        remote.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_merges_the_record_and_emits_change(self, remote, recorder_factory):
        remote.get.return_value = RemoteResponse(data={"id": 1, "title": "Hello", "votes": 3})
        post = Post.build({"id": 1, "draft": True}, remote=remote)
        change, error = recorder_factory(), recorder_factory()
        post.on("change", change)
        post.on("error", error)

        task = post.fetch()
        remote.get.assert_called_once_with("/posts/1")
        assert change.count == 0

        result = await task

        assert result == {"id": 1, "title": "Hello", "votes": 3}
        assert post.get("title") == "Hello"
        assert post.get("votes") == 3
        assert post.get("draft") is True
        assert change.count == 1
        assert error.count == 0

    @pytest.mark.asyncio
    async def test_fetch_failure_emits_error_without_change(self, remote, recorder_factory, caplog):
        failure = RemoteError("GET /posts/1 returned 404", method="GET", url="/posts/1", status_code=404)
        remote.get.side_effect = failure
        post = Post.build({"id": 1}, remote=remote)
        change, error = recorder_factory(), recorder_factory()
        post.on("change", change)
        post.on("error", error)

        with caplog.at_level(logging.WARNING, logger="starbind.entities.entity"):
            result = await post.fetch()

        assert result is None
        assert error.calls == [(failure,)]
        assert change.count == 0
        assert "GET /posts/1 failed" in caplog.text

    @pytest.mark.asyncio
    async def test_fetch_rejects_non_object_payload(self, remote, recorder_factory):
        remote.get.return_value = RemoteResponse(data=["not", "a", "record"])
        post = Post.build({"id": 1}, remote=remote)
        change, error = recorder_factory(), recorder_factory()
        post.on("change", change)
        post.on("error", error)

        await post.fetch()

        assert change.count == 0
        failure = error.calls[0][0]
        assert isinstance(failure, RemoteError)
        assert (failure.method, failure.url) == ("GET", "/posts/1")
        assert post.get_all() == {"id": 1}

    @pytest.mark.asyncio
    async def test_save_non_object_payload_names_the_put(self, remote, recorder_factory):
        remote.put.return_value = RemoteResponse(data="ok")
        post = Post.build({"id": 4}, remote=remote)
        error = recorder_factory()
        post.on("error", error)

        await post.save()

        failure = error.calls[0][0]
        assert (failure.method, failure.url) == ("PUT", "/posts/4")


class TestEntitySave:

    @pytest.mark.asyncio
    async def test_save_new_entity_posts_and_takes_assigned_id(self, remote, recorder_factory):
        remote.post.return_value = RemoteResponse(status_code=201, data={"id": 6, "title": "Hello"})
        post = Post.build({"title": "Hello"}, remote=remote)
        change = recorder_factory()
        post.on("change", change)

        task = post.save()
        remote.post.assert_called_once_with("/posts", {"title": "Hello"})

        await task

        assert post.get("id") == 6
        assert not post.is_new
        assert change.count == 1

    @pytest.mark.asyncio
    async def test_save_existing_entity_puts_full_attributes(self, remote):
        data = {"id": 6, "title": "Hello", "votes": 2}
        remote.put.return_value = RemoteResponse(data=data)
        post = Post.build(data, remote=remote)

        await post.save()

        remote.put.assert_called_once_with("/posts/6", data)
        remote.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure_is_reported_only_through_error(self, remote, recorder_factory):
        failure = RemoteError("PUT /posts/6 returned 500", method="PUT", url="/posts/6",
                              status_code=500, data={"detail": "error"})
        remote.put.side_effect = failure
        post = Post.build({"id": 6, "title": "Hello"}, remote=remote)
        change, error = recorder_factory(), recorder_factory()
        post.on("change", change)
        post.on("error", error)

        result = await post.save()

        assert result is None
        assert error.calls == [(failure,)]
        assert change.count == 0
        assert post.get_all() == {"id": 6, "title": "Hello"}

    @pytest.mark.asyncio
    async def test_empty_response_still_emits_change(self, remote, recorder_factory):
        remote.put.return_value = RemoteResponse(status_code=204)
        post = Post.build({"id": 2}, remote=remote)
        change = recorder_factory()
        post.on("change", change)

        assert await post.save() == {}
        assert change.count == 1

    @pytest.mark.asyncio
    async def test_pending_tracks_in_flight_calls(self, remote):
        release = asyncio.Event()

        async def slow_put(url, body):
            await release.wait()
            return RemoteResponse(data=body)

        remote.put.side_effect = slow_put
        post = Post.build({"id": 1}, remote=remote)

        task = post.save()
        await asyncio.sleep(0)
        assert post.pending == 1

        release.set()
        await task
        assert post.pending == 0

    @pytest.mark.asyncio
    async def test_overlapping_saves_last_settled_wins(self, remote):
        first_done, second_done = asyncio.Event(), asyncio.Event()
        gates = iter([first_done, second_done])

        async def put(url, body):
            gate = next(gates)
            await gate.wait()
            return RemoteResponse(data={"title": body["title"]})

        remote.put.side_effect = put
        post = Post.build({"id": 1, "title": "first"}, remote=remote)

        first = post.save()
        post.set({"title": "second"})
        second = post.save()
        await asyncio.sleep(0)

        second_done.set()
        await second
        first_done.set()
        await first

        assert post.get("title") == "first"

    @pytest.mark.asyncio
    async def test_error_handler_failure_does_not_escape_the_task(self, remote):
        remote.put.side_effect = RemoteError("boom", method="PUT", url="/posts/1")
        post = Post.build({"id": 1}, remote=remote)

        def broken(error):
            raise RuntimeError("handler bug")

        post.on("error", broken)

        assert await post.save() is None

    @pytest.mark.asyncio
    async def test_request_goes_out_when_the_task_first_runs(self, memory_remote):
        post = Post.build({"title": "Hello"}, remote=memory_remote)

        task = post.save()
        assert memory_remote.calls == []

        await asyncio.sleep(0)
        assert memory_remote.calls == [("POST", "/posts", {"title": "Hello"})]

        await task
        assert post.get("id") == 1

    @pytest.mark.asyncio
    async def test_save_with_none_id_creates_without_sending_it(self, memory_remote):
        post = Post.build({"id": None, "title": "Hello"}, remote=memory_remote)

        await post.save()

        assert memory_remote.calls == [("POST", "/posts", {"title": "Hello"})]
        assert post.get("id") == 1
