import pytest
from unittest.mock import AsyncMock, MagicMock

from social_clients import SendResult
from twitter_mcp.dispatcher import ToolCall
from twitter_mcp.errors import UpstreamError, ValidationError
from twitter_mcp.thread import ThreadItem, create_thread, extract_post_id


def sent(post_id):
    return SendResult(ok=True, payload={"data": {"id": post_id}})


def test_extract_post_id_from_api_payload():
    assert extract_post_id({"data": {"id": "123", "text": "hi"}}) == "123"


def test_extract_post_id_from_graphql_payload():
    payload = {"data": {"create_tweet": {"tweet_results": {"result": {"rest_id": "456"}}}}}
    assert extract_post_id(payload) == "456"


def test_extract_post_id_missing():
    assert extract_post_id({"data": {}}) is None
    assert extract_post_id({}) is None


@pytest.mark.asyncio
async def test_thread_posts_reply_chain_in_order():
    client = MagicMock()
    client.send_post = AsyncMock(side_effect=[sent("1"), sent("2"), sent("3")])

    ids = await create_thread(client, [ThreadItem("A"), ThreadItem("B"), ThreadItem("C")])

    assert ids == ["1", "2", "3"]
    calls = client.send_post.await_args_list
    assert [c.args[0] for c in calls] == ["A", "B", "C"]
    assert [c.kwargs["reply_to"] for c in calls] == [None, "1", "2"]


@pytest.mark.asyncio
async def test_thread_stops_at_first_failed_step():
    client = MagicMock()
    client.send_post = AsyncMock(side_effect=[sent("1"), RuntimeError("rate limited"), sent("3")])

    with pytest.raises(UpstreamError) as excinfo:
        await create_thread(client, [ThreadItem("A"), ThreadItem("B"), ThreadItem("C")])

    assert "step 2 of 3" in str(excinfo.value)
    assert "rate limited" in str(excinfo.value)
    assert "already posted: 1" in str(excinfo.value)
    assert client.send_post.await_count == 2


@pytest.mark.asyncio
async def test_thread_rejected_post_fails_the_step():
    client = MagicMock()
    client.send_post = AsyncMock(side_effect=[SendResult(ok=False, error="duplicate content")])

    with pytest.raises(UpstreamError, match="step 1 of 2: duplicate content"):
        await create_thread(client, [ThreadItem("A"), ThreadItem("B")])


@pytest.mark.asyncio
async def test_thread_response_without_id_fails_the_step():
    client = MagicMock()
    client.send_post = AsyncMock(side_effect=[sent("1"), SendResult(ok=True, payload={"data": {}})])

    with pytest.raises(UpstreamError, match="failed to get tweet ID from response"):
        await create_thread(client, [ThreadItem("A"), ThreadItem("B")])


@pytest.mark.asyncio
async def test_thread_needs_two_items():
    client = MagicMock()
    client.send_post = AsyncMock()

    with pytest.raises(ValidationError, match="at least 2 tweets"):
        await create_thread(client, [ThreadItem("A")])
    client.send_post.assert_not_called()


@pytest.mark.asyncio
async def test_create_thread_tool_success(dispatcher, client):
    client.send_post.side_effect = [sent("10"), sent("11")]

    envelope = await dispatcher.dispatch(ToolCall("create_thread", {"tweets": [{"text": "one"}, {"text": "two"}]}))

    assert envelope.text == "Successfully created thread with 2 tweets. First tweet ID: 10"


@pytest.mark.asyncio
async def test_create_thread_tool_single_item(dispatcher, client):
    envelope = await dispatcher.dispatch(ToolCall("create_thread", {"tweets": [{"text": "lonely"}]}))

    assert envelope.text == "Error: A thread must contain at least 2 tweets"
    client.send_post.assert_not_called()


@pytest.mark.asyncio
async def test_create_thread_tool_item_without_text(dispatcher, client):
    envelope = await dispatcher.dispatch(ToolCall("create_thread", {"tweets": [{"text": "one"}, {"media": []}]}))

    assert envelope.text == "Error: Tweet 2 in thread is missing text"
    client.send_post.assert_not_called()


@pytest.mark.asyncio
async def test_create_thread_tool_reports_failed_step(dispatcher, client):
    client.send_post.side_effect = [sent("10"), RuntimeError("boom"), sent("12")]
    tweets = [{"text": "one"}, {"text": "two"}, {"text": "three"}]

    envelope = await dispatcher.dispatch(ToolCall("create_thread", {"tweets": tweets}))

    assert envelope.text == "Error: Failed to create tweet in thread at step 2 of 3: boom (already posted: 10)"
    assert client.send_post.await_count == 2
