"""End-to-end tool behaviour through the dispatcher, against a fake upstream client."""
import base64
import json
from datetime import datetime, timezone

import pytest

from social_clients import Page, SendResult
from twitter_mcp.dispatcher import ToolCall
from twitter_mcp.tools.tweets import SCAN_LIMIT

from conftest import AsyncItems, make_post, make_profile

pytestmark = pytest.mark.asyncio

PNG = base64.b64encode(b"\x89PNG fake image").decode()


async def call(dispatcher, name, **arguments):
    return await dispatcher.dispatch(ToolCall(name, arguments))


# ── Reading ───────────────────────────────────────────────────────────────────

async def test_get_tweets_normalizes_username(dispatcher, client):
    client.iter_user_posts.side_effect = lambda user_id, page_size: AsyncItems([make_post(1), make_post(2)])

    envelope = await call(dispatcher, "get_tweets", username=" @alice ", count=5)

    client.get_user_id.assert_awaited_once_with("alice")
    records = json.loads(envelope.text)
    assert [r["id"] for r in records] == ["1", "2"]


async def test_get_tweets_skips_posts_without_timestamp(dispatcher, client):
    client.iter_user_posts.side_effect = lambda user_id, page_size: AsyncItems([make_post(1, created_at=None), make_post(2)])

    envelope = await call(dispatcher, "get_tweets", username="alice")

    assert [r["id"] for r in json.loads(envelope.text)] == ["2"]


async def test_get_tweets_date_filter(dispatcher, client):
    posts = [
        make_post(1, created_at=datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)),
        make_post(2, created_at=datetime(2024, 3, 1, 23, 0, tzinfo=timezone.utc)),
        make_post(3, created_at=datetime(2024, 3, 1, 1, 0, tzinfo=timezone.utc)),
    ]
    client.iter_user_posts.side_effect = lambda user_id, page_size: AsyncItems(posts)

    envelope = await call(dispatcher, "get_tweets", username="alice", date="2024-03-01")

    assert [r["id"] for r in json.loads(envelope.text)] == ["2", "3"]


async def test_get_tweets_date_filter_accepts_unpadded_date(dispatcher, client):
    posts = [
        make_post(1, created_at=datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)),
        make_post(2, created_at=datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)),
    ]
    client.iter_user_posts.side_effect = lambda user_id, page_size: AsyncItems(posts)

    envelope = await call(dispatcher, "get_tweets", username="alice", date="2024-3-1")

    assert [r["id"] for r in json.loads(envelope.text)] == ["1"]
    assert client.iter_user_posts.call_args.kwargs["page_size"] == 50


async def test_get_tweets_stops_on_endless_undated_timeline(dispatcher, client):
    pulled = []

    async def undated_forever(user_id, page_size):
        while True:
            pulled.append(1)
            yield make_post(len(pulled), created_at=None)

    client.iter_user_posts.side_effect = undated_forever

    envelope = await call(dispatcher, "get_tweets", username="alice", count=5)

    assert envelope.text == "No tweets found for user @alice"
    assert len(pulled) == SCAN_LIMIT


async def test_page_size_follows_requested_count(dispatcher, client):
    await call(dispatcher, "get_tweets", username="alice", count=7)
    await call(dispatcher, "get_timeline", timeline_type="user", username="alice", count=3)
    await call(dispatcher, "get_user_relationships", username="alice", relationship_type="followers", count=20)

    assert [c.kwargs["page_size"] for c in client.iter_user_posts.call_args_list] == [7, 3]
    assert client.iter_followers.call_args.kwargs["page_size"] == 20


async def test_get_tweets_empty(dispatcher):
    envelope = await call(dispatcher, "get_tweets", username="alice")

    assert envelope.text == "No tweets found for user @alice"
    assert not envelope.is_error


async def test_search_with_date_matching_nothing(dispatcher, client):
    client.search_posts.side_effect = lambda query, mode, page_size: AsyncItems([make_post(1), make_post(2)])

    envelope = await call(dispatcher, "search_tweets", query="#python", date="2020-01-01")

    assert envelope.text == "No tweets found for query: #python on 2020-01-01"
    assert not envelope.is_error


async def test_search_defaults_to_latest(dispatcher, client):
    client.search_posts.side_effect = lambda query, mode, page_size: AsyncItems([make_post(1)])

    await call(dispatcher, "search_tweets", query="python")

    client.search_posts.assert_called_once_with("python", "latest", page_size=10)


async def test_search_rejects_unknown_mode(dispatcher, client):
    envelope = await call(dispatcher, "search_tweets", query="python", mode="newest")

    assert envelope.text == "Error: Invalid mode 'newest'. Expected one of: latest, top"
    client.search_posts.assert_not_called()


async def test_get_profile(dispatcher, client):
    client.get_profile.return_value = make_profile(username="Jack", followers=5, is_blue_verified=True)

    envelope = await call(dispatcher, "get_profile", username="@Jack")

    client.get_profile.assert_awaited_once_with("Jack")
    record = json.loads(envelope.text)
    assert record["username"] == "Jack"
    assert record["metrics"]["followers"] == 5
    assert record["isBlueVerified"] is True


async def test_get_timeline_home(dispatcher, client):
    client.fetch_home_timeline.return_value = [make_post(i) for i in range(3)]

    envelope = await call(dispatcher, "get_timeline", timeline_type="home", count=2)

    client.fetch_home_timeline.assert_awaited_once_with(2)
    assert len(json.loads(envelope.text)) == 2


async def test_get_timeline_user_empty(dispatcher):
    envelope = await call(dispatcher, "get_timeline", timeline_type="user", username="@bob")

    assert envelope.text == "No tweets found for user timeline of user @bob"


async def test_get_timeline_following_empty(dispatcher):
    envelope = await call(dispatcher, "get_timeline", timeline_type="following")

    assert envelope.text == "No tweets found for following timeline"


async def test_get_list_tweets(dispatcher, client):
    client.fetch_list_posts.return_value = Page(items=[make_post(1), make_post(2), make_post(3)], next_cursor="c")

    envelope = await call(dispatcher, "get_list_tweets", list_id="99", count=2)

    client.fetch_list_posts.assert_awaited_once_with("99", 2)
    assert [r["id"] for r in json.loads(envelope.text)] == ["1", "2"]


async def test_get_list_tweets_empty(dispatcher):
    envelope = await call(dispatcher, "get_list_tweets", list_id="99")

    assert envelope.text == "No tweets found for list 99"


async def test_get_user_relationships(dispatcher, client):
    client.iter_following.side_effect = lambda user_id, page_size: AsyncItems([make_profile("7", "bob"), make_profile("8", "carol")])

    envelope = await call(dispatcher, "get_user_relationships", username="alice", relationship_type="following")

    assert [r["username"] for r in json.loads(envelope.text)] == ["bob", "carol"]
    client.iter_followers.assert_not_called()


async def test_get_user_relationships_empty(dispatcher):
    envelope = await call(dispatcher, "get_user_relationships", username="alice", relationship_type="followers")

    assert envelope.text == "No followers found for user @alice"


async def test_get_trends(dispatcher, client):
    client.get_trends.return_value = ["#python", "MCP"]

    envelope = await call(dispatcher, "get_trends")

    assert json.loads(envelope.text) == ["#python", "MCP"]


async def test_get_trends_empty(dispatcher):
    envelope = await call(dispatcher, "get_trends")

    assert envelope.text == "No trending topics found at the moment"


# ── Acting ────────────────────────────────────────────────────────────────────

async def test_like_and_unlike(dispatcher, client):
    liked = await call(dispatcher, "like_tweet", tweet_id="5")
    unliked = await call(dispatcher, "like_tweet", tweet_id="5", action="unlike")

    assert liked.text == "Successfully liked tweet 5"
    assert unliked.text == "Successfully unliked tweet 5"
    client.like.assert_awaited_once_with("5")
    client.unlike.assert_awaited_once_with("5")


async def test_retweet_and_undo(dispatcher, client):
    done = await call(dispatcher, "retweet", tweet_id="5")
    undone = await call(dispatcher, "retweet", tweet_id="5", action="undo")

    assert done.text == "Successfully retweeted tweet 5"
    assert undone.text == "Successfully undid retweet of tweet 5"
    client.repost.assert_awaited_once_with("5")
    client.undo_repost.assert_awaited_once_with("5")


async def test_follow_and_unfollow(dispatcher, client):
    followed = await call(dispatcher, "follow_user", username="@bob")
    unfollowed = await call(dispatcher, "follow_user", username="bob", action="unfollow")

    assert followed.text == "Successfully followed user @bob"
    assert unfollowed.text == "Successfully unfollowed user @bob"
    client.follow.assert_awaited_once_with("42")
    client.unfollow.assert_awaited_once_with("42")


async def test_post_tweet(dispatcher, client):
    envelope = await call(dispatcher, "post_tweet", text="hello world")

    assert envelope.text == "Successfully posted tweet (ID: 1000)"
    kwargs = client.send_post.await_args.kwargs
    assert client.send_post.await_args.args == ("hello world",)
    assert kwargs["reply_to"] is None
    assert kwargs["quote_of"] is None
    assert kwargs["media"] is None


async def test_post_reply(dispatcher, client):
    envelope = await call(dispatcher, "post_tweet", text="agreed", reply_to_tweet_id="77")

    assert envelope.text == "Successfully posted reply to tweet 77 (ID: 1000)"
    assert client.send_post.await_args.kwargs["reply_to"] == "77"


async def test_post_quote_with_media(dispatcher, client):
    media = [{"data": PNG, "media_type": "image/png"}]

    envelope = await call(dispatcher, "post_tweet", text="look", quote_tweet_id="88", media=media)

    assert envelope.text == "Successfully posted quote tweet (ID: 1000)"
    kwargs = client.send_post.await_args.kwargs
    assert kwargs["quote_of"] == "88"
    assert kwargs["media"][0].data == b"\x89PNG fake image"
    assert kwargs["media"][0].mime_type == "image/png"


async def test_post_tweet_invalid_media_never_posts(dispatcher, client):
    media = [{"data": PNG, "media_type": "image/png"}] * 5

    envelope = await call(dispatcher, "post_tweet", text="too many", media=media)

    assert envelope.text == "Error: media may contain at most 4 images"
    client.send_post.assert_not_called()


async def test_post_tweet_rejected(dispatcher, client):
    client.send_post.return_value = SendResult(ok=False, error="duplicate content")

    envelope = await call(dispatcher, "post_tweet", text="again")

    assert envelope.text == "Error: Failed to create tweet: duplicate content"
