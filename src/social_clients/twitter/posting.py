"""Posting mixin for the Twitter API client."""

import io
import logging
import mimetypes
from typing import List, Optional

import tweepy

from ..base import MediaAttachment, SendResult

logger = logging.getLogger("social_clients.twitter.posting")


class PostingMixin:
    """Handles posting text and media to Twitter using tweepy."""

    def _upload_media_sync(self, attachment: MediaAttachment) -> str:
        """
        Upload media using tweepy v1.1 API (synchronous).
        Returns media_id string.
        """
        # tweepy infers the content type from the file name
        extension = mimetypes.guess_extension(attachment.mime_type) or ""
        filename = f"upload{extension}"

        if attachment.is_video:
            media = self.api_v1.media_upload(
                filename,
                file=io.BytesIO(attachment.data),
                chunked=True,
                media_category="tweet_video",
            )
        else:
            media = self.api_v1.media_upload(filename, file=io.BytesIO(attachment.data))
        return str(media.media_id)

    async def upload_media(self, attachment: MediaAttachment) -> str:
        media_id = await self._call(self._upload_media_sync, attachment)
        logger.info(
            f"Uploaded {attachment.mime_type} ({len(attachment.data)} bytes, media_id: {media_id})"
        )
        return media_id

    async def send_post(
        self,
        text: str,
        reply_to: Optional[str] = None,
        quote_of: Optional[str] = None,
        media: Optional[List[MediaAttachment]] = None,
        hide_link_preview: bool = False,
    ) -> SendResult:
        """
        Create a tweet, optionally as a reply or quote, with media.
        Platform rejections come back as ``SendResult(ok=False)``.
        """
        if hide_link_preview:
            logger.debug("Link preview suppression is not available through the v2 API; ignoring")

        try:
            media_ids = [await self.upload_media(item) for item in media or []]
            response = await self._call(
                self.client_v2.create_tweet,
                text=text,
                in_reply_to_tweet_id=reply_to,
                quote_tweet_id=quote_of,
                media_ids=media_ids or None,
            )
        except tweepy.HTTPException as e:
            logger.error(f"Twitter rejected post: {e}")
            return SendResult(ok=False, error=str(e))

        data = dict(response.data or {})
        logger.info(f"Posted to Twitter: {text[:50]}... (ID: {data.get('id', 'unknown')})")
        return SendResult(ok=True, payload={"data": data})
