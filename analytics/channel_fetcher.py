"""
YouTube Channel Fetcher
Fetches a channel's recent uploads from the YouTube Data API v3.

Calls are issued serially: each playlist page depends on the previous
page's continuation token, and any failure aborts the whole fetch.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from analytics.errors import ChannelNotFoundError, NoVideosFoundError, UpstreamError
from analytics.records import RawVideoRecord, raw_video_from_api

logger = logging.getLogger(__name__)

PAGE_SIZE = 50
DETAIL_BATCH_SIZE = 50

PageFetcher = Callable[[Optional[str], int], Dict[str, Any]]


def iter_video_id_pages(fetch_page: PageFetcher, max_results: int, page_size: int = PAGE_SIZE) -> Iterator[List[str]]:
    """Yield pages of video ids until ``max_results`` ids or the last page.

    ``fetch_page(page_token, page_size)`` returns one ``playlistItems.list``
    response; the first call receives ``None`` as its token.
    """
    collected = 0
    page_token = None
    while collected < max_results:
        response = fetch_page(page_token, min(max_results - collected, page_size))
        ids = [
            item["contentDetails"]["videoId"]
            for item in response.get("items", [])
            if (item.get("contentDetails") or {}).get("videoId")
        ]
        ids = ids[:max_results - collected]
        collected += len(ids)
        yield ids

        page_token = response.get("nextPageToken")
        if not page_token:
            break


def _error_body(error: HttpError) -> str:
    content = error.content
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return str(content or "")


class YouTubeChannelFetcher:
    def __init__(self, api_key: str, timeout: int = 30, youtube=None):
        """Initialize YouTube API client"""
        if youtube is None:
            youtube = build(
                "youtube", "v3",
                developerKey=api_key,
                http=httplib2.Http(timeout=timeout),
                cache_discovery=False,
            )
        self.youtube = youtube
        self.quota_used = 0

    def _execute(self, request, description: str) -> Dict[str, Any]:
        try:
            response = request.execute()
        except HttpError as e:
            status = e.resp.status
            body = _error_body(e)
            logger.error("YouTube API %s failed while %s: %s", status, description, body)
            raise UpstreamError(f"YouTube API {status}: {body}", status=status, body=body) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error("YouTube API unreachable while %s: %s", description, e)
            raise UpstreamError(f"YouTube API request failed while {description}: {e}") from e
        self.quota_used += 1
        return response

    def resolve_handle(self, handle: str) -> Dict[str, Any]:
        """Resolve an @handle into the channel id, title and subscriber count."""
        handle = handle.strip().lstrip("@")
        if not handle:
            raise ChannelNotFoundError("A channel handle is required")

        response = self._execute(
            self.youtube.channels().list(part="snippet,statistics", forHandle=handle),
            f"resolving @{handle}",
        )
        items = response.get("items") or []
        if not items:
            raise ChannelNotFoundError(f"No channel found for handle: @{handle}")

        channel = items[0]
        return {
            "channelId": channel["id"],
            "title": (channel.get("snippet") or {}).get("title", ""),
            "subscriberCount": int((channel.get("statistics") or {}).get("subscriberCount", 0) or 0),
        }

    def fetch_uploads_playlist_id(self, channel_id: str) -> str:
        response = self._execute(
            self.youtube.channels().list(part="contentDetails", id=channel_id),
            f"looking up channel {channel_id}",
        )
        items = response.get("items") or []
        uploads = ""
        if items:
            related = (items[0].get("contentDetails") or {}).get("relatedPlaylists") or {}
            uploads = related.get("uploads", "")
        if not uploads:
            raise ChannelNotFoundError(f"Could not find uploads playlist for channel: {channel_id}")
        return uploads

    def playlist_page_fetcher(self, playlist_id: str) -> PageFetcher:
        def fetch_page(page_token: Optional[str], page_size: int) -> Dict[str, Any]:
            return self._execute(
                self.youtube.playlistItems().list(
                    part="contentDetails",
                    playlistId=playlist_id,
                    maxResults=page_size,
                    pageToken=page_token,
                ),
                f"listing playlist {playlist_id}",
            )
        return fetch_page

    def fetch_video_ids(self, playlist_id: str, max_results: int) -> List[str]:
        video_ids: List[str] = []
        for page in iter_video_id_pages(self.playlist_page_fetcher(playlist_id), max_results):
            video_ids.extend(page)
        return video_ids

    def fetch_video_details(self, video_ids: List[str]) -> List[Dict[str, Any]]:
        """Fetch snippet/statistics/contentDetails in batches (API allows max 50 per request)."""
        items: List[Dict[str, Any]] = []
        for i in range(0, len(video_ids), DETAIL_BATCH_SIZE):
            batch_ids = video_ids[i:i + DETAIL_BATCH_SIZE]
            response = self._execute(
                self.youtube.videos().list(
                    part="snippet,statistics,contentDetails",
                    id=",".join(batch_ids),
                ),
                f"fetching details for {len(batch_ids)} videos",
            )
            items.extend(response.get("items", []))
        return items

    def fetch_channel_videos(self, channel_id: str, max_results: int) -> List[RawVideoRecord]:
        """
        Fetch the most recent uploads of a channel.

        Strategy:
        1. Get uploads playlist ID from the channel
        2. Page through the playlist until max_results ids are collected
        3. Get full video details including statistics
        """
        uploads_playlist_id = self.fetch_uploads_playlist_id(channel_id)
        video_ids = self.fetch_video_ids(uploads_playlist_id, max_results)
        logger.info("Found %d videos in uploads playlist %s", len(video_ids), uploads_playlist_id)

        if not video_ids:
            raise NoVideosFoundError(f"No videos found in channel: {channel_id}")

        records = [raw_video_from_api(item) for item in self.fetch_video_details(video_ids)]
        if not records:
            raise NoVideosFoundError(f"No video details returned for channel: {channel_id}")

        logger.info("Fetched %d videos for %s (~%d quota units)", len(records), channel_id, self.quota_used)
        return records
