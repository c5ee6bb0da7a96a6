"""
Publishing service (``/publishing/v2``).
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.publishing import (
    Episode,
    EpisodeRequest,
    Media,
    Series,
    SeriesRequest,
    Speaker,
    SpeakerRequest,
    Speakership,
)
from .base import ServiceBase


class PublishingService(ServiceBase):
    """Sermon episodes, series, speakers and media."""

    base_path = "/publishing/v2"

    # Episodes

    async def get_episode(self, episode_id: str, params: Optional[QueryParameters] = None) -> Optional[Episode]:
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._get(self._path("episodes", episode_id), Episode.from_resource, params)

    async def list_episodes(self, params: Optional[QueryParameters] = None) -> Page[Episode]:
        return await self._list(self._path("episodes"), Episode.from_resource, params)

    async def get_all_episodes(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Episode]:
        return await self._get_all(self._path("episodes"), Episode.from_resource, params, options)

    def stream_episodes(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Episode]:
        return self._stream(self._path("episodes"), Episode.from_resource, params, options)

    async def create_episode(self, request: EpisodeRequest) -> Episode:
        return await self._create(self._path("episodes"), "Episode", request, Episode.from_resource)

    async def update_episode(self, episode_id: str, request: EpisodeRequest) -> Episode:
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._update(
            self._path("episodes", episode_id), "Episode", episode_id, request, Episode.from_resource
        )

    async def delete_episode(self, episode_id: str) -> None:
        episode_id = self._require_id(episode_id, "episode_id")
        await self._delete(self._path("episodes", episode_id))

    async def publish_episode(self, episode_id: str) -> Optional[Episode]:
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._action(self._path("episodes", episode_id, "publish"), Episode.from_resource)

    async def unpublish_episode(self, episode_id: str) -> Optional[Episode]:
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._action(self._path("episodes", episode_id, "unpublish"), Episode.from_resource)

    # Series

    async def get_series(self, series_id: str) -> Optional[Series]:
        series_id = self._require_id(series_id, "series_id")
        return await self._get(self._path("series", series_id), Series.from_resource)

    async def list_series(self, params: Optional[QueryParameters] = None) -> Page[Series]:
        return await self._list(self._path("series"), Series.from_resource, params)

    async def create_series(self, request: SeriesRequest) -> Series:
        return await self._create(self._path("series"), "Series", request, Series.from_resource)

    async def update_series(self, series_id: str, request: SeriesRequest) -> Series:
        series_id = self._require_id(series_id, "series_id")
        return await self._update(self._path("series", series_id), "Series", series_id, request, Series.from_resource)

    async def delete_series(self, series_id: str) -> None:
        series_id = self._require_id(series_id, "series_id")
        await self._delete(self._path("series", series_id))

    # Speakers

    async def get_speaker(self, speaker_id: str) -> Optional[Speaker]:
        speaker_id = self._require_id(speaker_id, "speaker_id")
        return await self._get(self._path("speakers", speaker_id), Speaker.from_resource)

    async def list_speakers(self, params: Optional[QueryParameters] = None) -> Page[Speaker]:
        return await self._list(self._path("speakers"), Speaker.from_resource, params)

    async def create_speaker(self, request: SpeakerRequest) -> Speaker:
        return await self._create(self._path("speakers"), "Speaker", request, Speaker.from_resource)

    async def update_speaker(self, speaker_id: str, request: SpeakerRequest) -> Speaker:
        speaker_id = self._require_id(speaker_id, "speaker_id")
        return await self._update(
            self._path("speakers", speaker_id), "Speaker", speaker_id, request, Speaker.from_resource
        )

    async def delete_speaker(self, speaker_id: str) -> None:
        speaker_id = self._require_id(speaker_id, "speaker_id")
        await self._delete(self._path("speakers", speaker_id))

    async def list_speakerships(
        self, episode_id: str, params: Optional[QueryParameters] = None
    ) -> Page[Speakership]:
        """List the speakers linked to an episode."""
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._list(self._path("episodes", episode_id, "speakerships"), Speakership.from_resource, params)

    # Media

    async def list_episode_media(self, episode_id: str, params: Optional[QueryParameters] = None) -> Page[Media]:
        episode_id = self._require_id(episode_id, "episode_id")
        return await self._list(self._path("episodes", episode_id, "media"), Media.from_resource, params)

    async def get_media(self, media_id: str) -> Optional[Media]:
        media_id = self._require_id(media_id, "media_id")
        return await self._get(self._path("media", media_id), Media.from_resource)
