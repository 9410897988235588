"""Tests for the listening progress feature.
Covers: ProgressService upsert, recency ordering, HTTP endpoints.
"""

import pytest
from fastapi import status

from src.config.settings import settings
from src.features.episode.exceptions import EpisodeNotFound
from src.features.progress.exceptions import ProgressNotFound
from src.features.progress.schemas import ProgressRequest
from src.features.progress.service import ProgressService
from src.shared.pagination.pagination import CursorParams

# ProgressService Unit Tests


class TestSaveProgress:
    async def test_creates_entry(self, session, make_user, make_podcast, make_episode):
        user = await make_user()
        episode = await make_episode(await make_podcast(await make_user()))

        progress = await ProgressService.save_progress(
            session, user.id, episode.id, ProgressRequest(position_seconds=120)
        )

        assert progress.position_seconds == 120
        assert progress.completed is False

    async def test_second_save_overwrites_same_entry(self, session, make_user, make_podcast, make_episode):
        user = await make_user()
        episode = await make_episode(await make_podcast(await make_user()))
        first = await ProgressService.save_progress(session, user.id, episode.id, ProgressRequest(position_seconds=10))
        first_updated_at = first.updated_at

        second = await ProgressService.save_progress(
            session, user.id, episode.id, ProgressRequest(position_seconds=900, completed=True)
        )

        assert second.id == first.id
        assert second.position_seconds == 900
        assert second.completed is True
        assert second.updated_at >= first_updated_at

    async def test_missing_episode(self, session, make_user):
        with pytest.raises(EpisodeNotFound):
            await ProgressService.save_progress(session, (await make_user()).id, 999, ProgressRequest(position_seconds=1))

    def test_negative_position_rejected(self):
        with pytest.raises(ValueError):
            ProgressRequest(position_seconds=-1)


class TestProgressQueries:
    async def test_most_recently_updated_first(self, session, make_user, make_podcast, make_episode):
        user = await make_user()
        podcast = await make_podcast(await make_user())
        first = await make_episode(podcast)
        second = await make_episode(podcast)
        await ProgressService.save_progress(session, user.id, first.id, ProgressRequest(position_seconds=10))
        await ProgressService.save_progress(session, user.id, second.id, ProgressRequest(position_seconds=10))

        # Touching the older entry moves it to the front
        await ProgressService.save_progress(session, user.id, first.id, ProgressRequest(position_seconds=20))

        entries, _ = await ProgressService.get_user_progress(session, user.id, CursorParams())
        assert [e.episode_id for e in entries] == [first.id, second.id]

    async def test_get_and_delete(self, session, make_user, make_podcast, make_episode):
        user = await make_user()
        episode = await make_episode(await make_podcast(await make_user()))
        await ProgressService.save_progress(session, user.id, episode.id, ProgressRequest(position_seconds=5))

        assert (await ProgressService.get_progress_or_404(session, user.id, episode.id)).position_seconds == 5

        await ProgressService.delete_progress(session, user.id, episode.id)
        with pytest.raises(ProgressNotFound):
            await ProgressService.get_progress_or_404(session, user.id, episode.id)


# HTTP Endpoints


class TestProgressEndpoints:
    async def test_put_get_list_delete(self, auth_client, make_user, make_podcast, make_episode):
        client, user = auth_client
        episode = await make_episode(await make_podcast(await make_user()))
        base = f"{settings.api_prefix}/users/{user.id}/progress"

        response = await client.put(f"{base}/{episode.id}", json={"positionSeconds": 300})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["positionSeconds"] == 300

        response = await client.put(f"{base}/{episode.id}", json={"positionSeconds": 1800, "completed": True})
        assert response.json()["completed"] is True

        response = await client.get(f"{base}/{episode.id}")
        assert response.json()["positionSeconds"] == 1800

        response = await client.get(base)
        assert response.json()["count"] == 1

        response = await client.delete(f"{base}/{episode.id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = await client.get(f"{base}/{episode.id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_negative_position_returns_400(self, auth_client, make_user, make_podcast, make_episode):
        client, user = auth_client
        episode = await make_episode(await make_podcast(await make_user()))

        response = await client.put(
            f"{settings.api_prefix}/users/{user.id}/progress/{episode.id}", json={"positionSeconds": -5}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "positionSeconds" in response.json()["validationErrors"]

    async def test_other_users_progress_forbidden(self, auth_client, make_user):
        client, _ = auth_client
        other = await make_user()

        response = await client.get(f"{settings.api_prefix}/users/{other.id}/progress")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_admin_saving_progress_for_missing_user_returns_404(
        self, admin_client, make_user, make_podcast, make_episode
    ):
        client, _ = admin_client
        episode = await make_episode(await make_podcast(await make_user()))

        response = await client.put(
            f"{settings.api_prefix}/users/987654/progress/{episode.id}", json={"positionSeconds": 10}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
