"""Tests for the podcast feature.
Covers: PodcastService, creator promotion, ownership checks, listing filters, HTTP endpoints.
"""

import pytest
from fastapi import status

from src.config.settings import settings
from src.features.podcast.exceptions import NotPodcastOwner, PodcastNotFound, SlugAlreadyExists
from src.features.podcast.schemas import PodcastCreateRequest, PodcastPatchRequest
from src.features.podcast.service import PodcastService
from src.features.user.models import RoleName
from src.shared.pagination.pagination import CursorParams

# PodcastService Unit Tests


class TestCreatePodcast:
    async def test_create_podcast_promotes_creator(self, session, make_user):
        user = await make_user()
        assert not user.has_role(RoleName.CREATOR)

        podcast = await PodcastService.create_podcast(
            session, user, PodcastCreateRequest(title="Tech Talk", slug="tech-talk")
        )

        assert podcast.id is not None
        assert podcast.creator_id == user.id
        assert podcast.is_public is False
        assert user.has_role(RoleName.CREATOR)
        assert user.has_role(RoleName.USER)

    async def test_second_podcast_keeps_single_creator_role(self, session, make_user):
        user = await make_user()
        await PodcastService.create_podcast(session, user, PodcastCreateRequest(title="One", slug="one"))
        await PodcastService.create_podcast(session, user, PodcastCreateRequest(title="Two", slug="two"))

        assert [role.name for role in user.roles].count(RoleName.CREATOR) == 1

    async def test_duplicate_slug(self, session, make_user, make_podcast):
        user = await make_user()
        await make_podcast(user, slug="taken-slug")

        with pytest.raises(SlugAlreadyExists):
            await PodcastService.create_podcast(session, user, PodcastCreateRequest(title="X", slug="taken-slug"))


class TestGetPodcast:
    async def test_by_id_or_slug(self, session, make_user, make_podcast):
        user = await make_user()
        podcast = await make_podcast(user, slug="daily-news")

        assert (await PodcastService.get_podcast_by_id_or_slug(session, str(podcast.id))).id == podcast.id
        assert (await PodcastService.get_podcast_by_id_or_slug(session, "daily-news")).id == podcast.id

    async def test_numeric_slug_falls_back_to_slug_lookup(self, session, make_user, make_podcast):
        user = await make_user()
        podcast = await make_podcast(user, slug="2024")

        assert (await PodcastService.get_podcast_by_id_or_slug(session, "2024")).id == podcast.id

    async def test_missing(self, session):
        with pytest.raises(PodcastNotFound):
            await PodcastService.get_podcast_by_id_or_slug(session, "nope")


class TestListPodcasts:
    async def test_title_filter_is_case_insensitive(self, session, make_user, make_podcast):
        user = await make_user()
        await make_podcast(user, title="Morning Coffee")
        await make_podcast(user, title="Evening Tea")

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams(), title="COFFEE")
        assert [p.title for p in podcasts] == ["Morning Coffee"]

    async def test_title_filter_matches_wildcards_literally(self, session, make_user, make_podcast):
        user = await make_user()
        await make_podcast(user, title="100% Jazz")
        await make_podcast(user, title="100 Days of Jazz")

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams(), title="100%")
        assert [p.title for p in podcasts] == ["100% Jazz"]

    async def test_creator_filter(self, session, make_user, make_podcast):
        alice = await make_user()
        bob = await make_user()
        mine = await make_podcast(alice)
        await make_podcast(bob)

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams(), creator_id=alice.id)
        assert [p.id for p in podcasts] == [mine.id]

    async def test_public_filter(self, session, make_user, make_podcast):
        user = await make_user()
        public = await make_podcast(user, is_public=True)
        await make_podcast(user, is_public=False)

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams(), is_public=True)
        assert [p.id for p in podcasts] == [public.id]

    async def test_title_takes_priority_over_other_filters(self, session, make_user, make_podcast):
        alice = await make_user()
        bob = await make_user()
        await make_podcast(alice, title="Shared Name")
        await make_podcast(bob, title="Shared Name Too")

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams(), title="shared", creator_id=alice.id)
        assert len(podcasts) == 2

    async def test_no_filter_lists_all_newest_first(self, session, make_user, make_podcast):
        user = await make_user()
        first = await make_podcast(user)
        second = await make_podcast(user)

        podcasts, _ = await PodcastService.get_podcasts(session, CursorParams())
        assert [p.id for p in podcasts] == [second.id, first.id]


class TestUpdatePodcast:
    async def test_owner_updates_only_sent_fields(self, session, make_user, make_podcast):
        user = await make_user()
        podcast = await make_podcast(user, title="Old", description="Keep")

        updated = await PodcastService.update_podcast(
            session, user, podcast.id, PodcastPatchRequest(title="New", is_public=True)
        )

        assert updated.title == "New"
        assert updated.is_public is True
        assert updated.description == "Keep"

    async def test_non_owner_cannot_update(self, session, make_user, make_podcast):
        owner = await make_user()
        other = await make_user()
        podcast = await make_podcast(owner)

        with pytest.raises(NotPodcastOwner):
            await PodcastService.update_podcast(session, other, podcast.id, PodcastPatchRequest(title="Mine now"))

    async def test_admin_is_not_owner(self, session, make_user, make_podcast):
        owner = await make_user()
        admin = await make_user(roles=[RoleName.ADMIN])
        podcast = await make_podcast(owner)

        with pytest.raises(NotPodcastOwner):
            await PodcastService.delete_podcast(session, admin, podcast.id)

    async def test_slug_change_to_taken_slug(self, session, make_user, make_podcast):
        user = await make_user()
        await make_podcast(user, slug="first")
        second = await make_podcast(user, slug="second")

        with pytest.raises(SlugAlreadyExists):
            await PodcastService.update_podcast(session, user, second.id, PodcastPatchRequest(slug="first"))

    async def test_keeping_own_slug_is_allowed(self, session, make_user, make_podcast):
        user = await make_user()
        podcast = await make_podcast(user, slug="same")

        updated = await PodcastService.update_podcast(session, user, podcast.id, PodcastPatchRequest(slug="same"))
        assert updated.slug == "same"


# HTTP Endpoints


class TestPodcastEndpoints:
    async def test_create_podcast(self, auth_client):
        client, user = auth_client
        response = await client.post(
            f"{settings.api_prefix}/podcasts",
            json={
                "title": "Tech Talk",
                "slug": "tech-talk",
                "description": "Weekly tech news",
                "coverImageUrl": "https://cdn.example.com/cover.png",
                "isPublic": True,
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["creatorId"] == user.id
        assert body["slug"] == "tech-talk"
        assert body["isPublic"] is True
        assert body["coverImageUrl"] == "https://cdn.example.com/cover.png"
        assert user.has_role(RoleName.CREATOR)

    async def test_create_podcast_invalid_slug(self, auth_client):
        client, _ = auth_client
        response = await client.post(
            f"{settings.api_prefix}/podcasts",
            json={"title": "Bad", "slug": "Not A Slug"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "slug" in response.json()["validationErrors"]

    async def test_create_podcast_duplicate_slug(self, auth_client, make_podcast):
        client, user = auth_client
        await make_podcast(user, slug="dupe")

        response = await client.post(f"{settings.api_prefix}/podcasts", json={"title": "Again", "slug": "dupe"})

        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_create_podcast_unauthenticated(self, client):
        response = await client.post(f"{settings.api_prefix}/podcasts", json={"title": "X", "slug": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_get_by_slug(self, auth_client, make_user, make_podcast):
        client, _ = auth_client
        podcast = await make_podcast(await make_user(), slug="by-slug")

        response = await client.get(f"{settings.api_prefix}/podcasts/by-slug")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == podcast.id

    async def test_get_missing_returns_404(self, auth_client):
        client, _ = auth_client
        response = await client.get(f"{settings.api_prefix}/podcasts/unknown-show")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Podcast not found: unknown-show"

    async def test_list_with_query_aliases(self, auth_client, make_user, make_podcast):
        client, _ = auth_client
        creator = await make_user()
        public = await make_podcast(creator, is_public=True)
        await make_podcast(creator)

        response = await client.get(f"{settings.api_prefix}/podcasts", params={"isPublic": "true"})
        assert [p["id"] for p in response.json()["data"]] == [public.id]

        response = await client.get(f"{settings.api_prefix}/podcasts", params={"creatorId": creator.id})
        assert response.json()["count"] == 2

    async def test_owner_patches_podcast(self, creator_client, make_podcast):
        client, user = creator_client
        podcast = await make_podcast(user)

        response = await client.patch(f"{settings.api_prefix}/podcasts/{podcast.id}", json={"title": "Renamed"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "Renamed"

    async def test_creator_cannot_patch_foreign_podcast(self, creator_client, make_user, make_podcast):
        client, _ = creator_client
        podcast = await make_podcast(await make_user())

        response = await client.patch(f"{settings.api_prefix}/podcasts/{podcast.id}", json={"title": "Stolen"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_listener_without_write_permission_gets_403(self, auth_client, make_user, make_podcast):
        client, _ = auth_client
        podcast = await make_podcast(await make_user())

        response = await client.delete(f"{settings.api_prefix}/podcasts/{podcast.id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "PODCAST_WRITE" in response.json()["message"]

    async def test_owner_deletes_podcast(self, creator_client, make_podcast):
        client, user = creator_client
        podcast = await make_podcast(user)

        response = await client.delete(f"{settings.api_prefix}/podcasts/{podcast.id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = await client.get(f"{settings.api_prefix}/podcasts/{podcast.id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_delete_missing_returns_404(self, creator_client):
        client, _ = creator_client
        response = await client.delete(f"{settings.api_prefix}/podcasts/99999")
        assert response.status_code == status.HTTP_404_NOT_FOUND
