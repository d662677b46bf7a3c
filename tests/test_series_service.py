import asyncio
import threading
import unittest

from series_tracker_api.app.core.errors import InvalidInputError, SeriesNotFoundError
from series_tracker_api.app.repositories.memory import InMemorySeriesRepository
from series_tracker_api.app.schemas.series import SeriesCreate, SeriesUpdate, StatusUpdate
from series_tracker_api.app.services.series_service import SeriesService


class _VanishingRepository(InMemorySeriesRepository):
    """Deletes the row right before a write, like a concurrent DELETE would."""

    def adjust(self, series_id, field, delta):
        self.delete_by_id(series_id)
        return super().adjust(series_id, field, delta)

    def set_status(self, series_id, status):
        self.delete_by_id(series_id)
        return super().set_status(series_id, status)

    def replace(self, series):
        self.delete_by_id(series.id)
        return super().replace(series)


class SeriesServiceTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.repository = InMemorySeriesRepository()
        self.service = SeriesService(self.repository)

    async def _create(self, **fields):
        fields.setdefault("title", "Attack on Titan")
        return await self.service.create_series(SeriesCreate(**fields))

    async def test_create_assigns_unique_ids(self):
        first = await self._create(title="Frieren")
        second = await self._create(title="Dandadan")
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(first.title, "Frieren")
        self.assertEqual(first.status, "")
        self.assertEqual(first.ranking, 0)

    async def test_create_ignores_id_from_body(self):
        created = await self.service.create_series(SeriesCreate(**{"id": 99, "title": "Monster"}))
        self.assertEqual(created.id, 1)

    async def test_create_with_empty_title_is_rejected_and_not_stored(self):
        with self.assertRaises(InvalidInputError):
            await self.service.create_series(SeriesCreate(title="", ranking=3))
        self.assertEqual(await self.service.list_series(), [])

    async def test_round_trip_create_then_get(self):
        created = await self._create(status="Watching", lastEpisodeWatched=2, totalEpisodes=12, ranking=5)
        fetched = await self.service.get_series(created.id)
        self.assertEqual(fetched, created)

    async def test_list_returns_series_in_insertion_order(self):
        await self._create(title="A")
        await self._create(title="B")
        titles = [s.title for s in await self.service.list_series()]
        self.assertEqual(titles, ["A", "B"])

    async def test_missing_id_raises_not_found_for_every_operation(self):
        operations = [
            self.service.get_series(404),
            self.service.replace_series(404, SeriesUpdate(title="X")),
            self.service.delete_series(404),
            self.service.update_status(404, StatusUpdate(status="Watching")),
            self.service.advance_episode(404),
            self.service.upvote(404),
            self.service.downvote(404),
        ]
        for operation in operations:
            with self.assertRaises(SeriesNotFoundError):
                await operation

    async def test_delete_then_get_is_not_found(self):
        created = await self._create()
        await self.service.delete_series(created.id)
        with self.assertRaises(SeriesNotFoundError):
            await self.service.get_series(created.id)
        with self.assertRaises(SeriesNotFoundError):
            await self.service.delete_series(created.id)

    async def test_replace_overwrites_all_fields_and_keeps_id(self):
        created = await self._create(status="Watching", lastEpisodeWatched=7, totalEpisodes=24, ranking=8)
        replaced = await self.service.replace_series(
            created.id,
            SeriesUpdate(title="X", status="Dropped", lastEpisodeWatched=0, totalEpisodes=0, ranking=0),
        )
        self.assertEqual(replaced.id, created.id)
        self.assertEqual(replaced.ranking, 0)
        self.assertEqual(replaced.status, "Dropped")
        self.assertEqual(replaced.last_episode_watched, 0)
        self.assertEqual(await self.service.get_series(created.id), replaced)

    async def test_replace_accepts_empty_title(self):
        created = await self._create()
        replaced = await self.service.replace_series(created.id, SeriesUpdate(title=""))
        self.assertEqual(replaced.title, "")

    async def test_update_status_changes_only_status(self):
        created = await self._create(ranking=4, lastEpisodeWatched=3)
        updated = await self.service.update_status(created.id, StatusUpdate(status="Completed"))
        self.assertEqual(updated.status, "Completed")
        self.assertEqual(updated.ranking, 4)
        self.assertEqual(updated.last_episode_watched, 3)

    async def test_update_status_accepts_unlisted_values(self):
        created = await self._create()
        updated = await self.service.update_status(created.id, StatusUpdate(status="Rewatching"))
        self.assertEqual(updated.status, "Rewatching")

    async def test_update_status_rejects_empty_status(self):
        created = await self._create(status="Watching")
        with self.assertRaises(InvalidInputError):
            await self.service.update_status(created.id, StatusUpdate(status=""))
        self.assertEqual((await self.service.get_series(created.id)).status, "Watching")

    async def test_advance_episode_below_cap_adds_one(self):
        created = await self._create(lastEpisodeWatched=3, totalEpisodes=10)
        advanced = await self.service.advance_episode(created.id)
        self.assertEqual(advanced.last_episode_watched, 4)
        self.assertEqual((await self.service.get_series(created.id)).last_episode_watched, 4)

    async def test_advance_episode_at_cap_is_a_repeatable_no_op(self):
        created = await self._create(lastEpisodeWatched=5, totalEpisodes=5)
        for _ in range(3):
            result = await self.service.advance_episode(created.id)
            self.assertEqual(result, created)
        self.assertEqual((await self.service.get_series(created.id)).last_episode_watched, 5)

    async def test_advance_episode_without_total_is_uncapped(self):
        created = await self._create(lastEpisodeWatched=30, totalEpisodes=0)
        advanced = await self.service.advance_episode(created.id)
        self.assertEqual(advanced.last_episode_watched, 31)

    async def test_upvote_then_downvote_restores_ranking(self):
        created = await self._create(ranking=0)
        self.assertEqual((await self.service.upvote(created.id)).ranking, 1)
        self.assertEqual((await self.service.downvote(created.id)).ranking, 0)

    async def test_downvote_can_go_negative(self):
        created = await self._create(ranking=0)
        await self.service.downvote(created.id)
        result = await self.service.downvote(created.id)
        self.assertEqual(result.ranking, -2)


class VanishingRowTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.repository = _VanishingRepository()
        self.service = SeriesService(self.repository)
        self.series = await self.service.create_series(SeriesCreate(title="Gone", totalEpisodes=10))

    async def test_upvote_reports_not_found(self):
        with self.assertRaises(SeriesNotFoundError):
            await self.service.upvote(self.series.id)

    async def test_advance_episode_reports_not_found(self):
        with self.assertRaises(SeriesNotFoundError):
            await self.service.advance_episode(self.series.id)

    async def test_update_status_reports_not_found(self):
        with self.assertRaises(SeriesNotFoundError):
            await self.service.update_status(self.series.id, StatusUpdate(status="Dropped"))

    async def test_replace_reports_not_found(self):
        with self.assertRaises(SeriesNotFoundError):
            await self.service.replace_series(self.series.id, SeriesUpdate(title="Back"))


class _SlowRepository(InMemorySeriesRepository):
    """Holds every lookup until ``release`` is set, like a locked database."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def find_by_id(self, series_id):
        self.release.wait(timeout=2)
        return super().find_by_id(series_id)


class BlockingStorageTest(unittest.IsolatedAsyncioTestCase):
    async def test_slow_storage_does_not_block_the_event_loop(self):
        repository = _SlowRepository()
        service = SeriesService(repository)
        created = await service.create_series(SeriesCreate(title="Frieren"))

        task = asyncio.create_task(service.get_series(created.id))
        # The loop keeps running other work while the lookup waits.
        await asyncio.sleep(0.05)
        self.assertFalse(task.done())

        repository.release.set()
        found = await asyncio.wait_for(task, timeout=2)
        self.assertEqual(found.title, "Frieren")


if __name__ == "__main__":
    unittest.main()
