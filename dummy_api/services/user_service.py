"""
User service.

Maps each user and admin operation onto the injected record store. Holds no
state of its own besides its collaborators.
"""

import logging

from dummy_api.models.results import ItemOutcome
from dummy_api.providers.store.base import Record, RecordNotFoundError, RecordStore
from dummy_api.services.bulk import BulkOperationError, BulkResult, delete_all
from dummy_api.services.pagination import fetch_all
from dummy_api.services.sample_data import SampleUserGenerator

logger = logging.getLogger(__name__)


class UserService:
    """
    User CRUD plus seed and dump.

    Example:
        service = UserService(store=InMemoryRecordStore())
        await service.put_user({"name": "A", "surname": "B", "email": "a@b.com"})
        users = await service.list_users()
    """

    def __init__(
        self,
        store: RecordStore,
        generator: SampleUserGenerator | None = None,
        feed_count: int = 25,
        delete_concurrency: int = 16,
    ):
        """
        Initialize the service.

        Args:
            store: Record store holding the users
            generator: Sample data generator for feed (default: random seed)
            feed_count: Number of users generated by feed
            delete_concurrency: Maximum deletes in flight during dump
        """
        self.store = store
        self.generator = generator or SampleUserGenerator()
        self.feed_count = feed_count
        self.delete_concurrency = delete_concurrency

    async def list_users(self) -> list[Record]:
        """Return every user in the store."""
        return await fetch_all(self.store)

    async def get_user(self, email: str) -> Record:
        """
        Get a user by email.

        Raises:
            RecordNotFoundError: If no user has this email
        """
        record = await self.store.get(email)
        if record is None:
            raise RecordNotFoundError(email, self.store.provider_name)
        return record

    async def put_user(self, user: Record) -> Record:
        """Store a user keyed by its email, overwriting any existing one."""
        return await self.store.put(user, user["email"])

    async def update_user(self, email: str, patch: Record) -> Record:
        """
        Merge fields into an existing user.

        The email is the record key, so a patch may repeat it but not change it.

        Returns:
            The submitted patch

        Raises:
            ValueError: If the patch carries a different email
            RecordNotFoundError: If no user has this email (no upsert)
        """
        if "email" in patch and patch["email"] != email:
            raise ValueError(
                f"Cannot change the email of '{email}'; it is the record key"
            )
        await self.store.update(patch, email)
        return patch

    async def delete_user(self, email: str | None) -> bool:
        """
        Delete a user.

        Returns:
            False without contacting the store when the email is blank,
            True once the delete went through
        """
        if not email or not email.strip():
            return False
        await self.store.delete(email)
        return True

    async def feed(self) -> BulkResult:
        """
        Seed the store with generated users in a single bulk put.

        Returns:
            BulkResult; the processed records are its succeeded records
        """
        users = self.generator.generate(self.feed_count)
        result = await self.store.put_many(users)

        outcomes = [ItemOutcome(key=r["key"], success=True) for r in result.processed]
        for record in result.failed:
            key = str(record.get("key", ""))
            logger.warning(f"Store rejected sample user '{key}'")
            outcomes.append(ItemOutcome(key=key, success=False, reason="rejected by store"))

        logger.info(f"Fed {len(result.processed)}/{len(users)} sample users")
        return BulkResult(records=result.processed + result.failed, outcomes=outcomes)

    async def dump(self) -> BulkResult:
        """
        Delete every user.

        Returns:
            BulkResult whose records are the pre-dump snapshot

        Raises:
            BulkOperationError: If any delete failed; completed deletes stay applied
        """
        result = await delete_all(self.store, concurrency=self.delete_concurrency)
        if not result.ok:
            raise BulkOperationError(
                f"{len(result.failed)} of {len(result.records)} deletes failed",
                result,
            )
        return result
