"""
Parcel store.

Thin data-access object over the ``parcel`` table. Each call is a single
awaited round trip, committed before it returns. Every failure, including
a missing row on ``get``, is raised as ``StorageError``.
"""

from typing import List, NoReturn, Union

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import StorageError
from tracker.app.core.observability import logger
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse


class ParcelStore:
    """
    CRUD access to stored parcels.

    The session is owned by the caller; the store never opens or closes it.
    Updates and deletes do not check that the parcel exists: touching an
    unknown number is logged and otherwise succeeds.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a parcel and return the number assigned by the database.

        Field contents are stored as given.
        """
        row = Parcel(
            client=parcel.client,
            status=_status_value(parcel.status),
            address=parcel.address,
            created_at=parcel.created_at
        )
        try:
            self.db.add(row)
            await self.db.flush()
            number = row.number
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("add", exc, client=parcel.client)

        logger.debug("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> ParcelResponse:
        """
        Fetch the parcel with ``number``.

        Raises:
            StorageError: If no such parcel exists or the query fails
        """
        try:
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.number == number)
                .execution_options(populate_existing=True)
            )
            parcel = result.scalar_one()
        except SQLAlchemyError as exc:
            await self._fail("get", exc, number=number)

        return ParcelResponse.model_validate(parcel)

    async def get_by_client(self, client: int) -> List[ParcelResponse]:
        """
        List every parcel belonging to ``client``.

        Returns an empty list when the client has none. Ordering is not
        guaranteed.
        """
        try:
            result = await self.db.execute(
                select(Parcel)
                .where(Parcel.client == client)
                .execution_options(populate_existing=True)
            )
            parcels = result.scalars().all()
        except SQLAlchemyError as exc:
            await self._fail("get_by_client", exc, client=client)

        return [ParcelResponse.model_validate(p) for p in parcels]

    async def set_address(self, number: int, address: str) -> None:
        await self._update("set_address", number, address=address)

    async def set_status(self, number: int, status: Union[ParcelStatus, str]) -> None:
        # No transition check here, see ParcelService
        await self._update("set_status", number, status=_status_value(status))

    async def delete(self, number: int) -> None:
        try:
            result = await self.db.execute(
                delete(Parcel).where(Parcel.number == number)
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete", exc, number=number)

        self._log_affected("delete", number, result.rowcount)

    async def _update(self, operation: str, number: int, **values) -> None:
        try:
            result = await self.db.execute(
                update(Parcel).where(Parcel.number == number).values(**values)
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail(operation, exc, number=number)

        self._log_affected(operation, number, result.rowcount)

    def _log_affected(self, operation: str, number: int, rowcount: int) -> None:
        log_data = {"operation": operation, "number": number, "rowcount": rowcount}
        if rowcount == 0:
            logger.warning("Parcel not found, nothing changed", extra=log_data)
        else:
            logger.debug("Parcel changed", extra=log_data)

    async def _fail(self, operation: str, exc: SQLAlchemyError, **details) -> NoReturn:
        logger.error(
            "Parcel store operation failed",
            extra={"operation": operation, **details},
            exc_info=exc
        )
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed %s also failed", operation)
        raise StorageError(operation, cause=exc, details=details) from exc


def _status_value(status: Union[ParcelStatus, str]) -> str:
    if isinstance(status, ParcelStatus):
        return status.value
    return status
