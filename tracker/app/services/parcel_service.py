"""
Parcel workflow service.

Applies the status convention (registered → sent → delivered) on top of
the parcel store, which itself accepts any change.
"""

from typing import List

from tracker.app.core.exceptions import ParcelStateError
from tracker.app.core.observability import logger
from tracker.app.models.parcel_enums import ParcelStatus, NEXT_STATUS
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse
from tracker.app.services.parcel_store import ParcelStore


class ParcelService:
    """Business rules for registering and moving parcels along."""

    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelResponse:
        """
        Register a new parcel for ``client``.
        
        The parcel starts in REGISTERED status and is stamped with the
        current UTC time.
        """
        parcel = ParcelCreate(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address
        )
        number = await self.store.add(parcel)
        logger.info("Parcel registered", extra={"number": number, "client": client})
        return ParcelResponse(number=number, **parcel.model_dump())

    async def client_parcels(self, client: int) -> List[ParcelResponse]:
        return await self.store.get_by_client(client)

    async def next_status(self, number: int) -> ParcelResponse:
        """
        Move a parcel one step forward.
        
        Raises:
            ParcelStateError: If the parcel is delivered or its status is unknown
            StorageError: If the parcel cannot be read or written
        """
        parcel = await self.store.get(number)
        try:
            next_status = NEXT_STATUS[ParcelStatus(parcel.status)]
        except (ValueError, KeyError):
            raise ParcelStateError(number, parcel.status, "advance status")

        await self.store.set_status(number, next_status)
        logger.info(
            "Parcel status changed",
            extra={"number": number, "from_status": parcel.status, "to_status": next_status.value}
        )
        return parcel.model_copy(update={"status": next_status.value})

    async def change_address(self, number: int, address: str) -> None:
        await self._require_registered(number, "change address")
        await self.store.set_address(number, address)

    async def delete(self, number: int) -> None:
        await self._require_registered(number, "be deleted")
        await self.store.delete(number)
        logger.info("Parcel deleted", extra={"number": number})

    async def _require_registered(self, number: int, action: str) -> None:
        parcel = await self.store.get(number)
        if parcel.status != ParcelStatus.REGISTERED:
            raise ParcelStateError(number, parcel.status, action)
