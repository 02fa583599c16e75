'''
Scan destination management with a local mirror of the remote list.
'''
import asyncio
from typing import Any
from epson_connect.exceptions import ScannerError
from epson_connect.models.destination import (Destination, DestinationType,
                                              VALID_DESTINATION_TYPES)
from epson_connect.utils.logger import logger
from epson_connect.utils.token_manager import AuthContext, EMPTY_RESPONSE_MESSAGE


class Scanner:
    """
    Scan destinations of the authenticated device.

    The destination cache is filled by one background listing started at
    construction; every cache operation waits for it first. A fresh list()
    replaces the whole cache, so it never holds entries the service dropped.
    """

    def __init__(self, auth_context: AuthContext):
        if not isinstance(auth_context, AuthContext):
            raise ScannerError("AuthContext instance required")

        self._auth_context = auth_context
        self._destination_cache: dict[str, Destination] = {}
        self._ready_task: asyncio.Task | None = None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no loop yet: bootstrap starts on the first awaited operation
            loop = None
        if loop is not None:
            self._start_bootstrap()

    @property
    def _path(self) -> str:
        return f"/api/1/scanning/scanners/{self._auth_context.device_id}/destinations"

    async def _bootstrap(self) -> None:
        try:
            await self._auth_context.ensure_authenticated()
            await self.list()
        except Exception as exc:
            logger.error(f"Failed to initialize scanner destination cache: {exc}")
            raise

    def _start_bootstrap(self) -> None:
        self._ready_task = asyncio.ensure_future(self._bootstrap())
        # already logged by _bootstrap; waiters still get it from ready()
        self._ready_task.add_done_callback(
            lambda task: task.cancelled() or task.exception())

    async def ready(self) -> None:
        '''
        Wait until the initial destination listing has completed.
        A failed bootstrap raises its error here, for every caller.
        '''
        if self._ready_task is None:
            self._start_bootstrap()
        await asyncio.shield(self._ready_task)

    async def list(self, use_cache: bool = False) -> list[Destination]:
        if use_cache:
            await self.ready()
            return list(self._destination_cache.values())

        resp = await self._auth_context.send("GET", self._path)
        if not isinstance(resp, dict):
            raise ScannerError(f"Unexpected destination listing: {resp!r}")
        destinations = [Destination.model_validate(dest)
                        for dest in resp.get("destinations", [])]
        self._destination_cache = {dest.id: dest for dest in destinations}
        logger.debug(f"Destination cache refreshed with {len(destinations)} entries")
        return destinations

    async def add(self,
                  alias_name: str,
                  destination: str,
                  type_: DestinationType = "mail") -> Destination:
        '''
        Register a destination and return it as listed by the service.

        The create call does not echo the new record, so it is looked up by
        alias in a fresh listing.
        '''
        await self.ready()
        self._validate_destination(alias_name, destination, type_)
        data = {
            "alias_name": alias_name,
            "destination": destination,
            "type": type_,
        }
        resp = await self._auth_context.send("POST", self._path, data)
        if resp != {"message": EMPTY_RESPONSE_MESSAGE}:
            raise ScannerError("Failed to add scanner destination.")

        matches = [dest for dest in await self.list() if dest.alias_name == alias_name]
        if not matches:
            raise ScannerError("Failed to find newly added destination.")
        if len(matches) > 1:
            logger.warning(f"{len(matches)} destinations share alias {alias_name!r}, "
                           f"returning {matches[0].id}")
        return matches[0]

    async def update(self,
                     id_: str,
                     alias_name: str | None = None,
                     destination: str | None = None,
                     type_: DestinationType | None = None) -> Destination:
        await self.ready()
        cached = self._destination_cache.get(id_)
        if cached is None:
            raise ScannerError("Scan destination is not yet registered.")

        alias_name = cached.alias_name if alias_name is None else alias_name
        destination = cached.destination if destination is None else destination
        type_ = cached.type if type_ is None else type_
        self._validate_destination(alias_name, destination, type_)

        data = Destination(id=id_, alias_name=alias_name,
                           destination=destination, type=type_)
        resp = await self._auth_context.send("PUT", self._path, data.model_dump())
        if resp != {"message": EMPTY_RESPONSE_MESSAGE}:
            raise ScannerError("Failed to update scanner destination.")

        self._destination_cache[id_] = data
        return data

    async def remove(self, id_: str) -> Any:
        await self.ready()
        resp = await self._auth_context.send("DELETE", self._path, {"id": id_})
        self._destination_cache.pop(id_, None)
        return resp

    @staticmethod
    def _validate_destination(alias_name: str, destination: str, type_: str) -> None:
        if not 1 <= len(alias_name) <= 32:
            raise ScannerError("Scan destination name must be 1 to 32 characters.")
        if not 4 <= len(destination) <= 544:
            raise ScannerError("Scan destination must be 4 to 544 characters.")
        if type_ not in VALID_DESTINATION_TYPES:
            raise ScannerError(f"Invalid scan destination type {type_}.")
