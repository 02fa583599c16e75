'''
Print job operations of the authenticated printer.
'''
from pathlib import Path
from typing import Any, Literal
from urllib.parse import parse_qsl, urlencode, urlsplit
from pydantic import ValidationError
from epson_connect.exceptions import PrinterError, PrintSettingError
from epson_connect.models.print_settings import PrintSettings
from epson_connect.utils.logger import logger
from epson_connect.utils.token_manager import AuthContext

Operator = Literal["user", "operator"]

VALID_EXTENSIONS = {
    "doc", "docx", "xls", "xlsx", "ppt", "pptx", "pdf",
    "jpeg", "jpg", "bmp", "gif", "png", "tiff",
}
VALID_OPERATORS = {"user", "operator"}
CANCELABLE_STATUSES = {"pending", "pending_held"}


class Printer:
    """
    Thin wrapper around the printing endpoints of one device.
    All calls go through the shared AuthContext.
    """

    def __init__(self, auth_context: AuthContext):
        if not isinstance(auth_context, AuthContext):
            raise PrinterError("AuthContext instance required")
        self._auth_context = auth_context

    @property
    def device_id(self) -> str:
        return self._auth_context.device_id

    @property
    def _path(self) -> str:
        return f"/api/1/printing/printers/{self.device_id}"

    async def capabilities(self, mode: str) -> dict[str, Any]:
        return await self._auth_context.send("GET", f"{self._path}/capability/{mode}")

    async def print_setting(self, settings: PrintSettings | dict | None = None) -> dict[str, Any]:
        '''
        Create a print job. The merged settings are attached to the
        returned job data under "settings".
        '''
        try:
            merged = PrintSettings.model_validate(settings or {})
        except ValidationError as exc:
            raise PrintSettingError(str(exc)) from exc

        merged_data = merged.model_dump()
        response = await self._auth_context.send("POST", f"{self._path}/jobs", merged_data)
        response["settings"] = merged_data
        logger.info(f"Created print job {response.get('id')} ({merged.job_name})")
        return response

    async def upload_file(self, upload_uri: str, file_path: str, print_mode: str) -> Any:
        extension = Path(urlsplit(file_path).path).suffix.lstrip(".").lower()
        if extension not in VALID_EXTENSIONS:
            raise PrinterError(f"{extension} is not a valid printing extension.")

        url = urlsplit(upload_uri)
        query = dict(parse_qsl(url.query))
        query["File"] = f"1.{extension}"
        path = f"{url.path}?{urlencode(query)}"

        content_type = "image/jpeg" if print_mode == "photo" else "application/octet-stream"

        if file_path.startswith(("http://", "https://")):
            download = await self._auth_context.http_client.get(file_path)
            download.raise_for_status()
            data = download.content
        else:
            data = Path(file_path).read_bytes()

        logger.debug(f"Uploading {len(data)} bytes from {file_path}")
        headers = {
            "Content-Type": content_type,
            "Content-Length": str(len(data)),
        }
        return await self._auth_context.send("POST", path, data, headers)

    async def execute_print(self, job_id: str) -> Any:
        return await self._auth_context.send("POST", f"{self._path}/jobs/{job_id}/print")

    async def print(self, file_path: str, settings: PrintSettings | dict | None = None) -> str:
        '''
        Create a job, upload the file and start printing. Returns the job id.
        '''
        job_data = await self.print_setting(settings)
        await self.upload_file(job_data["upload_uri"], file_path,
                               job_data["settings"]["print_mode"])
        await self.execute_print(job_data["id"])
        return job_data["id"]

    async def cancel_print(self, job_id: str, operated_by: Operator = "user") -> Any:
        if operated_by not in VALID_OPERATORS:
            raise PrinterError(f'Invalid "operated_by" value {operated_by}')

        job_status = (await self.job_info(job_id)).get("status")
        if job_status not in CANCELABLE_STATUSES:
            raise PrinterError(f"Can not cancel job with status {job_status}")

        return await self._auth_context.send("POST", f"{self._path}/jobs/{job_id}/cancel",
                                             {"operated_by": operated_by})

    async def job_info(self, job_id: str) -> dict[str, Any]:
        return await self._auth_context.send("GET", f"{self._path}/jobs/{job_id}")

    async def info(self) -> dict[str, Any]:
        return await self._auth_context.send("GET", self._path)

    async def notification(self, callback_uri: str, enabled: bool = True) -> dict[str, Any]:
        return await self._auth_context.send(
            "POST", f"{self._path}/settings/notifications",
            {"notification": enabled, "callback_uri": callback_uri})
