"""Upload pipeline: validate selected files, read them, submit each to /api/parse.

A batch moves idle -> validating -> reading -> submitting -> settled. One
file failing (bad read, non-2xx, ``success: false``) never stops the rest
of the batch; that file just produces no result.
"""
import asyncio
import base64
import enum
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

import httpx

from commission_tracker.core.config import settings
from commission_tracker.schemas.parse import ParsedResult

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = [
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
]
ALLOWED_EXTENSIONS = (".pdf", ".xlsx", ".xls")
EXTENSION_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}
SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")

PARSE_PATH = "/api/parse"


class PipelineStateError(Exception):
    """Raised on a batch state transition the pipeline does not allow."""


class ParseRequestError(Exception):
    """The parse endpoint answered, but not with a usable result."""


class BatchState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    READING = "reading"
    SUBMITTING = "submitting"
    SETTLED = "settled"


ALLOWED_TRANSITIONS = {
    BatchState.IDLE: {BatchState.VALIDATING},
    # Straight to settled when nothing in the batch was accepted
    BatchState.VALIDATING: {BatchState.READING, BatchState.SETTLED},
    BatchState.READING: {BatchState.SUBMITTING},
    BatchState.SUBMITTING: {BatchState.SETTLED},
    BatchState.SETTLED: set(),
}


@dataclass
class SelectedFile:
    """A file picked for upload. Bytes are either given or read lazily from ``path``."""
    name: str
    content_type: str = ""
    data: Optional[bytes] = None
    path: Optional[Path] = None

    def __post_init__(self):
        # No declared type (or an unguessable one): fall back to the extension
        if not self.content_type:
            self.content_type = EXTENSION_CONTENT_TYPES.get(Path(self.name).suffix.lower(), "")

    @classmethod
    def from_path(cls, path) -> "SelectedFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content_type=content_type or "", path=path)

    def read_bytes(self) -> bytes:
        if self.data is None:
            if self.path is None:
                raise OSError(f"No data or path for {self.name}")
            self.data = self.path.read_bytes()
        return self.data


@dataclass
class UploadBatch:
    files: List[SelectedFile]
    state: BatchState = BatchState.IDLE
    accepted: List[SelectedFile] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    contents: List[Optional[str]] = field(default_factory=list)  # aligned with accepted
    results: List[ParsedResult] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    notice: Optional[str] = None

    def transition(self, new_state: BatchState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise PipelineStateError(f"Cannot move batch from {self.state.value} to {new_state.value}")
        logger.debug(f"Upload batch {self.state.value} -> {new_state.value}")
        self.state = new_state


def is_allowed_file(file: SelectedFile) -> bool:
    """PDF / Excel by declared content type or by extension."""
    valid_type = file.content_type in ALLOWED_CONTENT_TYPES
    valid_extension = file.name.lower().endswith(ALLOWED_EXTENSIONS)
    return valid_type or valid_extension


def is_spreadsheet(file: SelectedFile) -> bool:
    return "excel" in file.content_type or file.name.lower().endswith(SPREADSHEET_EXTENSIONS)


def rejection_notice(names: List[str]) -> Optional[str]:
    if not names:
        return None
    return f"Invalid file type(s): {', '.join(names)}\nOnly PDF and Excel files are allowed."


def read_file_content(file: SelectedFile) -> str:
    """Spreadsheets go as text when they decode cleanly, everything else as base64."""
    raw = file.read_bytes()
    if is_spreadsheet(file):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            # Binary workbook (xlsx is a zip)
            pass
    return base64.b64encode(raw).decode("ascii")


class UploadPipeline:
    """
    Runs one batch of selected files through validation, reading and submission.

    ``on_parsed`` fires for every successful result and ``on_file_processed``
    once per accepted file when its submission settles, success or not.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        concurrency: Optional[int] = None,
        on_parsed: Optional[Callable[[ParsedResult], None]] = None,
        on_file_processed: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.concurrency = max(1, concurrency or settings.UPLOAD_CONCURRENCY)
        self.on_parsed = on_parsed
        self.on_file_processed = on_file_processed

    async def run(self, files: List[SelectedFile]) -> UploadBatch:
        batch = UploadBatch(files=list(files))

        batch.transition(BatchState.VALIDATING)
        self.validate(batch)
        if not batch.accepted:
            batch.transition(BatchState.SETTLED)
            return batch

        batch.transition(BatchState.READING)
        self.read(batch)

        batch.transition(BatchState.SUBMITTING)
        await self.submit(batch)

        batch.transition(BatchState.SETTLED)
        logger.info(
            f"Upload batch settled: {len(batch.results)} parsed, "
            f"{len(batch.failed)} failed, {len(batch.rejected)} rejected"
        )
        return batch

    def validate(self, batch: UploadBatch) -> None:
        for file in batch.files:
            if is_allowed_file(file):
                batch.accepted.append(file)
                logger.info(f"File uploaded: {file.name}")
            else:
                batch.rejected.append(file.name)

        batch.notice = rejection_notice(batch.rejected)
        if batch.notice:
            logger.warning(batch.notice.replace("\n", " "))

    def read(self, batch: UploadBatch) -> None:
        for file in batch.accepted:
            try:
                batch.contents.append(read_file_content(file))
            except OSError as e:
                logger.error(f"Error reading file {file.name}: {e}")
                batch.contents.append(None)

    async def submit(self, batch: UploadBatch) -> None:
        pending = []
        for file, content in zip(batch.accepted, batch.contents):
            if content is None:
                self._file_processed(file.name)
            else:
                pending.append((file, content))

        if self.concurrency == 1:
            outcomes = []
            for file, content in pending:
                outcomes.append(await self._submit_one(file, content))
        else:
            semaphore = asyncio.Semaphore(self.concurrency)

            async def bounded(file: SelectedFile, content: str) -> Optional[ParsedResult]:
                async with semaphore:
                    return await self._submit_one(file, content)

            outcomes = await asyncio.gather(*(bounded(f, c) for f, c in pending))

        # Selection order, whatever order the calls finished in
        results = iter(outcomes)
        for file, content in zip(batch.accepted, batch.contents):
            result = None if content is None else next(results)
            if result is None:
                batch.failed.append(file.name)
            else:
                batch.results.append(result)

    async def parse_file(self, file: SelectedFile, content: str) -> ParsedResult:
        response = await self.client.post(
            PARSE_PATH,
            json={
                "fileContent": content,
                "fileName": file.name,
                "fileType": file.content_type,
            },
        )
        if response.is_error:
            raise ParseRequestError(f"HTTP error! status: {response.status_code}")

        payload = response.json()
        if not payload.get("success"):
            raise ParseRequestError(payload.get("error") or "Parsing failed")
        return ParsedResult.model_validate(payload.get("data"))

    async def _submit_one(self, file: SelectedFile, content: str) -> Optional[ParsedResult]:
        try:
            result = await self.parse_file(file, content)
        except (httpx.HTTPError, ParseRequestError, ValueError) as e:
            logger.error(f"Error parsing file {file.name}: {e}")
            result = None

        if result is not None and self.on_parsed:
            self.on_parsed(result)
        self._file_processed(file.name)
        return result

    def _file_processed(self, name: str) -> None:
        if self.on_file_processed:
            self.on_file_processed(name)
