"""
Evidence service - uploads complaint evidence to Firebase Storage.

Files of one batch upload concurrently. Policy on failure is
partial-accept: URLs of files that made it are kept, and the batch as a
whole is reported as failed once.
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote

import requests
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions

from safety_hub.config.firebase import get_bucket
from safety_hub.core.exceptions import UploadError
from safety_hub.core.settings import settings

logger = logging.getLogger(__name__)

DOWNLOAD_URL_TEMPLATE = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"


@dataclass
class EvidenceFile:
    filename: str
    data: bytes
    content_type: Optional[str] = None


@dataclass
class UploadBatchResult:
    urls: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.failures)


def evidence_path(user_id: str, filename: str) -> str:
    safe_name = filename.replace("/", "_") or "evidence"
    return f"evidence/{user_id}/{int(time.time() * 1000)}_{safe_name}"


class EvidenceStorage:
    """
    Object storage client: put bytes, get back a download URL.
    """

    def __init__(self, bucket):
        self.bucket = bucket

    def put(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        token = str(uuid.uuid4())
        blob = self.bucket.blob(path)
        # Same token metadata the Firebase client SDKs use for download URLs
        blob.metadata = {"firebaseStorageDownloadTokens": token}
        try:
            blob.upload_from_string(data, content_type=content_type or "application/octet-stream")
        except (
            google_exceptions.GoogleAPIError,
            google_auth_exceptions.GoogleAuthError,
            requests.RequestException,
        ) as e:
            logger.error(f"Upload of {path} failed: {e}")
            raise UploadError(f"Upload of {path} failed") from e

        return DOWNLOAD_URL_TEMPLATE.format(
            bucket=self.bucket.name,
            path=quote(path, safe=""),
            token=token,
        )


class EvidenceUploader:
    """
    Runs a batch of uploads concurrently on worker threads.
    """

    def __init__(self, storage: EvidenceStorage, max_bytes: int = settings.EVIDENCE_MAX_BYTES):
        self.storage = storage
        self.max_bytes = max_bytes

    def _upload_one(self, user_id: str, evidence: EvidenceFile) -> str:
        if not evidence.data:
            raise UploadError(f"{evidence.filename} is empty")
        if len(evidence.data) > self.max_bytes:
            raise UploadError(f"{evidence.filename} exceeds {self.max_bytes} bytes")
        return self.storage.put(evidence_path(user_id, evidence.filename), evidence.data, evidence.content_type)

    async def upload_batch(self, user_id: str, files: List[EvidenceFile]) -> UploadBatchResult:
        """
        Upload every file concurrently and wait for the whole batch.

        URLs are collected in completion order.
        """
        result = UploadBatchResult()
        if not files:
            return result

        loop = asyncio.get_running_loop()

        async def upload(evidence: EvidenceFile):
            try:
                url = await loop.run_in_executor(None, self._upload_one, user_id, evidence)
            except UploadError as e:
                result.failures.append(evidence.filename)
                logger.warning(f"Evidence upload failed: {e.message}")
                return
            except Exception as e:
                # One file's failure must not drop the batch's other URLs
                result.failures.append(evidence.filename)
                logger.exception(f"Unexpected error uploading {evidence.filename}: {e}")
                return
            result.urls.append(url)

        await asyncio.gather(*(upload(evidence) for evidence in files))

        logger.info(f"Evidence batch for {user_id}: {len(result.urls)} uploaded, {len(result.failures)} failed")
        return result


_evidence_uploader: Optional[EvidenceUploader] = None


def get_evidence_uploader() -> EvidenceUploader:
    global _evidence_uploader
    if _evidence_uploader is None:
        _evidence_uploader = EvidenceUploader(EvidenceStorage(get_bucket()))
    return _evidence_uploader
