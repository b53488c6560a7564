from __future__ import annotations
import base64
import logging
from pathlib import Path

from docs_client.models.base import Resource
from docs_client.request import Transport, get_client

logger = logging.getLogger(__name__)


class Documento(Resource):
    """Identity document uploaded for one person under one document type."""

    @classmethod
    def submit(
        cls,
        person_id: int,
        document_type_id: int,
        extension: str,
        file_base64: str,
        transport: Transport | None = None,
    ) -> "Documento":
        """
        Uploads a document for a person.
        Corresponds to: POST /documento
        """
        transport = transport or get_client()
        response = transport.post(
            "documento",
            {
                "pessoa_id": person_id,
                "tipo_documento_id": document_type_id,
                "extensao": extension,
                "arquivo": file_base64,
            },
        )
        if response.status_code >= 400:
            logger.warning(
                f"Document upload for person {person_id} (type {document_type_id}) "
                f"returned status {response.status_code}"
            )
        return cls.from_payload(response.payload or {}, transport)


def encode_file(path: str | Path) -> tuple[str, str]:
    """Return (extension without dot, base64 text) for a local file."""
    path = Path(path)
    extension = path.suffix.lstrip(".").lower()
    return extension, base64.b64encode(path.read_bytes()).decode("ascii")
