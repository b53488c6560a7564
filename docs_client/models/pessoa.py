from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Mapping

from docs_client.exceptions import (
    InvalidArgumentError,
    MissingRequiredFieldError,
    ResourceConflictError,
)
from docs_client.models.base import Resource, project_many
from docs_client.models.documento import Documento, encode_file
from docs_client.request import ApiResponse, Transport, get_client

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("cpf", "passaporte")
# Server-owned, never sent back on save()
READ_ONLY_FIELDS = ("id", "metas")


class Pessoa(Resource):
    """
    Person registered in the Docs API, identified by CPF or passport.
    Fields mirror whatever the API returns; `id` and `metas` are server-owned.
    """

    @classmethod
    def create(cls, fields: Mapping[str, Any], transport: Transport | None = None) -> "Pessoa":
        """
        Registers a new person.
        Corresponds to: POST /pessoa

        Raises MissingRequiredFieldError before any request when neither
        `cpf` nor `passaporte` is given, and ResourceConflictError when the
        API answers 422 (a person with those documents already exists).
        """
        if not any(key in fields for key in IDENTITY_FIELDS):
            raise MissingRequiredFieldError("CPF or Passport required")

        transport = transport or get_client()
        response = transport.post("pessoa", fields)
        if response.status_code == 422:
            raise ResourceConflictError("a person with the given document(s) already exists")

        return cls.from_payload(response.payload or {}, transport)

    @classmethod
    def find(
        cls,
        query: int | Mapping[str, Any],
        transport: Transport | None = None,
    ) -> "Pessoa | None":
        """
        Looks a person up by id or by search criteria (documents, metas).
        Corresponds to: GET /pessoa/{id} or GET /pessoa/buscar?{query}

        Any status other than 200 yields None.
        """
        transport = transport or get_client()
        if isinstance(query, Mapping):
            response = transport.get("pessoa/buscar", query)
        elif isinstance(query, int) and not isinstance(query, bool):
            response = transport.get(f"pessoa/{query}")
        else:
            raise InvalidArgumentError("parameter must be integer or mapping")

        if response.status_code == 200:
            return cls.from_payload(response.payload or {}, transport)
        _log_absence("person lookup", query, response)
        return None

    def save(self) -> "Pessoa":
        """
        Sends the current fields (minus id and metas) to the API.
        Corresponds to: PATCH /pessoa/{id}

        The response is not projected back and failures are not raised.
        """
        payload = {k: v for k, v in self.to_dict().items() if k not in READ_ONLY_FIELDS}
        response = self._client().patch(f"pessoa/{self.id}", payload)
        if response.status_code >= 400:
            logger.warning(f"Update of person {self.id} returned status {response.status_code}")
        return self

    def submit_document(self, document_type_id: int, extension: str, file_base64: str) -> Documento:
        return Documento.submit(self.id, document_type_id, extension, file_base64, self._client())

    def submit_document_file(self, document_type_id: int, path: str | Path) -> Documento:
        """Reads, base64-encodes and uploads a local file; the extension comes from its suffix."""
        extension, file_base64 = encode_file(path)
        return self.submit_document(document_type_id, extension, file_base64)

    def documents(self) -> list[Documento]:
        """
        Lists every document of this person, in the order the API returns them.
        Corresponds to: GET /documento/pessoa/{id}
        """
        transport = self._client()
        response = transport.get(f"documento/pessoa/{self.id}")
        if response.status_code != 200 or not isinstance(response.payload, list):
            _log_absence("document listing", self.id, response)
            return []
        return project_many(response.payload, lambda item: Documento.from_payload(item, transport))

    def document_by_type(self, document_type_id: int) -> Documento | None:
        """
        Corresponds to: GET /documento/pessoa/{id}?tipo_documento_id={document_type_id}
        """
        transport = self._client()
        response = transport.get(
            f"documento/pessoa/{self.id}", {"tipo_documento_id": document_type_id}
        )
        if response.status_code == 200:
            return Documento.from_payload(response.payload or {}, transport)
        _log_absence("document lookup", document_type_id, response)
        return None


def _log_absence(what: str, query: Any, response: ApiResponse) -> None:
    # 404 is the expected "not found"; anything else is still reported as None
    if response.status_code != 404:
        logger.warning(f"{what} for {query!r} returned status {response.status_code}; treating as not found")
