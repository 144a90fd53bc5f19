import pytest

from rag_engine.api.routers.router_utils import status_for, to_http_exception
from rag_engine.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingValidationError,
    IngestionError,
    RagEngineException,
    UploadRejectedError,
)


@pytest.mark.parametrize(
    "error, status_code",
    [
        (UploadRejectedError("too big", reason="too_large"), 413),
        (UploadRejectedError("no text", reason="no_text"), 400),
        (DocumentNotFoundError("abc"), 404),
        (EmbeddingValidationError("bad vector", expected=8, actual=7), 502),
        (IngestionError("unclassified ingestion failure"), 500),
        (RagEngineException("unknown"), 500),
    ],
)
def test_status_for(error, status_code):
    assert status_for(error) == status_code


def test_server_errors_hide_internal_message():
    exc = to_http_exception(RagEngineException("connection string leaked", {"dsn": "secret"}))

    assert exc.status_code == 500
    assert exc.detail == "Internal server error"


def test_client_errors_carry_message():
    exc = to_http_exception(DocumentNotFoundError("abc"))

    assert exc.status_code == 404
    assert exc.detail == "Document not found: abc"
