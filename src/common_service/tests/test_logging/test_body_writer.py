# src/common_service/tests/test_logging/test_body_writer.py
import pytest

from common_service.core.logging.body_writer import BodyLogWriter, ResponseWriter

from conftest import SendRecorder, start_response


def test_response_writer_defaults_before_start():
    writer = ResponseWriter(SendRecorder())
    assert writer.status == 0
    assert writer.headers.get("content-type") is None


@pytest.mark.asyncio
async def test_response_writer_tracks_status_and_headers():
    recorder = SendRecorder()
    writer = ResponseWriter(recorder)

    await start_response(writer, 404, "application/problem+json")

    assert writer.status == 404
    assert writer.headers["Content-Type"] == "application/problem+json"
    assert recorder.messages[0]["type"] == "http.response.start"


@pytest.mark.asyncio
async def test_body_log_writer_mirrors_and_forwards():
    recorder = SendRecorder()
    capture = BodyLogWriter(ResponseWriter(recorder))

    await start_response(capture)
    first = await capture.write(b"abc")
    second = await capture.write(b"def", more_body=False)

    # return values of the wrapped send come back untouched
    assert (first, second) == ("sent", "sent")
    assert capture.body == b"abcdef"
    assert recorder.body == b"abcdef"
    assert [m["type"] for m in recorder.messages] == [
        "http.response.start",
        "http.response.body",
        "http.response.body",
    ]
    assert recorder.messages[-1]["more_body"] is False


@pytest.mark.asyncio
async def test_body_log_writer_reads_status_from_wrapped_writer():
    inner = ResponseWriter(SendRecorder())
    await start_response(inner, 202, "text/plain")

    capture = BodyLogWriter(inner)

    assert capture.status == 202
    assert capture.headers["content-type"] == "text/plain"


@pytest.mark.asyncio
async def test_body_log_writer_propagates_send_errors():
    async def failing_send(message):
        raise ConnectionResetError("client went away")

    capture = BodyLogWriter(ResponseWriter(failing_send))

    with pytest.raises(ConnectionResetError):
        await capture.write(b"abc")


@pytest.mark.asyncio
async def test_body_log_writer_text_replaces_invalid_utf8():
    capture = BodyLogWriter(ResponseWriter(SendRecorder()))
    await capture.write("héllo".encode("utf-8") + b"\xff")
    assert capture.text() == "héllo�"
