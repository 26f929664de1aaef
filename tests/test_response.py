import pytest

from goweb.response import Headers, ResponseRecorder, ResponseWriter


@pytest.fixture
def pair():
    recorder = ResponseRecorder()
    writer = ResponseWriter()
    writer.reset(recorder)
    return recorder, writer


def test_reset():
    recorder = ResponseRecorder()
    writer = ResponseWriter()
    writer.reset(recorder)
    assert writer.size == -1
    assert writer.status == 200
    assert writer.writer is recorder
    assert writer.written is False


def test_write_header(pair):
    recorder, writer = pair
    writer.write_header(300)
    assert writer.written is False
    assert writer.status == 300
    assert recorder.code != 300

    writer.write_header(-1)
    assert writer.status == 300


def test_write_headers_now(pair):
    recorder, writer = pair
    writer.write_header(300)
    writer.write_header_now()
    assert writer.written is True
    assert writer.size == 0
    assert recorder.code == 300

    writer.size = 10
    writer.write_header_now()
    assert writer.size == 10


def test_write(pair):
    recorder, writer = pair
    assert writer.write(b"hola") == 4
    assert writer.size == 4
    assert writer.status == 200
    assert recorder.code == 200
    assert recorder.text() == "hola"

    assert writer.write(b" adios") == 6
    assert writer.size == 10
    assert recorder.text() == "hola adios"


def test_write_string(pair):
    recorder, writer = pair
    assert writer.write_string("hey") == 3
    assert recorder.body == bytearray(b"hey")


def test_hijack_and_close_notify(pair):
    recorder, writer = pair
    with pytest.raises(TypeError):
        writer.hijack()
    assert writer.written is True
    with pytest.raises(TypeError):
        writer.close_notify()
    writer.flush()
    assert recorder.flushed is True


def test_flush_sends_status(pair):
    recorder, writer = pair
    writer.write_header(500)
    writer.flush()
    assert recorder.code == 500
    assert recorder.flushed is True


def test_pusher_absent(pair):
    _, writer = pair
    assert writer.pusher() is None


def test_headers_case_insensitive():
    headers = Headers()
    headers.set("x-request-id", "abc")
    assert headers.get("X-Request-ID") == "abc"
    assert "X-REQUEST-ID" in headers
    assert list(headers) == ["X-Request-Id"]
    headers.add("x-request-id", "def")
    assert headers.get_all("X-Request-Id") == ["abc", "def"]
    assert headers.get("missing", "none") == "none"


def test_writer_headers_delegate(pair):
    recorder, writer = pair
    writer.headers.set("Content-Type", "text/plain")
    assert recorder.headers.get("content-type") == "text/plain"


def test_recorder_rejects_invalid_code():
    with pytest.raises(ValueError):
        ResponseRecorder().write_header(42)


def test_recorder_first_status_wins():
    recorder = ResponseRecorder()
    recorder.write_header(404)
    recorder.write_header(500)
    assert recorder.code == 404