"""Тесты Request/Response/UploadPart."""

import io

from twitter_rest.core.config import ConnectionOptions
from twitter_rest.core.messages import Request, Response, UploadPart, is_file_like


class TestRequest:

    def test_method_is_upper_cased(self):
        assert Request('post', 'https://api.twitter.com').method == 'POST'

    def test_has_body_for_post_put_patch(self):
        for method in ('POST', 'PUT', 'PATCH'):
            assert Request(method, 'https://api.twitter.com').has_body
        for method in ('GET', 'DELETE', 'HEAD'):
            assert not Request(method, 'https://api.twitter.com').has_body

    def test_needs_encoding(self):
        """Только непустые params еще не закодированного тела."""
        assert Request('POST', 'u', params={'status': 'hi'}).needs_encoding
        assert not Request('POST', 'u').needs_encoding
        assert not Request('POST', 'u', params={'status': 'hi'}, body=b'x').needs_encoding
        assert not Request('GET', 'u', params={'count': 5}).needs_encoding

    def test_default_options(self):
        request = Request('GET', 'u')
        assert request.options == ConnectionOptions()

    def test_request_id_is_unique(self):
        assert Request('GET', 'u').request_id != Request('GET', 'u').request_id


class TestResponse:

    def test_headers_case_insensitive(self):
        response = Response(200, headers={'content-type': 'application/json'})
        assert response.content_type == 'application/json'
        assert response.headers['CONTENT-TYPE'] == 'application/json'

    def test_text_and_ok(self):
        response = Response(200, body='привет'.encode('utf-8'))
        assert response.text == 'привет'
        assert response.ok
        assert not Response(404).ok

    def test_not_parsed_by_default(self):
        response = Response(200)
        assert response.parsed is None
        assert response.is_parsed is False


class TestUploadPart:

    def test_read_stream(self):
        part = UploadPart(io.BytesIO(b'data'), 'image/png', 'photo.png')
        assert part.read() == b'data'

    def test_read_bytes(self):
        assert UploadPart(b'raw').read() == b'raw'
        assert UploadPart(b'raw').content_type == 'application/octet-stream'


class TestIsFileLike:

    def test_named_binary_file(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b'\x89PNG')
        with open(path, 'rb') as f:
            assert is_file_like(f)

    def test_text_file_is_not_upload(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with open(path, 'r') as f:
            assert not is_file_like(f)

    def test_unnamed_stream_is_not_file(self):
        assert not is_file_like(io.BytesIO(b'data'))

    def test_scalars(self):
        for value in ('text', b'bytes', 42, None, {'io': io.BytesIO()}):
            assert not is_file_like(value)
