# tests/test_media_uploader.py
"""Unit tests for the Cloudinary uploader (httpx calls are served by a MockTransport)."""

import hashlib

import httpx
import pytest

from app.errors import UploadError
from app.services.media_uploader import UPLOAD_TRANSFORMATION, CloudinaryUploader, Photo, sign_params


def make_uploader(handler, **overrides):
    options = dict(cloud_name="demo", api_key="key-123", api_secret="s3cr3t", timeout=2.0,
                   transport=httpx.MockTransport(handler))
    options.update(overrides)
    return CloudinaryUploader(**options)


class TestSignature:
    def test_sorted_params_then_secret(self):
        expected = hashlib.sha1(b"timestamp=1700000000&transformation=c_limit,h_600,w_800abc").hexdigest()
        assert sign_params({"transformation": "c_limit,h_600,w_800", "timestamp": 1700000000}, "abc") == expected

    def test_empty_values_are_skipped(self):
        assert sign_params({"timestamp": 1, "folder": ""}, "x") == sign_params({"timestamp": 1}, "x")


class TestUpload:
    @pytest.mark.asyncio
    async def test_returns_secure_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/image/upload/a.jpg"})

        url = await make_uploader(handler).upload(Photo(content=b"\xff\xd8data", filename="a.jpg"))

        assert url == "https://res.cloudinary.com/demo/image/upload/a.jpg"
        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
        assert b'name="signature"' in seen["body"]
        assert b'name="api_key"' in seen["body"]
        assert UPLOAD_TRANSFORMATION.encode() in seen["body"]
        assert b"\xff\xd8data" in seen["body"]

    @pytest.mark.asyncio
    async def test_error_status_raises_upload_error(self):
        uploader = make_uploader(lambda request: httpx.Response(401, json={"error": {"message": "Invalid Signature"}}))
        with pytest.raises(UploadError):
            await uploader.upload(Photo(content=b"data"))

    @pytest.mark.asyncio
    async def test_timeout_raises_upload_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UploadError, match="timed out"):
            await make_uploader(handler).upload(Photo(content=b"data"))

    @pytest.mark.asyncio
    async def test_connection_failure_raises_upload_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadError):
            await make_uploader(handler).upload(Photo(content=b"data"))

    @pytest.mark.asyncio
    async def test_reply_without_url_raises_upload_error(self):
        with pytest.raises(UploadError):
            await make_uploader(lambda request: httpx.Response(200, json={})).upload(Photo(content=b"data"))

    @pytest.mark.asyncio
    async def test_missing_credentials_never_calls_out(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"secure_url": "https://x"})

        with pytest.raises(UploadError):
            await make_uploader(handler, api_secret=None).upload(Photo(content=b"data"))
        assert calls == []
