"""Tests for the file browser HTTP API."""

from io import BytesIO

import pytest
from httpx import AsyncClient
from PIL import Image

from folderview.services.file_server import FileServer, ServedFile

AUDIO_BYTES = bytes(range(256)) * 4
VIDEO_BYTES = bytes(1000)


class TestDirectoryPagination:
    @pytest.mark.asyncio
    async def test_root_listing(self, client: AsyncClient):
        resp = await client.get("/api/directory-pagination")
        assert resp.status_code == 200
        data = resp.json()
        assert data["currentPath"] == "/"
        assert data["parentPath"] == "/"
        assert data["canGoUp"] is False
        assert data["total"] == 6
        assert data["offset"] == 0
        assert data["limit"] == 50
        assert data["hasMore"] is False
        assert data["sortBy"] == "name"
        assert data["sortOrder"] == "asc"

    @pytest.mark.asyncio
    async def test_item_shapes(self, client: AsyncClient):
        resp = await client.get("/api/directory-pagination", params={"path": "/"})
        items = {item["name"]: item for item in resp.json()["items"]}

        photo = items["PHOTO.JPG"]
        assert photo["type"] == "file"
        assert photo["path"] == "/PHOTO.JPG"
        assert photo["isImage"] is True
        assert photo["isVideo"] is False
        assert photo["isAudio"] is False
        assert photo["isZip"] is False
        assert "modifiedDate" in photo

        folder = items["photos"]
        assert folder["type"] == "folder"
        assert folder["path"] == "/photos"
        assert len(folder["previewImages"]) == 4
        assert all(p.startswith("/photos/") for p in folder["previewImages"])

        for item in items.values():
            assert "absolutePath" not in item
            assert "absolute_path" not in item

    @pytest.mark.asyncio
    async def test_subdirectory(self, client: AsyncClient):
        resp = await client.get("/api/directory-pagination", params={"path": "/music"})
        data = resp.json()
        assert data["currentPath"] == "/music"
        assert data["parentPath"] == "/"
        assert data["canGoUp"] is True
        assert [i["name"] for i in data["items"]] == ["song.mp3"]
        assert data["items"][0]["isAudio"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order", ["asc", "desc"])
    async def test_type_sort_keeps_folders_first(self, client: AsyncClient, order):
        resp = await client.get(
            "/api/directory-pagination", params={"sortBy": "type", "sortOrder": order}
        )
        types = [i["type"] for i in resp.json()["items"]]
        assert types == ["folder"] * 3 + ["file"] * 3

    @pytest.mark.asyncio
    async def test_pages_cover_listing(self, client: AsyncClient):
        full = await client.get("/api/directory-pagination", params={"sortBy": "date"})
        expected = [i["name"] for i in full.json()["items"]]

        collected = []
        offset = 0
        while True:
            resp = await client.get(
                "/api/directory-pagination",
                params={"sortBy": "date", "offset": offset, "limit": 4},
            )
            data = resp.json()
            collected += [i["name"] for i in data["items"]]
            offset += 4
            if not data["hasMore"]:
                break
        assert collected == expected

    @pytest.mark.asyncio
    async def test_offset_past_end(self, client: AsyncClient):
        resp = await client.get("/api/directory-pagination", params={"offset": 100})
        assert resp.status_code == 200
        data = resp.json()
        assert data["items"] == []
        assert data["hasMore"] is False
        assert data["total"] == 6

    @pytest.mark.asyncio
    async def test_traversal_forbidden(self, client: AsyncClient):
        resp = await client.get("/api/directory-pagination", params={"path": "/../media2"})
        assert resp.status_code == 403
        assert resp.json() == {"detail": "Access denied"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/missing", "/notes.txt"])
    async def test_not_found(self, client: AsyncClient, path):
        resp = await client.get("/api/directory-pagination", params={"path": path})
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Directory not found"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [{"sortBy": "size"}, {"sortOrder": "up"}, {"offset": -1}, {"limit": 0}],
    )
    async def test_invalid_query(self, client: AsyncClient, params):
        resp = await client.get("/api/directory-pagination", params=params)
        assert resp.status_code == 422


class TestMediaStreaming:
    @pytest.mark.asyncio
    async def test_full_audio(self, client: AsyncClient):
        resp = await client.get("/api/audio", params={"path": "/music/song.mp3"})
        assert resp.status_code == 200
        assert resp.content == AUDIO_BYTES
        assert resp.headers["content-type"] == "audio/mpeg"
        assert resp.headers["content-length"] == "1024"
        assert resp.headers["accept-ranges"] == "bytes"
        assert resp.headers["cache-control"] == "public, max-age=3600"
        assert resp.headers["content-disposition"].startswith("inline")

    @pytest.mark.asyncio
    async def test_partial_audio(self, client: AsyncClient):
        resp = await client.get(
            "/api/audio",
            params={"path": "/music/song.mp3"},
            headers={"Range": "bytes=100-199"},
        )
        assert resp.status_code == 206
        assert resp.content == AUDIO_BYTES[100:200]
        assert resp.headers["content-range"] == "bytes 100-199/1024"
        assert resp.headers["content-length"] == "100"

    @pytest.mark.asyncio
    async def test_suffix_range_video(self, client: AsyncClient):
        resp = await client.get(
            "/api/video",
            params={"path": "/videos/clip.mp4"},
            headers={"Range": "bytes=-100"},
        )
        assert resp.status_code == 206
        assert resp.headers["content-range"] == "bytes 900-999/1000"
        assert resp.headers["content-type"] == "video/mp4"
        assert resp.content == VIDEO_BYTES[900:]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["bytes=2000-3000", "bytes=0-9,20-29", "garbage"])
    async def test_unusable_range_serves_everything(self, client: AsyncClient, header):
        resp = await client.get(
            "/api/video",
            params={"path": "/videos/clip.mp4"},
            headers={"Range": header},
        )
        assert resp.status_code == 200
        assert resp.content == VIDEO_BYTES
        assert "content-range" not in resp.headers

    @pytest.mark.asyncio
    async def test_wrong_endpoint_for_extension(self, client: AsyncClient):
        resp = await client.get("/api/video", params={"path": "/music/song.mp3"})
        assert resp.status_code == 415
        assert resp.json() == {"detail": "File type not supported"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("endpoint", ["/api/image", "/api/audio", "/api/video", "/api/file"])
    async def test_path_required(self, client: AsyncClient, endpoint):
        resp = await client.get(endpoint)
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Path parameter is required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("endpoint", ["/api/image", "/api/file"])
    async def test_traversal_forbidden(self, client: AsyncClient, endpoint):
        resp = await client.get(endpoint, params={"path": "/../secret.txt"})
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_missing_file(self, client: AsyncClient):
        resp = await client.get("/api/audio", params={"path": "/music/missing.mp3"})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_directory_is_not_served(self, client: AsyncClient):
        resp = await client.get("/api/file", params={"path": "/photos"})
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Not a file"}

    @pytest.mark.asyncio
    async def test_file_removed_after_validation(self, client: AsyncClient, media_root, monkeypatch):
        vanished = ServedFile(
            absolute_path=str(media_root / "music" / "removed.mp3"),
            name="removed.mp3",
            extension="mp3",
            size=1024,
            content_type="audio/mpeg",
        )
        monkeypatch.setattr(FileServer, "open_file", lambda self, requested, allowed=None: vanished)

        resp = await client.get("/api/audio", params={"path": "/music/removed.mp3"})
        assert resp.status_code == 404
        assert resp.json() == {"detail": "File not found"}


class TestImages:
    @pytest.mark.asyncio
    async def test_original_image(self, client: AsyncClient, media_root):
        resp = await client.get("/api/image", params={"path": "/photos/big.jpg"})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/jpeg"
        assert resp.content == (media_root / "photos" / "big.jpg").read_bytes()

    @pytest.mark.asyncio
    async def test_thumbnail(self, client: AsyncClient, settings):
        resp = await client.get(
            "/api/image", params={"path": "/photos/big.jpg", "thumbnail": "true"}
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/jpeg"
        with Image.open(BytesIO(resp.content)) as img:
            assert max(img.size) <= settings.thumbnail_size

    @pytest.mark.asyncio
    async def test_svg_thumbnail_falls_back_to_original(self, client: AsyncClient, media_root):
        svg = "<svg xmlns='http://www.w3.org/2000/svg' width='10' height='10'/>"
        (media_root / "photos" / "logo.svg").write_text(svg)
        resp = await client.get(
            "/api/image", params={"path": "/photos/logo.svg", "thumbnail": "true"}
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/svg+xml"
        assert resp.text == svg

    @pytest.mark.asyncio
    async def test_non_image_rejected(self, client: AsyncClient):
        resp = await client.get("/api/image", params={"path": "/notes.txt"})
        assert resp.status_code == 415


class TestDownload:
    @pytest.mark.asyncio
    async def test_attachment(self, client: AsyncClient):
        resp = await client.get("/api/file", params={"path": "/notes.txt"})
        assert resp.status_code == 200
        assert resp.text == "hello"
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.headers["cache-control"] == "no-cache"
        assert resp.headers["content-disposition"].startswith("attachment;")
        assert 'filename="notes.txt"' in resp.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_non_ascii_name_is_encoded(self, client: AsyncClient, media_root):
        (media_root / "資料.txt").write_text("data")
        resp = await client.get("/api/file", params={"path": "/資料.txt"})
        assert resp.status_code == 200
        assert "filename*=UTF-8''%E8%B3%87%E6%96%99.txt" in resp.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_unknown_extension_is_octet_stream(self, client: AsyncClient, media_root):
        (media_root / "blob.bin").write_bytes(b"\x00\x01")
        resp = await client.get("/api/file", params={"path": "/blob.bin"})
        assert resp.headers["content-type"] == "application/octet-stream"


class TestExtractZip:
    @pytest.mark.asyncio
    async def test_extracts_next_to_archive(self, client: AsyncClient, media_root):
        resp = await client.post("/api/extract-zip", params={"path": "/archive.zip"})
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "ZIP file extracted successfully",
            "extractedTo": "/archive",
        }
        assert (media_root / "archive" / "inside.txt").exists()

        listing = await client.get("/api/directory-pagination", params={"path": "/archive"})
        assert {i["name"] for i in listing.json()["items"]} == {"inside.txt", "nested"}

    @pytest.mark.asyncio
    async def test_requires_zip_extension(self, client: AsyncClient):
        resp = await client.post("/api/extract-zip", params={"path": "/notes.txt"})
        assert resp.status_code == 415

    @pytest.mark.asyncio
    async def test_missing_path(self, client: AsyncClient):
        resp = await client.post("/api/extract-zip")
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_broken_archive(self, client: AsyncClient, media_root):
        (media_root / "broken.zip").write_bytes(b"nope")
        resp = await client.post("/api/extract-zip", params={"path": "/broken.zip"})
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Failed to extract ZIP file"}
