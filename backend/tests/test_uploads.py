import io

import pytest
from starlette.datastructures import Headers, UploadFile

from sitecms.core.errors import InvalidFile, PayloadTooLarge, StorageError
from sitecms.services.uploads import MediaStorage, generate_filename, is_allowed


def _upload(name: str, content_type: str, data: bytes = b"\x00" * 64) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize(
    "name,ctype,ok",
    [
        ("clip.mp4", "video/mp4", True),
        ("song.MP3", "application/octet-stream", True),
        ("movie.mov", "", True),
        ("renamed.bin", "audio/mpeg", True),
        ("noext", "video/quicktime", True),
        ("virus.exe", "application/octet-stream", False),
        ("photo.jpg", "image/jpeg", False),
        ("mp4", "text/plain", False),
    ],
)
def test_extension_or_mime_is_enough(name, ctype, ok):
    assert is_allowed(name, ctype) is ok


def test_generated_name_keeps_only_the_extension():
    a = generate_filename("My Holiday Clip.mp4")
    b = generate_filename("My Holiday Clip.mp4")
    assert a.endswith(".mp4")
    assert "Holiday" not in a
    assert a != b


def test_save_writes_file_under_generated_name(tmp_path):
    storage = MediaStorage(tmp_path / "media", max_bytes=1024)
    name = storage.save(_upload("clip.mp4", "video/mp4", b"abc"))
    assert name != "clip.mp4"
    assert name.endswith(".mp4")
    assert (tmp_path / "media" / name).read_bytes() == b"abc"


def test_save_rejects_missing_or_disallowed_file(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=1024)
    with pytest.raises(InvalidFile):
        storage.save(None)
    with pytest.raises(InvalidFile):
        storage.save(_upload("virus.exe", "application/octet-stream"))
    assert list(tmp_path.iterdir()) == []


def test_save_enforces_size_cap_and_leaves_nothing_behind(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=10)
    with pytest.raises(PayloadTooLarge):
        storage.save(_upload("clip.mp4", "video/mp4", b"x" * 11))
    assert list(tmp_path.iterdir()) == []


def test_file_exactly_at_cap_is_accepted(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=10)
    name = storage.save(_upload("a.mp3", "audio/mpeg", b"x" * 10))
    assert storage.exists(name)


def test_delete_tolerates_missing_file(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=1024)
    name = storage.save(_upload("a.mov", "video/quicktime"))
    assert storage.delete(name) is True
    assert storage.delete(name) is False


def test_delete_refuses_paths_outside_media_dir(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=1024)
    with pytest.raises(StorageError):
        storage.delete("../site.db")


def test_long_or_odd_extension_is_dropped_from_generated_name():
    assert "." not in generate_filename("clip." + "x" * 300)
    assert "." not in generate_filename("clip.m p4")
    assert generate_filename("clip.MOV").endswith(".MOV")


def test_long_extension_with_allowed_mime_still_saves(tmp_path):
    storage = MediaStorage(tmp_path, max_bytes=1024)
    name = storage.save(_upload("clip." + "a" * 300, "video/mp4", b"abc"))
    assert "." not in name
    assert (tmp_path / name).read_bytes() == b"abc"
