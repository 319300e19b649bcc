import pytest

from inventory.client.photo import (
    DataUriPhotoAttachment,
    FilePhotoAttachment,
    select_photo_attachment,
)


def test_file_attachment(tmp_path):
    path = tmp_path / "shelf.png"
    path.write_bytes(b"png-bytes")

    upload = FilePhotoAttachment().to_upload(str(path))
    assert upload == ("shelf.png", b"png-bytes", "image/png")


def test_file_attachment_raw_bytes():
    assert FilePhotoAttachment().to_upload(b"raw") == ("photo.jpg", b"raw", "image/jpeg")


def test_no_photo_means_no_files():
    assert FilePhotoAttachment().to_files(None) is None
    assert DataUriPhotoAttachment().to_files("") is None


def test_data_uri_attachment():
    files = DataUriPhotoAttachment().to_files("data:image/jpeg;base64,aGVsbG8=")
    filename, content, content_type = files["photo"]
    assert content == b"hello"
    assert content_type == "image/jpeg"
    assert filename.startswith("photo.")


@pytest.mark.parametrize("source", [
    "hello",
    "data:text/plain;base64,aGVsbG8=",
    "data:image/png;base64,not base64!",
])
def test_data_uri_rejects_bad_input(source):
    with pytest.raises(ValueError):
        DataUriPhotoAttachment().to_upload(source)


def test_select_photo_attachment():
    assert isinstance(select_photo_attachment("file"), FilePhotoAttachment)
    assert isinstance(select_photo_attachment("DATA_URI"), DataUriPhotoAttachment)
    with pytest.raises(ValueError):
        select_photo_attachment("s3")
